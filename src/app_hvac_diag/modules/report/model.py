"""
Report Model - Structured diagnostic report

Bundles the reading, the computed cycle and the ranked diagnoses with a
caller-supplied timestamp. Rendering and persistence belong to the callers;
this module only builds the record and serializes it.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-05
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.modules.cycle.model import CycleState
from app_hvac_diag.modules.diagnostic.model import Diagnosis, rank


@dataclass(frozen=True)
class DiagnosticReport:
    """
    Output of one diagnostic run.

    Attributes:
        reading: Field readings the run started from
        cycle: Computed cycle state
        diagnoses: Diagnoses by descending confidence
        generated_at: Caller-supplied generation time
    """
    reading: FieldReading
    cycle: CycleState
    diagnoses: Tuple[Diagnosis, ...]
    generated_at: datetime

    @property
    def primary_diagnosis(self) -> Optional[Diagnosis]:
        """Highest ranked diagnosis with non-zero confidence."""
        if self.diagnoses and self.diagnoses[0].confidence > 0:
            return self.diagnoses[0]
        return None

    def to_dict(self) -> Dict[str, Any]:
        primary = self.primary_diagnosis
        return {
            "generated_at": self.generated_at.isoformat(),
            "reading": self.reading.to_dict(),
            "cycle": self.cycle.to_dict(),
            "diagnoses": [d.to_dict() for d in self.diagnoses],
            "primary_diagnosis": primary.signature_key if primary else None,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """JSON with sorted keys; identical inputs give identical text."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True, ensure_ascii=False)


class ReportAssembler:
    """Pure assembly of DiagnosticReport records."""

    @staticmethod
    def assemble(reading: FieldReading, cycle: CycleState,
                 diagnoses: Iterable[Diagnosis], timestamp: datetime) -> DiagnosticReport:
        """
        Build a report.

        Args:
            reading: Field readings
            cycle: Cycle state computed from the reading
            diagnoses: Diagnoses for the cycle, any order
            timestamp: Generation time supplied by the caller

        Returns:
            DiagnosticReport with diagnoses in canonical order

        Raises:
            TypeError: If timestamp is not a datetime
        """
        if not isinstance(timestamp, datetime):
            raise TypeError(f"timestamp must be a datetime, got {type(timestamp).__name__}")
        return DiagnosticReport(
            reading=reading,
            cycle=cycle,
            diagnoses=tuple(rank(diagnoses)),
            generated_at=timestamp,
        )
