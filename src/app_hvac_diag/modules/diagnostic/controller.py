"""
Diagnostic Controller - Orchestration layer

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-05
"""

import logging
from typing import Optional, Tuple

from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.modules.cycle.model import CycleState
from app_hvac_diag.modules.diagnostic.model import Diagnosis, DiagnosticModel
from app_hvac_diag.modules.fault_signatures.library import default_signature_catalog
from app_hvac_diag.modules.fault_signatures.model import FaultSignatureCatalog

logger = logging.getLogger(__name__)


class DiagnosticController:
    """Controller for fault diagnosis."""

    def __init__(self, signatures: Optional[FaultSignatureCatalog] = None):
        """
        Args:
            signatures: Fault signature catalog, defaults to the built-in library
        """
        self.signatures = signatures if signatures is not None else default_signature_catalog()
        self.model = DiagnosticModel(self.signatures)

    def diagnose(self, cycle: CycleState, reading: FieldReading) -> Tuple[Diagnosis, ...]:
        """
        Rank fault signatures against a computed cycle.

        Args:
            cycle: Computed cycle state
            reading: Raw reading the cycle was computed from

        Returns:
            Diagnoses by descending confidence
        """
        diagnoses = self.model.diagnose(cycle, reading)
        excluded = len(self.signatures) - len(diagnoses)
        logger.debug(
            "Diagnosis ranking: %s (%d signatures without evidence)",
            ", ".join(f"{d.signature_key}={d.confidence:.2f}" for d in diagnoses) or "none",
            excluded,
        )
        return diagnoses
