"""
Service Check Controller

Entry point for callers holding one or more field readings.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.core.refrigerant_catalog import RefrigerantCatalog
from app_hvac_diag.modules.fault_signatures import FaultSignatureCatalog
from app_hvac_diag.modules.report import DiagnosticReport
from app_hvac_diag.modules.service_check.model import ServiceCheckModel

logger = logging.getLogger(__name__)

ReadingInput = Union[FieldReading, Mapping[str, Any]]


class ServiceCheckController:
    """Controller for complete service checks."""

    def __init__(self,
                 catalog: Optional[RefrigerantCatalog] = None,
                 signatures: Optional[FaultSignatureCatalog] = None,
                 **cycle_options):
        """Initialize controller with model."""
        self.model = ServiceCheckModel(catalog, signatures, **cycle_options)
        self.last_report: Optional[DiagnosticReport] = None

    def run(self, reading: ReadingInput, timestamp: datetime) -> DiagnosticReport:
        """
        Run a service check on one reading.

        Args:
            reading: FieldReading or a reading record
            timestamp: Report generation time

        Returns:
            DiagnosticReport
        """
        if not isinstance(reading, FieldReading):
            reading = FieldReading.from_dict(reading)

        report = self.model.run(reading, timestamp)
        primary = report.primary_diagnosis
        logger.info(
            "Service check %s (%s): %s",
            reading.reading_id or "-", reading.refrigerant_id,
            f"{primary.name} {primary.confidence:.0%}" if primary else "no fault pattern",
        )
        self.last_report = report
        return report

    def run_many(self, readings: Iterable[ReadingInput],
                 timestamp: datetime) -> List[DiagnosticReport]:
        """
        Run service checks on several readings with a shared timestamp.

        Stops at the first reading that raises.
        """
        return [self.run(reading, timestamp) for reading in readings]

    def get_last_report(self) -> Optional[DiagnosticReport]:
        """Get last service check report."""
        return self.last_report
