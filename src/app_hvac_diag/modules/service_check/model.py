"""
Service Check Model

Chains the cycle, diagnostic and report stages into one pure run:

    FieldReading -> CycleState -> Diagnoses -> DiagnosticReport
"""

from datetime import datetime
from typing import Optional

from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.core.refrigerant_catalog import RefrigerantCatalog
from app_hvac_diag.modules.cycle import CycleController
from app_hvac_diag.modules.diagnostic import DiagnosticController
from app_hvac_diag.modules.fault_signatures import FaultSignatureCatalog
from app_hvac_diag.modules.report import DiagnosticReport, ReportAssembler


class ServiceCheckModel:
    """
    Complete service check over one field reading.

    Holds only read-only catalogs, so one instance serves any number of
    readings and threads.
    """

    def __init__(self,
                 catalog: Optional[RefrigerantCatalog] = None,
                 signatures: Optional[FaultSignatureCatalog] = None,
                 **cycle_options):
        """
        Args:
            catalog: Refrigerant catalog (default: CoolProp generated)
            signatures: Fault signature catalog (default: built-in library)
            **cycle_options: Keyword arguments forwarded to CycleModel
        """
        self.cycle_ctrl = CycleController(catalog, **cycle_options)
        self.diagnostic_ctrl = DiagnosticController(signatures)
        self.assembler = ReportAssembler()

    def run(self, reading: FieldReading, timestamp: datetime) -> DiagnosticReport:
        """
        Compute, diagnose and assemble.

        Raises:
            CycleDiagnosticsError: Reading incomplete, invalid or outside the catalog
            TypeError: timestamp is not a datetime
        """
        cycle = self.cycle_ctrl.compute_cycle(reading)
        diagnoses = self.diagnostic_ctrl.diagnose(cycle, reading)
        return self.assembler.assemble(reading, cycle, diagnoses, timestamp)
