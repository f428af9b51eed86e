"""Modules package - Stages of the cycle diagnostic pipeline"""

from app_hvac_diag.modules.cycle import CycleController, CycleState
from app_hvac_diag.modules.diagnostic import DiagnosticController, Diagnosis
from app_hvac_diag.modules.fault_signatures import FaultSignatureCatalog, default_signature_catalog
from app_hvac_diag.modules.report import DiagnosticReport, ReportAssembler
from app_hvac_diag.modules.service_check import ServiceCheckController

__all__ = [
    "CycleController",
    "CycleState",
    "DiagnosticController",
    "Diagnosis",
    "FaultSignatureCatalog",
    "default_signature_catalog",
    "DiagnosticReport",
    "ReportAssembler",
    "ServiceCheckController",
]
