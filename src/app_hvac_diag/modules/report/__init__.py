"""
Report Module - Diagnostic report assembly and rendering

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-05
"""

from app_hvac_diag.modules.report.model import DiagnosticReport, ReportAssembler
from app_hvac_diag.modules.report.view import ReportView

__all__ = ["DiagnosticReport", "ReportAssembler", "ReportView"]
