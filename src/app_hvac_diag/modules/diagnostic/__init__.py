"""
Diagnostic Module - Weighted fault signature matching

Architecture: MVC (Model-View-Controller)

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-05
"""

from app_hvac_diag.modules.diagnostic.model import (
    Diagnosis,
    DiagnosticModel,
    Evidence,
    IndicatorOutcome,
    rank,
)
from app_hvac_diag.modules.diagnostic.controller import DiagnosticController
from app_hvac_diag.modules.diagnostic.view import DiagnosticView

__all__ = [
    "Diagnosis",
    "DiagnosticModel",
    "Evidence",
    "IndicatorOutcome",
    "rank",
    "DiagnosticController",
    "DiagnosticView",
]
