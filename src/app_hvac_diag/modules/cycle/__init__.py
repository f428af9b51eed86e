"""
Cycle Module - Vapor compression cycle from field readings

Architecture: MVC (Model-View-Controller)

Components:
- model.py: Saturation lookups, superheat/subcooling, state points, advisories
- controller.py: Orchestration and logging
- view.py: Console output

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-03
"""

from app_hvac_diag.modules.cycle.model import (
    CycleAdvisory,
    CycleModel,
    CycleState,
    Phase,
    StatePoint,
)
from app_hvac_diag.modules.cycle.controller import CycleController
from app_hvac_diag.modules.cycle.view import CycleView

__all__ = [
    "CycleAdvisory",
    "CycleModel",
    "CycleState",
    "Phase",
    "StatePoint",
    "CycleController",
    "CycleView",
]
