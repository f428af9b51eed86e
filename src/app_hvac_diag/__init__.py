"""
app_hvac_diag - Refrigeration cycle diagnostics

Computes cycle characteristics from field service readings and ranks
probable faults against a catalog of fault signatures.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

__version__ = "0.1.0"

from app_hvac_diag.core.errors import CycleDiagnosticsError
from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.core.refrigerant_catalog import RefrigerantCatalog
from app_hvac_diag.core.refrigerant_data import load_default_catalog
from app_hvac_diag.modules.service_check import ServiceCheckController

__all__ = [
    "CycleDiagnosticsError",
    "FieldReading",
    "RefrigerantCatalog",
    "ServiceCheckController",
    "load_default_catalog",
]
