"""Core reference data, readings and errors for cycle diagnostics"""

from app_hvac_diag.core.errors import (
    CatalogConfigurationError,
    CycleDiagnosticsError,
    CycleWarning,
    IncompleteReadingError,
    InvalidReadingError,
    NegativeSubcoolingWarning,
    NegativeSuperheatWarning,
    OutOfRangeError,
    UnknownRefrigerantError,
)
from app_hvac_diag.core.metrics import MetricStatus, MetricValue
from app_hvac_diag.core.props_service import PropsService, get_props_service
from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.core.refrigerant_catalog import (
    Refrigerant,
    RefrigerantCatalog,
    SaturationEntry,
    SaturationProperties,
)
from app_hvac_diag.core.refrigerant_data import load_default_catalog

__all__ = [
    "CatalogConfigurationError",
    "CycleDiagnosticsError",
    "CycleWarning",
    "FieldReading",
    "IncompleteReadingError",
    "InvalidReadingError",
    "MetricStatus",
    "MetricValue",
    "NegativeSubcoolingWarning",
    "NegativeSuperheatWarning",
    "OutOfRangeError",
    "PropsService",
    "Refrigerant",
    "RefrigerantCatalog",
    "SaturationEntry",
    "SaturationProperties",
    "UnknownRefrigerantError",
    "get_props_service",
    "load_default_catalog",
]
