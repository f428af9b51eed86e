"""
Fault Signatures Module - Reference patterns of common cycle faults

Components:
- model.py: Indicator, SeverityScale, FaultSignature, FaultSignatureCatalog
- library.py: Built-in signature records

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-04
"""

from app_hvac_diag.modules.fault_signatures.model import (
    Direction,
    FaultSignature,
    FaultSignatureCatalog,
    Indicator,
    SeverityBand,
    SeverityScale,
)
from app_hvac_diag.modules.fault_signatures.library import (
    DEFAULT_SIGNATURES,
    default_signature_catalog,
)

__all__ = [
    "Direction",
    "FaultSignature",
    "FaultSignatureCatalog",
    "Indicator",
    "SeverityBand",
    "SeverityScale",
    "DEFAULT_SIGNATURES",
    "default_signature_catalog",
]
