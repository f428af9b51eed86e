"""
Service Check Module

Runs the complete reading -> cycle -> diagnosis -> report chain.
"""

from app_hvac_diag.modules.service_check.controller import ServiceCheckController
from app_hvac_diag.modules.service_check.model import ServiceCheckModel

__all__ = ["ServiceCheckController", "ServiceCheckModel"]
