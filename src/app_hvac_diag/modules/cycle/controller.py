"""
Cycle Controller - Orchestration layer

Coordinates cycle model execution and reports advisories through logging.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-03
"""

import logging
from typing import Optional

from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.core.refrigerant_catalog import RefrigerantCatalog
from app_hvac_diag.core.refrigerant_data import load_default_catalog
from app_hvac_diag.modules.cycle.model import CycleModel, CycleState

logger = logging.getLogger(__name__)


class CycleController:
    """
    Controller for cycle calculations.

    Orchestrates model execution without direct UI dependencies.
    """

    def __init__(self, catalog: Optional[RefrigerantCatalog] = None, **model_options):
        """
        Args:
            catalog: Refrigerant catalog, defaults to the CoolProp generated one
            **model_options: Keyword arguments forwarded to CycleModel
        """
        self.catalog = catalog if catalog is not None else load_default_catalog()
        self.model = CycleModel(self.catalog, **model_options)

    def compute_cycle(self, reading: FieldReading) -> CycleState:
        """
        Compute cycle state from field readings.

        Args:
            reading: Gauge and thermometer readings

        Returns:
            CycleState with metrics, state points and advisories

        Raises:
            CycleDiagnosticsError: Reading incomplete, invalid or out of range
        """
        cycle = self.model.solve(reading)

        logger.debug(
            "%s cycle: Te=%.1f °F, Tc=%.1f °F, SH=%s, SC=%s, CR=%.2f",
            cycle.refrigerant_id, cycle.evaporating_temp, cycle.condensing_temp,
            _fmt(cycle.superheat.value), _fmt(cycle.subcooling.value),
            cycle.compression_ratio,
        )
        for advisory in cycle.advisories:
            logger.warning("%s: %s", advisory.code, advisory.message)
        return cycle


def _fmt(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value:.1f}"
