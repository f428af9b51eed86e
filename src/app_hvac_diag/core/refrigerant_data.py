"""
Default refrigerant catalog generated from CoolProp

Saturation tables are sampled once on a fixed temperature grid and frozen
into a RefrigerantCatalog. Lookups never call CoolProp afterwards.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

import logging
from functools import lru_cache
from typing import Mapping, Optional, Sequence

import numpy as np

from app_hvac_diag.core.constants import (
    CRITICAL_MARGIN,
    DEFAULT_REFRIGERANTS,
    REFRIGERANT_METADATA,
    TABLE_MAX_TEMP,
    TABLE_MIN_TEMP,
    TABLE_TEMP_STEP,
)
from app_hvac_diag.core.props_service import PropsService, get_props_service
from app_hvac_diag.core.refrigerant_catalog import (
    Refrigerant,
    RefrigerantCatalog,
    SaturationEntry,
)

logger = logging.getLogger(__name__)


def temperature_grid(T_crit: float,
                     T_min: float = TABLE_MIN_TEMP,
                     T_max: float = TABLE_MAX_TEMP,
                     step: float = TABLE_TEMP_STEP) -> np.ndarray:
    """
    Temperature grid [°F] for a saturation table, kept below the critical point.

    Args:
        T_crit: Critical temperature [°F]
        T_min: Lowest table temperature [°F]
        T_max: Highest table temperature [°F]
        step: Grid spacing [°F]
    """
    upper = min(T_max, T_crit - CRITICAL_MARGIN)
    if upper <= T_min:
        raise ValueError(
            f"Empty temperature grid: T_min={T_min:g} °F, upper limit={upper:g} °F"
        )
    n_steps = int(np.floor((upper - T_min) / step))
    return T_min + step * np.arange(n_steps + 1)


def build_refrigerant(refrigerant_id: str,
                      fluid: str,
                      props: Optional[PropsService] = None,
                      temperatures: Optional[Sequence[float]] = None) -> Refrigerant:
    """
    Sample a saturation table for one refrigerant.

    Args:
        refrigerant_id: Catalog code (e.g. 'R-410A')
        fluid: CoolProp fluid name (e.g. 'R410A')
        props: Property service (defaults to the singleton)
        temperatures: Table temperatures [°F], defaults to temperature_grid()

    Returns:
        Immutable Refrigerant

    Raises:
        ValueError: If CoolProp cannot evaluate the fluid
    """
    props = props or get_props_service()
    P_crit, T_crit = props.critical_point(fluid)
    if temperatures is None:
        temperatures = temperature_grid(T_crit)

    entries = tuple(
        SaturationEntry(**props.saturation_row(fluid, float(T)))
        for T in temperatures
    )
    metadata = REFRIGERANT_METADATA.get(refrigerant_id, {})
    logger.debug("Sampled %d saturation rows for %s (%s)", len(entries), refrigerant_id, fluid)
    return Refrigerant(
        refrigerant_id=refrigerant_id,
        critical_pressure=P_crit,
        critical_temperature=T_crit,
        entries=entries,
        name=metadata.get("name", refrigerant_id),
        safety_class=metadata.get("safety_class"),
        gwp=metadata.get("gwp"),
    )


def build_catalog(fluids: Mapping[str, str],
                  props: Optional[PropsService] = None) -> RefrigerantCatalog:
    """
    Build a catalog for several refrigerants.

    Args:
        fluids: Mapping of catalog code -> CoolProp fluid name
        props: Property service (defaults to the singleton)
    """
    return RefrigerantCatalog(
        build_refrigerant(refrigerant_id, fluid, props)
        for refrigerant_id, fluid in fluids.items()
    )


@lru_cache(maxsize=1)
def load_default_catalog() -> RefrigerantCatalog:
    """
    Catalog of the common field refrigerants, built once per process.

    Returns:
        Shared read-only RefrigerantCatalog
    """
    return build_catalog(DEFAULT_REFRIGERANTS)
