"""
RefrigerantCatalog - Saturation table lookups

Linear interpolation along the liquid-vapor phase boundary of each
refrigerant. Every row carries the bubble (liquid) and dew (vapor)
saturation pressures at its temperature, so zeotropic blends with
temperature glide get separate bubble and dew lookups. Tables are immutable
once loaded; lookups outside the table domain raise OutOfRangeError instead
of extrapolating.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from app_hvac_diag.core.constants import VAPOR_CP_RATIO
from app_hvac_diag.core.errors import (
    CatalogConfigurationError,
    OutOfRangeError,
    UnknownRefrigerantError,
)

logger = logging.getLogger(__name__)

# Column order of the internal numpy table
_COLUMNS = (
    "pressure",
    "temperature",
    "liquid_enthalpy",
    "vapor_enthalpy",
    "liquid_entropy",
    "vapor_entropy",
    "vapor_pressure",
)
_P, _T, _HL, _HV, _SL, _SV, _PV = range(len(_COLUMNS))

# Optional in records, defaults to the bubble pressure
_OPTIONAL_COLUMNS = ("vapor_pressure",)


@dataclass(frozen=True)
class SaturationEntry:
    """
    One row of a saturation table.

    Attributes:
        pressure: Bubble point pressure [psig]
        temperature: Saturation temperature [°F]
        liquid_enthalpy: Saturated liquid enthalpy [BTU/lb]
        vapor_enthalpy: Saturated vapor enthalpy [BTU/lb]
        liquid_entropy: Saturated liquid entropy [BTU/lb/°F]
        vapor_entropy: Saturated vapor entropy [BTU/lb/°F]
        vapor_pressure: Dew point pressure [psig], equal to the bubble
            pressure for pure fluids and azeotropes
    """
    pressure: float
    temperature: float
    liquid_enthalpy: float
    vapor_enthalpy: float
    liquid_entropy: float
    vapor_entropy: float
    vapor_pressure: Optional[float] = None

    def __post_init__(self):
        if self.vapor_pressure is None:
            object.__setattr__(self, "vapor_pressure", self.pressure)

    def as_row(self) -> Tuple[float, ...]:
        return tuple(getattr(self, name) for name in _COLUMNS)

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in _COLUMNS}


@dataclass(frozen=True)
class SaturationProperties:
    """
    Result of a saturation lookup.

    Liquid properties belong to the bubble point and vapor properties to
    the dew point at the same temperature. liquid_cp is the slope of
    saturated-liquid enthalpy against temperature on the bracketing table
    segment, used as a liquid specific heat proxy.
    """
    pressure: float
    temperature: float
    liquid_enthalpy: float
    vapor_enthalpy: float
    liquid_entropy: float
    vapor_entropy: float
    liquid_cp: float
    vapor_pressure: float

    @property
    def latent_heat(self) -> float:
        return self.vapor_enthalpy - self.liquid_enthalpy

    @property
    def bubble_pressure(self) -> float:
        return self.pressure

    @property
    def dew_pressure(self) -> float:
        return self.vapor_pressure

    def vapor_cp(self, ratio: float = VAPOR_CP_RATIO) -> float:
        """Vapor specific heat proxy [BTU/lb/°F]."""
        return self.liquid_cp * ratio


@dataclass(frozen=True)
class Refrigerant:
    """
    Immutable refrigerant reference data.

    Attributes:
        refrigerant_id: Catalog code (e.g. 'R-410A')
        critical_pressure: Critical pressure [psig]
        critical_temperature: Critical temperature [°F]
        entries: Saturation rows ordered by strictly increasing pressure
        name: Display name
        safety_class: ASHRAE 34 safety classification
        gwp: Global warming potential (AR5, 100 yr)
    """
    refrigerant_id: str
    critical_pressure: float
    critical_temperature: float
    entries: Tuple[SaturationEntry, ...]
    name: str = ""
    safety_class: Optional[str] = None
    gwp: Optional[float] = None
    _table: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))
        _validate_entries(self.refrigerant_id, self.entries)
        table = np.array([entry.as_row() for entry in self.entries], dtype=float)
        table.setflags(write=False)
        object.__setattr__(self, "_table", table)

    @property
    def pressure_range(self) -> Tuple[float, float]:
        return float(self._table[0, _P]), float(self._table[-1, _P])

    @property
    def dew_pressure_range(self) -> Tuple[float, float]:
        return float(self._table[0, _PV]), float(self._table[-1, _PV])

    @property
    def temperature_range(self) -> Tuple[float, float]:
        return float(self._table[0, _T]), float(self._table[-1, _T])

    @property
    def has_glide(self) -> bool:
        """True when dew and bubble pressures differ anywhere in the table."""
        return bool(np.any(self._table[:, _PV] != self._table[:, _P]))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.refrigerant_id,
            "name": self.name,
            "safety_class": self.safety_class,
            "gwp": self.gwp,
            "critical_pressure": self.critical_pressure,
            "critical_temperature": self.critical_temperature,
            "rows": [entry.to_dict() for entry in self.entries],
        }

    # ========== Interpolation ==========

    def interpolate(self, column: int, value: float, quantity: str) -> SaturationProperties:
        """
        Interpolate the full table row at a pressure or temperature.

        Args:
            column: Index of the key column (bubble pressure, dew pressure
                or temperature)
            value: Key value
            quantity: Name of the key, used in error messages

        Raises:
            OutOfRangeError: If value lies outside the table
        """
        keys = self._table[:, column]
        low, high = float(keys[0]), float(keys[-1])
        if not (low <= value <= high):
            raise OutOfRangeError(self.refrigerant_id, quantity, value, low, high)

        n = len(keys)
        i = int(np.searchsorted(keys, value, side="right")) - 1
        i = min(i, n - 2)
        lower, upper = self._table[i], self._table[i + 1]
        liquid_cp = float((upper[_HL] - lower[_HL]) / (upper[_T] - lower[_T]))

        if keys[i] == value:
            row = lower
        elif keys[i + 1] == value:
            row = upper
        else:
            fraction = (value - keys[i]) / (keys[i + 1] - keys[i])
            row = lower + fraction * (upper - lower)

        return SaturationProperties(
            pressure=float(row[_P]),
            temperature=float(row[_T]),
            liquid_enthalpy=float(row[_HL]),
            vapor_enthalpy=float(row[_HV]),
            liquid_entropy=float(row[_SL]),
            vapor_entropy=float(row[_SV]),
            liquid_cp=liquid_cp,
            vapor_pressure=float(row[_PV]),
        )


def _validate_entries(refrigerant_id: str, entries: Tuple[SaturationEntry, ...]) -> None:
    """Structural shape checks on a saturation table."""
    if len(entries) < 2:
        raise CatalogConfigurationError(
            f"{refrigerant_id}: saturation table needs at least 2 entries, got {len(entries)}"
        )
    for entry in entries:
        if not all(math.isfinite(v) for v in entry.as_row()):
            raise CatalogConfigurationError(
                f"{refrigerant_id}: non-finite value in saturation entry {entry}"
            )
    for previous, current in zip(entries, entries[1:]):
        if current.pressure <= previous.pressure:
            raise CatalogConfigurationError(
                f"{refrigerant_id}: pressures must be strictly increasing "
                f"({previous.pressure:g} -> {current.pressure:g})"
            )
        if current.vapor_pressure <= previous.vapor_pressure:
            raise CatalogConfigurationError(
                f"{refrigerant_id}: dew pressures must be strictly increasing "
                f"({previous.vapor_pressure:g} -> {current.vapor_pressure:g})"
            )
        if current.temperature <= previous.temperature:
            raise CatalogConfigurationError(
                f"{refrigerant_id}: temperatures must be strictly increasing "
                f"({previous.temperature:g} -> {current.temperature:g})"
            )
        # liquid enthalpy slope is the specific heat proxy, it must stay positive
        if current.liquid_enthalpy <= previous.liquid_enthalpy:
            raise CatalogConfigurationError(
                f"{refrigerant_id}: liquid enthalpy must increase with temperature "
                f"at {current.temperature:g} °F"
            )
    for entry in entries:
        if entry.vapor_enthalpy <= entry.liquid_enthalpy:
            raise CatalogConfigurationError(
                f"{refrigerant_id}: vapor enthalpy must exceed liquid enthalpy "
                f"at {entry.temperature:g} °F"
            )


class RefrigerantCatalog:
    """
    Read-only catalog of refrigerant saturation tables.

    Build one at startup and pass it to every engine; concurrent readers
    need no coordination.
    """

    def __init__(self, refrigerants: Iterable[Refrigerant]):
        """
        Args:
            refrigerants: Refrigerant records, ids must be unique

        Raises:
            CatalogConfigurationError: On duplicate ids or an empty catalog
        """
        by_id: Dict[str, Refrigerant] = {}
        for refrigerant in refrigerants:
            if refrigerant.refrigerant_id in by_id:
                raise CatalogConfigurationError(
                    f"Duplicate refrigerant id: {refrigerant.refrigerant_id}"
                )
            by_id[refrigerant.refrigerant_id] = refrigerant
        if not by_id:
            raise CatalogConfigurationError("Refrigerant catalog is empty")
        self._refrigerants: Mapping[str, Refrigerant] = MappingProxyType(by_id)
        logger.info("Refrigerant catalog loaded: %s", ", ".join(by_id))

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> 'RefrigerantCatalog':
        """
        Build a catalog from structured records.

        Each record holds 'id', 'critical_pressure', 'critical_temperature',
        'rows' (list of saturation entry mappings) and optionally 'name',
        'safety_class', 'gwp'.

        Raises:
            CatalogConfigurationError: If a record is malformed
        """
        return cls(_refrigerant_from_record(record) for record in records)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'RefrigerantCatalog':
        """Load a catalog from a JSON file (list of records or {'refrigerants': [...]})."""
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        if isinstance(data, dict):
            data = data.get("refrigerants", [])
        return cls.from_records(data)

    def __contains__(self, refrigerant_id: str) -> bool:
        return refrigerant_id in self._refrigerants

    def __len__(self) -> int:
        return len(self._refrigerants)

    def refrigerant_ids(self) -> List[str]:
        return list(self._refrigerants)

    def lookup_refrigerant(self, refrigerant_id: str) -> Refrigerant:
        """
        Raises:
            UnknownRefrigerantError: If the id is not in the catalog
        """
        try:
            return self._refrigerants[refrigerant_id]
        except KeyError:
            raise UnknownRefrigerantError(refrigerant_id) from None

    def lookup_by_pressure(self, refrigerant_id: str, pressure: float) -> SaturationProperties:
        """
        Saturation properties at a pressure, on the bubble (liquid) curve.

        Same as lookup_bubble_point. For pure fluids and azeotropes the
        bubble and dew curves coincide.

        Args:
            refrigerant_id: Catalog code
            pressure: Saturation pressure [psig]

        Returns:
            SaturationProperties with the interpolated temperature [°F]

        Raises:
            UnknownRefrigerantError: Unknown refrigerant
            OutOfRangeError: Pressure outside the table
        """
        return self.lookup_bubble_point(refrigerant_id, pressure)

    def lookup_bubble_point(self, refrigerant_id: str, pressure: float) -> SaturationProperties:
        """
        Bubble point at a pressure: where liquid starts to boil.

        Reference for subcooling and the liquid-side state points.

        Raises:
            UnknownRefrigerantError: Unknown refrigerant
            OutOfRangeError: Pressure outside the bubble pressure column
        """
        return self.lookup_refrigerant(refrigerant_id).interpolate(_P, pressure, "pressure")

    def lookup_dew_point(self, refrigerant_id: str, pressure: float) -> SaturationProperties:
        """
        Dew point at a pressure: where the last liquid evaporates.

        Reference for superheat and the vapor-side state points.

        Raises:
            UnknownRefrigerantError: Unknown refrigerant
            OutOfRangeError: Pressure outside the dew pressure column
        """
        return self.lookup_refrigerant(refrigerant_id).interpolate(_PV, pressure, "dew pressure")

    def lookup_by_temperature(self, refrigerant_id: str, temperature: float) -> SaturationProperties:
        """
        Saturation properties at a temperature.

        Args:
            refrigerant_id: Catalog code
            temperature: Saturation temperature [°F]

        Returns:
            SaturationProperties with the interpolated pressure [psig]

        Raises:
            UnknownRefrigerantError: Unknown refrigerant
            OutOfRangeError: Temperature outside the table
        """
        return self.lookup_refrigerant(refrigerant_id).interpolate(_T, temperature, "temperature")

    def to_records(self) -> List[Dict[str, Any]]:
        return [refrigerant.to_dict() for refrigerant in self._refrigerants.values()]


def _refrigerant_from_record(record: Mapping[str, Any]) -> Refrigerant:
    try:
        refrigerant_id = record["id"]
        rows = record["rows"]
        entries = tuple(_entry_from_row(row) for row in rows)
        return Refrigerant(
            refrigerant_id=refrigerant_id,
            critical_pressure=float(record["critical_pressure"]),
            critical_temperature=float(record["critical_temperature"]),
            entries=entries,
            name=record.get("name", refrigerant_id),
            safety_class=record.get("safety_class"),
            gwp=record.get("gwp"),
        )
    except (KeyError, TypeError, ValueError) as e:
        if isinstance(e, CatalogConfigurationError):
            raise
        raise CatalogConfigurationError(
            f"Malformed refrigerant record {record.get('id', '?')!r}: {e}"
        ) from e


def _entry_from_row(row: Mapping[str, Any]) -> SaturationEntry:
    values = {
        name: float(row[name]) for name in _COLUMNS if name not in _OPTIONAL_COLUMNS
    }
    for name in _OPTIONAL_COLUMNS:
        if row.get(name) is not None:
            values[name] = float(row[name])
    return SaturationEntry(**values)
