"""
FieldReading - Raw service readings captured on site

Pressures are gauge pressures [psig], temperatures [°F]. Optional
measurements are None when not taken; missing data is never zero.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Mapping, Optional

from app_hvac_diag.core.errors import IncompleteReadingError, InvalidReadingError

REQUIRED_FIELDS = ("refrigerant_id", "suction_pressure", "discharge_pressure")

NUMERIC_FIELDS = (
    "suction_pressure",
    "discharge_pressure",
    "suction_line_temp",
    "liquid_line_temp",
    "ambient_temp",
    "return_air_temp",
    "supply_air_temp",
    "discharge_line_temp",
)


@dataclass(frozen=True)
class FieldReading:
    """
    One set of gauge and thermometer readings.

    Attributes:
        refrigerant_id: Catalog code of the system refrigerant
        suction_pressure: Suction (low side) pressure [psig]
        discharge_pressure: Discharge (high side) pressure [psig]
        suction_line_temp: Suction line temperature at the evaporator outlet [°F]
        liquid_line_temp: Liquid line temperature at the condenser outlet [°F]
        ambient_temp: Outdoor air entering the condenser [°F]
        return_air_temp: Return air entering the evaporator [°F]
        supply_air_temp: Supply air leaving the evaporator [°F]
        discharge_line_temp: Compressor discharge line temperature [°F]
        reading_id: Caller's identifier for the reading
    """
    refrigerant_id: str
    suction_pressure: Optional[float]
    discharge_pressure: Optional[float]
    suction_line_temp: Optional[float] = None
    liquid_line_temp: Optional[float] = None
    ambient_temp: Optional[float] = None
    return_air_temp: Optional[float] = None
    supply_air_temp: Optional[float] = None
    discharge_line_temp: Optional[float] = None
    reading_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FieldReading':
        """
        Build a reading from a structured record.

        Only shape checks are performed: required keys present and numeric
        fields already typed as numbers. No string parsing.

        Raises:
            IncompleteReadingError: Required key missing or None
            InvalidReadingError: Record is not a mapping or a field has the wrong type
        """
        if not isinstance(data, Mapping):
            raise InvalidReadingError(
                f"reading record must be a mapping, got {type(data).__name__}"
            )

        for name in REQUIRED_FIELDS:
            if data.get(name) is None:
                raise IncompleteReadingError(name)

        if not isinstance(data["refrigerant_id"], str):
            raise InvalidReadingError("refrigerant_id must be a string", field="refrigerant_id")

        known = {f.name for f in fields(cls)}
        values = {}
        for name, value in data.items():
            if name not in known:
                continue
            if name in NUMERIC_FIELDS and value is not None:
                # bool is an int subclass but never a measurement
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise InvalidReadingError(
                        f"{name} must be a number, got {type(value).__name__}", field=name
                    )
                value = float(value)
            values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def missing_optional_fields(self) -> List[str]:
        """Names of optional measurements that were not taken."""
        return [
            name for name in NUMERIC_FIELDS
            if name not in REQUIRED_FIELDS and getattr(self, name) is None
        ]

    def validate_required(self) -> None:
        """
        Check required pressures are present and physically possible.

        Raises:
            IncompleteReadingError: Suction or discharge pressure missing
            InvalidReadingError: Pressure non-finite, non-positive, or
                discharge not above suction
        """
        for name in ("suction_pressure", "discharge_pressure"):
            value = getattr(self, name)
            if value is None:
                raise IncompleteReadingError(name)
            if not math.isfinite(value):
                raise InvalidReadingError(f"{name} is not a finite number", field=name)
            if value <= 0:
                raise InvalidReadingError(
                    f"{name} must be positive, got {value:g} psig", field=name
                )
        if self.discharge_pressure <= self.suction_pressure:
            raise InvalidReadingError(
                f"discharge_pressure ({self.discharge_pressure:g} psig) must exceed "
                f"suction_pressure ({self.suction_pressure:g} psig)",
                field="discharge_pressure",
            )
