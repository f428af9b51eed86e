"""
Shared fixtures for cycle diagnostics tests

The fixture catalog is a hand-written R-410A saturation table with round
numbers so expected values can be checked exactly.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

import pytest

from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.core.refrigerant_catalog import RefrigerantCatalog

# pressure [psig], temperature [°F], hl, hv [BTU/lb], sl, sv [BTU/lb/°F]
R410A_ROWS = [
    (80.0, 18.0, 18.2, 117.0, 0.040, 0.2700),
    (100.0, 27.0, 21.9, 117.6, 0.048, 0.2680),
    (120.0, 35.0, 25.3, 118.1, 0.055, 0.2662),
    (150.0, 45.0, 29.5, 118.6, 0.063, 0.2641),
    (200.0, 62.0, 36.9, 119.2, 0.077, 0.2607),
    (250.0, 76.0, 43.3, 119.5, 0.088, 0.2578),
    (300.0, 90.0, 50.0, 119.6, 0.099, 0.2548),
    (350.0, 105.0, 57.6, 119.5, 0.111, 0.2514),
    (400.0, 116.0, 63.6, 119.2, 0.120, 0.2487),
    (450.0, 126.0, 69.5, 118.7, 0.129, 0.2459),
]

COLUMNS = (
    "pressure",
    "temperature",
    "liquid_enthalpy",
    "vapor_enthalpy",
    "liquid_entropy",
    "vapor_entropy",
)


def r410a_record(refrigerant_id="R-410A", rows=R410A_ROWS):
    return {
        "id": refrigerant_id,
        "name": "R-410A",
        "safety_class": "A1",
        "gwp": 2088,
        "critical_pressure": 696.0,
        "critical_temperature": 158.0,
        "rows": [dict(zip(COLUMNS, row)) for row in rows],
    }


# Zeotropic blend: the R-410A rows with the dew pressure 20 psi below the
# bubble pressure, so the dew point at any pressure sits above the bubble point.
BLEND_ROWS = [row + (row[0] - 20.0,) for row in R410A_ROWS]


def blend_record(refrigerant_id="R-407C", rows=BLEND_ROWS):
    return {
        "id": refrigerant_id,
        "name": "R-407C",
        "safety_class": "A1",
        "gwp": 1774,
        "critical_pressure": 659.0,
        "critical_temperature": 187.0,
        "rows": [dict(zip(COLUMNS + ("vapor_pressure",), row)) for row in rows],
    }


@pytest.fixture
def catalog():
    """Fixture providing the hand-written R-410A catalog."""
    return RefrigerantCatalog.from_records([r410a_record()])


@pytest.fixture
def nominal_reading():
    """
    Fixture providing a healthy R-410A reading.

    120 psig -> 35 °F evaporating, 350 psig -> 105 °F condensing,
    10 °F superheat, 8 °F subcooling.
    """
    return FieldReading(
        refrigerant_id="R-410A",
        suction_pressure=120.0,
        discharge_pressure=350.0,
        suction_line_temp=45.0,
        liquid_line_temp=97.0,
    )


@pytest.fixture
def blend_catalog():
    """Fixture providing the hand-written R-410A table and a blend with glide."""
    return RefrigerantCatalog.from_records([r410a_record(), blend_record()])
