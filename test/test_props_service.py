"""
Unit tests for PropsService and the CoolProp generated catalog

Values are checked against published R-410A, R-134a, R-407C and R-404A
P-T charts with chart-reading tolerances.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

import pytest

from app_hvac_diag.core.props_service import get_props_service
from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.core.refrigerant_data import (
    build_refrigerant,
    load_default_catalog,
    temperature_grid,
)
from app_hvac_diag.modules.cycle import CycleController


@pytest.fixture
def props():
    """Fixture providing PropsService singleton."""
    return get_props_service()


class TestPropsService:
    """Test CoolProp wrapper in field units."""

    def test_singleton(self, props):
        assert props is get_props_service()

    def test_r410a_saturation_pressure(self, props):
        """R-410A boils at about 118 psig at 40 °F."""
        assert props.Psat_T("R410A", 40.0) == pytest.approx(118.0, abs=2.0)

    def test_r410a_saturation_temperature(self, props):
        assert props.Tsat_P("R410A", 118.0) == pytest.approx(40.0, abs=1.0)

    def test_r134a_saturation_pressure(self, props):
        """R-134a boils at about 35 psig at 40 °F."""
        assert props.Psat_T("R134a", 40.0) == pytest.approx(35.0, abs=1.5)

    def test_saturation_row(self, props):
        row = props.saturation_row("R410A", 40.0)
        assert row["temperature"] == 40.0
        assert row["vapor_enthalpy"] > row["liquid_enthalpy"]
        assert row["vapor_entropy"] > row["liquid_entropy"]

    def test_critical_point(self, props):
        P_crit, T_crit = props.critical_point("R410A")
        assert T_crit == pytest.approx(160.4, abs=1.5)
        assert P_crit == pytest.approx(696.0, abs=10.0)

    def test_unknown_fluid(self, props):
        with pytest.raises(ValueError, match="CoolProp error"):
            props.Psat_T("NotAFluid", 40.0)


class TestDefaultCatalog:
    """Test the catalog sampled from CoolProp."""

    def test_temperature_grid_stays_below_critical(self):
        grid = temperature_grid(T_crit=100.0)
        assert grid[0] == -40.0
        assert grid[-1] <= 95.0
        assert grid[1] - grid[0] == 5.0

    def test_temperature_grid_empty(self):
        with pytest.raises(ValueError):
            temperature_grid(T_crit=-40.0)

    def test_build_refrigerant(self, props):
        refrigerant = build_refrigerant("R-410A", "R410A", props, temperatures=[30.0, 40.0, 50.0])
        assert len(refrigerant.entries) == 3
        assert refrigerant.name.startswith("R-410A")
        assert refrigerant.safety_class == "A1"

    def test_default_catalog_is_cached(self):
        assert load_default_catalog() is load_default_catalog()

    def test_default_catalog_contents(self):
        catalog = load_default_catalog()
        for refrigerant_id in ("R-22", "R-410A", "R-134a", "R-32"):
            assert refrigerant_id in catalog

    def test_default_catalog_lookup(self):
        sat = load_default_catalog().lookup_by_pressure("R-410A", 118.0)
        assert sat.temperature == pytest.approx(40.0, abs=1.0)


class TestBlendsWithGlide:
    """Test bubble and dew curves of zeotropic blends in the default catalog."""

    def test_r407c_dew_pressure_below_bubble(self, props):
        assert props.Pdew_T("R407C", 40.0) < props.Psat_T("R407C", 40.0) - 8.0

    def test_saturation_row_has_dew_pressure(self, props):
        row = props.saturation_row("R407C", 40.0)
        assert row["vapor_pressure"] < row["pressure"]

    def test_r407c_bubble_and_dew_at_70_psig(self):
        """R-407C at 70 psig: bubble about 33.5 °F, dew about 44.5 °F."""
        catalog = load_default_catalog()
        bubble = catalog.lookup_bubble_point("R-407C", 70.0)
        dew = catalog.lookup_dew_point("R-407C", 70.0)
        assert bubble.temperature == pytest.approx(33.5, abs=1.5)
        assert dew.temperature == pytest.approx(44.5, abs=1.5)
        assert 8.0 < dew.temperature - bubble.temperature < 13.0

    def test_r407c_dew_lookup_matches_coolprop(self, props):
        dew = load_default_catalog().lookup_dew_point("R-407C", 70.0)
        assert dew.temperature == pytest.approx(props.Tdew_P("R407C", 70.0), abs=0.3)

    def test_r404a_small_glide(self):
        """R-404A at 70 psig boils near 30 °F with under 2 °F glide."""
        catalog = load_default_catalog()
        bubble = catalog.lookup_bubble_point("R-404A", 70.0)
        dew = catalog.lookup_dew_point("R-404A", 70.0)
        assert bubble.temperature == pytest.approx(30.0, abs=2.5)
        assert 0.0 <= dew.temperature - bubble.temperature < 2.0

    def test_r407c_superheat_from_dew_point(self, props):
        """Suction line 10 °F above the CoolProp dew point reads 10 °F superheat."""
        T_dew = props.Tdew_P("R407C", 70.0)
        T_bubble = props.Tsat_P("R407C", 250.0)
        reading = FieldReading(
            refrigerant_id="R-407C",
            suction_pressure=70.0,
            discharge_pressure=250.0,
            suction_line_temp=T_dew + 10.0,
            liquid_line_temp=T_bubble - 8.0,
        )
        cycle = CycleController(load_default_catalog()).compute_cycle(reading)
        assert cycle.superheat.value == pytest.approx(10.0, abs=0.3)
        assert cycle.subcooling.value == pytest.approx(8.0, abs=0.3)
