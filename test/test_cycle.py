"""
Unit tests for Cycle module

Tests saturation temperatures, superheat/subcooling, state points,
advisories and required-field validation.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-03
"""

import pytest

from app_hvac_diag.core.errors import (
    CoilFreezeRiskWarning,
    CycleWarning,
    HighCompressionRatioWarning,
    HighDischargeTemperatureWarning,
    HighTemperatureDifferenceWarning,
    IncompleteReadingError,
    InvalidReadingError,
    NegativeSubcoolingWarning,
    NegativeSuperheatWarning,
    OutOfRangeError,
    UnknownRefrigerantError,
)
from app_hvac_diag.core.metrics import MetricStatus
from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.modules.cycle import CycleController, CycleModel, CycleView, Phase
from app_hvac_diag.modules.cycle.model import (
    COMPRESSOR_DISCHARGE,
    COMPRESSOR_SUCTION,
    CONDENSER_OUTLET,
    EVAPORATOR_INLET,
)


@pytest.fixture
def controller(catalog):
    """Fixture providing a CycleController on the fixture catalog."""
    return CycleController(catalog)


def reading(**overrides):
    values = dict(
        refrigerant_id="R-410A",
        suction_pressure=120.0,
        discharge_pressure=350.0,
        suction_line_temp=45.0,
        liquid_line_temp=97.0,
    )
    values.update(overrides)
    return FieldReading(**values)


class TestCycleNominal:
    """Test a healthy R-410A reading."""

    def test_saturation_temperatures(self, controller, nominal_reading):
        cycle = controller.compute_cycle(nominal_reading)
        assert cycle.evaporating_temp == 35.0
        assert cycle.condensing_temp == 105.0

    def test_superheat(self, controller, nominal_reading):
        """120 psig with a 45 °F suction line is 10 °F superheat."""
        cycle = controller.compute_cycle(nominal_reading)
        assert cycle.superheat.status is MetricStatus.PRESENT
        assert cycle.superheat.value == pytest.approx(10.0)

    def test_subcooling(self, controller, nominal_reading):
        """350 psig with a 97 °F liquid line is 8 °F subcooling."""
        cycle = controller.compute_cycle(nominal_reading)
        assert cycle.subcooling.value == pytest.approx(8.0)
        assert not cycle.has_warning(NegativeSubcoolingWarning)

    def test_no_advisories(self, controller, nominal_reading):
        assert controller.compute_cycle(nominal_reading).advisories == ()

    def test_compression_ratio(self, controller, nominal_reading):
        cycle = controller.compute_cycle(nominal_reading)
        assert cycle.compression_ratio == pytest.approx((350.0 + 14.696) / (120.0 + 14.696))

    def test_state_point_phases(self, controller, nominal_reading):
        cycle = controller.compute_cycle(nominal_reading)
        assert cycle.state_point(COMPRESSOR_SUCTION).phase is Phase.SUPERHEATED_VAPOR
        assert cycle.state_point(COMPRESSOR_DISCHARGE).phase is Phase.SUPERHEATED_VAPOR
        assert cycle.state_point(CONDENSER_OUTLET).phase is Phase.SUBCOOLED_LIQUID
        evaporator_inlet = cycle.state_point(EVAPORATOR_INLET)
        assert evaporator_inlet.phase is Phase.TWO_PHASE
        assert 0.0 < evaporator_inlet.quality < 1.0
        assert evaporator_inlet.temperature == 35.0

    def test_state_point_enthalpies(self, controller, nominal_reading):
        """Enthalpies follow h_sat ± cp·ΔT with the segment cp proxies."""
        cycle = controller.compute_cycle(nominal_reading)
        cp_liquid_suction = (29.5 - 25.3) / (45.0 - 35.0)
        cp_liquid_discharge = (63.6 - 57.6) / (116.0 - 105.0)
        h1 = 118.1 + 0.6 * cp_liquid_suction * 10.0
        h3 = 57.6 - cp_liquid_discharge * 8.0

        assert cycle.state_point(COMPRESSOR_SUCTION).enthalpy == pytest.approx(h1)
        assert cycle.state_point(CONDENSER_OUTLET).enthalpy == pytest.approx(h3)
        assert cycle.state_point(EVAPORATOR_INLET).enthalpy == pytest.approx(h3)
        assert cycle.metric("refrigeration_effect").value == pytest.approx(h1 - h3)

    def test_discharge_above_isentropic(self, controller, nominal_reading):
        cycle = controller.compute_cycle(nominal_reading)
        suction = cycle.state_point(COMPRESSOR_SUCTION)
        discharge = cycle.state_point(COMPRESSOR_DISCHARGE)
        assert discharge.enthalpy > suction.enthalpy
        assert discharge.temperature > cycle.condensing_temp
        cop = cycle.metric("cop")
        assert cop.is_present
        assert 2.0 < cop.value < 8.0

    def test_measured_discharge_temperature_used(self, controller):
        cycle = controller.compute_cycle(reading(discharge_line_temp=165.0))
        discharge = cycle.state_point(COMPRESSOR_DISCHARGE)
        cp_vapor = 0.6 * (63.6 - 57.6) / (116.0 - 105.0)
        assert discharge.temperature == 165.0
        assert discharge.enthalpy == pytest.approx(119.5 + cp_vapor * 60.0)

    def test_deterministic(self, controller, nominal_reading):
        first = controller.compute_cycle(nominal_reading)
        second = controller.compute_cycle(nominal_reading)
        assert first.to_dict() == second.to_dict()


class TestCycleWithGlide:
    """Test a blend whose dew point sits 8 °F above its bubble point at suction."""

    @pytest.fixture
    def blend_reading(self):
        return reading(
            refrigerant_id="R-407C",
            suction_pressure=100.0,
            discharge_pressure=330.0,
            suction_line_temp=45.0,
            liquid_line_temp=91.0,
        )

    def test_saturation_temperatures(self, blend_catalog, blend_reading):
        """Evaporating is the suction dew point, condensing the discharge bubble point."""
        cycle = CycleController(blend_catalog).compute_cycle(blend_reading)
        assert cycle.evaporating_temp == 35.0
        assert cycle.condensing_temp == pytest.approx(99.0)

    def test_superheat_from_dew_point(self, blend_catalog, blend_reading):
        """A suction line 10 °F above the dew point is 10 °F superheat, not 18."""
        cycle = CycleController(blend_catalog).compute_cycle(blend_reading)
        assert cycle.superheat.value == pytest.approx(10.0)

    def test_subcooling_from_bubble_point(self, blend_catalog, blend_reading):
        cycle = CycleController(blend_catalog).compute_cycle(blend_reading)
        assert cycle.subcooling.value == pytest.approx(8.0)

    def test_glide_metrics(self, blend_catalog, blend_reading):
        cycle = CycleController(blend_catalog).compute_cycle(blend_reading)
        assert cycle.metric("evaporator_glide").value == pytest.approx(8.0)
        assert cycle.metric("condenser_glide").value == pytest.approx(6.0)

    def test_pure_fluid_has_no_glide(self, controller, nominal_reading):
        cycle = controller.compute_cycle(nominal_reading)
        assert cycle.metric("evaporator_glide").value == 0.0
        assert cycle.metric("condenser_glide").value == 0.0

    def test_evaporator_inlet_inside_glide(self, blend_catalog, blend_reading):
        cycle = CycleController(blend_catalog).compute_cycle(blend_reading)
        evaporator_inlet = cycle.state_point(EVAPORATOR_INLET)
        assert evaporator_inlet.phase is Phase.TWO_PHASE
        assert 27.0 < evaporator_inlet.temperature < 35.0

    def test_suction_enthalpy_from_dew_vapor(self, blend_catalog, blend_reading):
        cycle = CycleController(blend_catalog).compute_cycle(blend_reading)
        cp_liquid_suction = (29.5 - 25.3) / (45.0 - 35.0)
        h1 = 118.1 + 0.6 * cp_liquid_suction * 10.0
        assert cycle.state_point(COMPRESSOR_SUCTION).enthalpy == pytest.approx(h1)


class TestMissingMeasurements:
    """Test optional measurements that were not taken."""

    def test_missing_liquid_line(self, controller):
        cycle = controller.compute_cycle(reading(liquid_line_temp=None))
        assert cycle.subcooling.status is MetricStatus.ABSENT
        assert cycle.state_point(CONDENSER_OUTLET).phase is Phase.UNKNOWN
        assert cycle.state_point(EVAPORATOR_INLET).enthalpy is None
        assert cycle.metric("refrigeration_effect").status is MetricStatus.ABSENT
        assert cycle.metric("cop").status is MetricStatus.ABSENT
        assert cycle.metric("compression_work").is_present

    def test_missing_suction_line(self, controller):
        cycle = controller.compute_cycle(reading(suction_line_temp=None))
        assert cycle.superheat.status is MetricStatus.ABSENT
        assert cycle.state_point(COMPRESSOR_DISCHARGE).phase is Phase.UNKNOWN
        assert cycle.metric("estimated_discharge_temp").status is MetricStatus.ABSENT

    def test_air_side_metrics(self, controller):
        cycle = controller.compute_cycle(
            reading(return_air_temp=75.0, supply_air_temp=57.0, ambient_temp=85.0)
        )
        assert cycle.metric("design_temp_difference").value == pytest.approx(40.0)
        assert cycle.metric("air_delta_t").value == pytest.approx(18.0)
        assert cycle.metric("condenser_approach").value == pytest.approx(20.0)

    def test_unknown_metric_is_absent(self, controller, nominal_reading):
        cycle = controller.compute_cycle(nominal_reading)
        assert cycle.metric("compressor_current").status is MetricStatus.ABSENT


class TestAdvisories:
    """Test non-fatal advisory flags."""

    def test_negative_superheat(self, controller):
        cycle = controller.compute_cycle(reading(suction_line_temp=33.0))
        assert cycle.superheat.value == pytest.approx(-2.0)
        assert cycle.has_warning(NegativeSuperheatWarning)
        assert cycle.state_point(COMPRESSOR_SUCTION).phase is Phase.TWO_PHASE

    def test_negative_subcooling(self, controller):
        cycle = controller.compute_cycle(reading(liquid_line_temp=107.0))
        assert cycle.subcooling.value == pytest.approx(-2.0)
        assert cycle.has_warning(NegativeSubcoolingWarning)

    def test_high_temperature_difference(self, controller):
        cycle = controller.compute_cycle(reading(return_air_temp=80.0))
        assert cycle.has_warning(HighTemperatureDifferenceWarning)

    def test_high_discharge_temperature(self, controller):
        cycle = controller.compute_cycle(reading(discharge_line_temp=280.0))
        assert cycle.has_warning(HighDischargeTemperatureWarning)

    def test_coil_freeze_risk(self, controller):
        cycle = controller.compute_cycle(reading(suction_pressure=100.0, suction_line_temp=37.0))
        assert cycle.evaporating_temp == 27.0
        assert cycle.has_warning(CoilFreezeRiskWarning)

    def test_compression_ratio_limit_override(self, catalog, nominal_reading):
        controller = CycleController(catalog, max_compression_ratio=2.5)
        cycle = controller.compute_cycle(nominal_reading)
        assert cycle.has_warning(HighCompressionRatioWarning)
        assert cycle.has_warning(CycleWarning)
        advisory = cycle.advisories[0]
        assert advisory.level == "danger"
        assert advisory.code == "HighCompressionRatioWarning"

    def test_advisories_logged(self, controller, caplog):
        with caplog.at_level("WARNING"):
            controller.compute_cycle(reading(suction_line_temp=33.0))
        assert "NegativeSuperheatWarning" in caplog.text


class TestCycleErrors:
    """Test fatal reading errors."""

    def test_zero_suction_pressure(self, controller):
        with pytest.raises(InvalidReadingError):
            controller.compute_cycle(reading(suction_pressure=0.0))

    def test_missing_discharge_pressure(self, controller):
        with pytest.raises(IncompleteReadingError) as exc_info:
            controller.compute_cycle(reading(discharge_pressure=None))
        assert exc_info.value.field == "discharge_pressure"

    def test_unknown_refrigerant(self, controller):
        with pytest.raises(UnknownRefrigerantError):
            controller.compute_cycle(reading(refrigerant_id="R-22"))

    def test_pressure_out_of_range(self, controller):
        with pytest.raises(OutOfRangeError):
            controller.compute_cycle(reading(suction_pressure=60.0))

    @pytest.mark.parametrize("options", [
        {"isentropic_efficiency": 0.0},
        {"isentropic_efficiency": 1.2},
        {"vapor_cp_ratio": 0.0},
    ])
    def test_invalid_model_options(self, catalog, options):
        with pytest.raises(ValueError):
            CycleModel(catalog, **options)


class TestCycleView:
    """Test console output."""

    def test_display_result(self, controller, nominal_reading, capsys):
        CycleView.display_result(controller.compute_cycle(nominal_reading))
        out = capsys.readouterr().out
        assert "CYCLE RESULTS - R-410A" in out
        assert "superheat" in out
        assert "✓ OK" in out

    def test_display_summary_with_warning(self, controller, capsys):
        CycleView.display_summary(controller.compute_cycle(reading(liquid_line_temp=107.0)))
        assert "NegativeSubcoolingWarning" in capsys.readouterr().out
