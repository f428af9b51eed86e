"""
Unit tests for FieldReading and MetricValue

Tests record shape checks, required-field validation and metric states.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

import math

import pytest

from app_hvac_diag.core.errors import IncompleteReadingError, InvalidReadingError
from app_hvac_diag.core.metrics import MetricStatus, from_optional, present
from app_hvac_diag.core.readings import FieldReading


@pytest.fixture
def record():
    """Fixture providing a complete reading record."""
    return {
        "refrigerant_id": "R-410A",
        "suction_pressure": 120,
        "discharge_pressure": 350.0,
        "suction_line_temp": 45.0,
        "liquid_line_temp": 97.0,
        "reading_id": "unit-7",
    }


class TestFromDict:
    """Test record shape checks."""

    def test_complete_record(self, record):
        reading = FieldReading.from_dict(record)
        assert reading.suction_pressure == 120.0
        assert isinstance(reading.suction_pressure, float)
        assert reading.reading_id == "unit-7"
        assert reading.ambient_temp is None

    @pytest.mark.parametrize("field", ["refrigerant_id", "suction_pressure", "discharge_pressure"])
    def test_missing_required_field(self, record, field):
        del record[field]
        with pytest.raises(IncompleteReadingError) as exc_info:
            FieldReading.from_dict(record)
        assert exc_info.value.field == field

    def test_none_required_field(self, record):
        record["discharge_pressure"] = None
        with pytest.raises(IncompleteReadingError):
            FieldReading.from_dict(record)

    def test_string_number_rejected(self, record):
        """Strings are not parsed."""
        record["suction_line_temp"] = "45"
        with pytest.raises(InvalidReadingError) as exc_info:
            FieldReading.from_dict(record)
        assert exc_info.value.field == "suction_line_temp"

    def test_bool_rejected(self, record):
        record["ambient_temp"] = True
        with pytest.raises(InvalidReadingError):
            FieldReading.from_dict(record)

    @pytest.mark.parametrize("data", [42, "R-410A", [["R-410A", 120.0, 350.0]], None])
    def test_non_mapping_record_rejected(self, data):
        with pytest.raises(InvalidReadingError, match="must be a mapping"):
            FieldReading.from_dict(data)

    def test_unknown_keys_ignored(self, record):
        record["technician"] = "J. Doe"
        assert FieldReading.from_dict(record).refrigerant_id == "R-410A"

    def test_to_dict(self, record):
        data = FieldReading.from_dict(record).to_dict()
        assert data["liquid_line_temp"] == 97.0
        assert data["supply_air_temp"] is None


class TestValidateRequired:
    """Test physical plausibility of the required pressures."""

    def test_valid(self, nominal_reading):
        nominal_reading.validate_required()

    @pytest.mark.parametrize("suction", [0.0, -3.0])
    def test_non_positive_suction(self, suction):
        reading = FieldReading("R-410A", suction, 350.0)
        with pytest.raises(InvalidReadingError) as exc_info:
            reading.validate_required()
        assert exc_info.value.field == "suction_pressure"

    def test_discharge_not_above_suction(self):
        with pytest.raises(InvalidReadingError):
            FieldReading("R-410A", 200.0, 200.0).validate_required()

    def test_missing_pressure(self):
        with pytest.raises(IncompleteReadingError):
            FieldReading("R-410A", 120.0, None).validate_required()

    def test_non_finite_pressure(self):
        with pytest.raises(InvalidReadingError):
            FieldReading("R-410A", math.inf, 350.0).validate_required()

    def test_missing_optional_fields(self, nominal_reading):
        assert nominal_reading.missing_optional_fields() == [
            "ambient_temp",
            "return_air_temp",
            "supply_air_temp",
            "discharge_line_temp",
        ]


class TestMetricValue:
    """Test the tri-state metric wrapper."""

    def test_present(self):
        metric = present(10.0)
        assert metric.is_present
        assert metric.value == 10.0

    def test_non_finite_result_is_invalid(self):
        metric = present(math.nan)
        assert metric.status is MetricStatus.INVALID
        assert metric.value is None

    def test_from_optional(self):
        assert from_optional(None, "ambient_temp").status is MetricStatus.ABSENT
        assert "ambient_temp" in from_optional(None, "ambient_temp").reason
        assert from_optional(math.inf, "ambient_temp").status is MetricStatus.INVALID
        assert from_optional(72.0, "ambient_temp").value == 72.0

    def test_to_dict(self):
        assert present(1.5).to_dict() == {"status": "present", "value": 1.5, "reason": ""}
