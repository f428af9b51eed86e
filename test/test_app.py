"""
Unit tests for the console application

Tests output modes and exit codes; the fixture catalog stands in for the
CoolProp generated one.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-06
"""

import json

import pytest

from app_hvac_diag.modules.service_check import ServiceCheckController
from app_hvac_diag.ui import app


@pytest.fixture(autouse=True)
def fixture_catalog(monkeypatch, catalog):
    """Run the console application on the fixture catalog."""
    monkeypatch.setattr(app, "ServiceCheckController", lambda: ServiceCheckController(catalog=catalog))


@pytest.fixture
def reading_file(tmp_path):
    def write(data):
        path = tmp_path / "reading.json"
        path.write_text(json.dumps(data))
        return str(path)
    return write


RECORD = {
    "refrigerant_id": "R-410A",
    "suction_pressure": 120.0,
    "discharge_pressure": 350.0,
    "suction_line_temp": 45.0,
    "liquid_line_temp": 97.0,
}


class TestConsoleApp:
    """Test command line behaviour."""

    def test_json_output(self, reading_file, capsys):
        code = app.main([reading_file(RECORD), "--json", "--timestamp", "2026-03-05T10:00:00+00:00"])
        assert code == app.EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["generated_at"] == "2026-03-05T10:00:00+00:00"
        assert data["cycle"]["subcooling"] == pytest.approx(8.0)

    def test_list_input(self, reading_file, capsys):
        code = app.main([reading_file([RECORD, RECORD]), "--json"])
        assert code == app.EXIT_OK
        assert len(json.loads(capsys.readouterr().out)) == 2

    def test_console_output(self, reading_file, capsys):
        assert app.main([reading_file(RECORD)]) == app.EXIT_OK
        assert "CYCLE RESULTS - R-410A" in capsys.readouterr().out

    def test_brief_output(self, reading_file, capsys):
        assert app.main([reading_file(RECORD), "--brief"]) == app.EXIT_OK
        assert capsys.readouterr().out.startswith("Cycle: Te=35.0°F")

    def test_invalid_reading_exit_code(self, reading_file, capsys):
        code = app.main([reading_file(dict(RECORD, suction_pressure=0.0))])
        assert code == app.EXIT_INPUT_ERROR
        assert "suction_pressure" in capsys.readouterr().err

    def test_incomplete_reading_exit_code(self, reading_file):
        record = dict(RECORD)
        del record["discharge_pressure"]
        assert app.main([reading_file(record)]) == app.EXIT_INPUT_ERROR

    @pytest.mark.parametrize("data", [[42], "R-410A", [RECORD, [120.0, 350.0]]])
    def test_non_mapping_record_exit_code(self, reading_file, capsys, data):
        assert app.main([reading_file(data)]) == app.EXIT_INPUT_ERROR
        assert "must be a mapping" in capsys.readouterr().err

    def test_missing_file_exit_code(self, tmp_path):
        assert app.main([str(tmp_path / "missing.json")]) == app.EXIT_INPUT_ERROR

    def test_bad_timestamp(self, reading_file):
        with pytest.raises(SystemExit) as exc_info:
            app.main([reading_file(RECORD), "--timestamp", "yesterday"])
        assert exc_info.value.code == 2
