"""
Tests for the command line entry point
"""

import json

from ventcalc.__main__ import main


class TestCalculateCommand:

    def test_prints_saved_calculation(self, tmp_path, capsys, stack_only_inputs):
        source = tmp_path / "inputs.json"
        source.write_text(json.dumps(stack_only_inputs.to_json()))

        assert main(["calculate", str(source)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["result"]["achievable"] is True
        assert data["inputs"]["height"] == 12.0

    def test_writes_output_file(self, tmp_path, still_air_inputs):
        source = tmp_path / "inputs.json"
        target = tmp_path / "saved.json"
        source.write_text(json.dumps(still_air_inputs.to_json()))

        assert main(["calculate", str(source), "--output", str(target)]) == 0

        data = json.loads(target.read_text())
        assert data["result"]["free_vent_area"] is None

    def test_validation_failure_exit_code(self, tmp_path, capsys):
        source = tmp_path / "bad.json"
        source.write_text(json.dumps({
            "length": 0, "width": 10, "height": 10,
            "inside_temp_f": 70, "outside_temp_f": 50,
        }))

        assert main(["calculate", str(source)]) == 1
        assert "length" in capsys.readouterr().err

    def test_missing_file_exit_code(self, tmp_path):
        assert main(["calculate", str(tmp_path / "absent.json")]) == 1

    def test_integer_beyond_float_range_exit_code(self, tmp_path, capsys):
        source = tmp_path / "huge.json"
        source.write_text(json.dumps({
            "length": 10 ** 400, "width": 10, "height": 10,
            "inside_temp_f": 70, "outside_temp_f": 50,
        }))

        assert main(["calculate", str(source)]) == 1
        assert "length" in capsys.readouterr().err
