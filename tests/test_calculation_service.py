"""
Tests for running, saving and reloading calculations
"""

import json
import math

import pytest

from ventcalc.domain.core.models import ProjectInfo, VentilationResult
from ventcalc.services.calculation_service import (
    SavedCalculation,
    load_calculation,
    load_document,
    parse_calculation_document,
    recalculate,
    run_calculation,
    save_calculation,
)
from ventcalc.services.error_types import SavedCalculationError, ValidationError
from ventcalc.utils import json_utils


@pytest.fixture
def project():
    return ProjectInfo(
        project_name="Compressor Building 3",
        location="Field Station 12",
        company="Example Midstream",
        date="2026-10-01",
        performed_by="J. Doe",
    )


class TestRunCalculation:

    def test_bundles_inputs_and_result(self, stack_only_inputs, project):
        saved = run_calculation(stack_only_inputs, project)
        assert saved.inputs == stack_only_inputs
        assert saved.project == project
        assert saved.result.achievable
        assert saved.version == 1

    def test_default_project(self, stack_only_inputs):
        assert run_calculation(stack_only_inputs).project == ProjectInfo()


class TestRoundTrip:

    @pytest.mark.parametrize("inputs_fixture", ["stack_only_inputs", "fugitive_inputs", "still_air_inputs"])
    def test_reload_and_rerun_reproduces_result(self, request, tmp_path, project, inputs_fixture):
        inputs = request.getfixturevalue(inputs_fixture)
        saved = run_calculation(inputs, project)
        path = save_calculation(saved, tmp_path / "calc.json")

        loaded = load_calculation(path)
        assert loaded == saved
        assert recalculate(loaded).result == saved.result

    def test_unachievable_saved_as_null(self, tmp_path, still_air_inputs):
        path = save_calculation(run_calculation(still_air_inputs), tmp_path / "calc.json")
        data = json.loads(path.read_text())

        assert data["result"]["free_vent_area"] is None
        assert data["result"]["achievable"] is False
        assert math.isinf(load_calculation(path).result.free_vent_area)

    def test_result_json_round_trip(self, calculator, fugitive_inputs):
        result = calculator.compute(fugitive_inputs)
        assert VentilationResult.from_json(json.loads(json_utils.dumps(result))) == result


class TestParseDocument:

    def test_bare_inputs(self, stack_only_inputs):
        project, inputs = parse_calculation_document(stack_only_inputs.to_json())
        assert project == ProjectInfo()
        assert inputs == stack_only_inputs

    def test_saved_document(self, stack_only_inputs, project):
        data = run_calculation(stack_only_inputs, project).to_json()
        assert parse_calculation_document(data) == (project, stack_only_inputs)

    def test_unsupported_version(self, stack_only_inputs):
        data = run_calculation(stack_only_inputs).to_json()
        data["version"] = 99
        with pytest.raises(SavedCalculationError):
            parse_calculation_document(data)

    def test_not_an_object(self):
        with pytest.raises(SavedCalculationError):
            parse_calculation_document([1, 2, 3])

    def test_bad_project_section_is_ignored(self, stack_only_inputs):
        data = {"project": "not a dict", "inputs": stack_only_inputs.to_json()}
        project, _ = parse_calculation_document(data)
        assert project == ProjectInfo()

    def test_missing_inputs_fields(self):
        with pytest.raises(ValidationError):
            parse_calculation_document({"inputs": {"length": 10}})


class TestLoadErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(SavedCalculationError):
            load_calculation(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(SavedCalculationError):
            load_document(path)

    def test_missing_result(self, tmp_path, stack_only_inputs):
        path = tmp_path / "inputs_only.json"
        path.write_text(json.dumps({"inputs": stack_only_inputs.to_json()}))
        with pytest.raises(SavedCalculationError):
            load_calculation(path)

    def test_malformed_result(self, stack_only_inputs):
        data = run_calculation(stack_only_inputs).to_json()
        del data["result"]["floor_area"]
        with pytest.raises(SavedCalculationError):
            SavedCalculation.from_json(data)
