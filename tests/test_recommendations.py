"""
Tests for advisory recommendation rules
"""

import math
from dataclasses import replace

import pytest

from ventcalc.domain.calculations.recommendations import (
    AREA_METHOD_NOTE,
    FUGITIVE_METHOD_NOTE,
    GOAL_NOTES,
    HEAVIER_THAN_AIR_NOTE,
    IMPRACTICAL_AREA_NOTE,
    LARGE_FLOOR_AREA_NOTE,
    LOW_DELTA_T_NOTE,
    LOW_WIND_NOTE,
    NOT_ACHIEVABLE_NOTE,
    PARALLEL_WIND_NOTE,
    UNOBSTRUCTED_NOTE,
    build_recommendations,
)
from ventcalc.domain.core.models import CalculationInputs
from ventcalc.models.enums import CalculationGoal, CalculationMethod, GasType


@pytest.fixture
def quiet_inputs():
    """Inputs that trigger only the method and goal notes"""
    return CalculationInputs(
        length=30.0, width=20.0, height=10.0,
        inside_temp_f=80.0, outside_temp_f=20.0,
        wind_velocity=12.0,
        wind_orientation_factor=0.55,
        inlet_obstruction_factor=0.55,
        outlet_obstruction_factor=0.55,
    )


def notes_for(inputs, gross_inlet=10.0, gross_outlet=10.0):
    return build_recommendations(inputs, inputs.floor_area, gross_inlet, gross_outlet)


class TestRecommendationRules:

    def test_baseline(self, quiet_inputs):
        assert notes_for(quiet_inputs) == [
            AREA_METHOD_NOTE,
            GOAL_NOTES[CalculationGoal.reclassify_div1_to_div2],
        ]

    def test_heavier_than_air(self, quiet_inputs):
        notes = notes_for(replace(quiet_inputs, gas_type=GasType.heavier_than_air))
        assert notes[0] == HEAVIER_THAN_AIR_NOTE

    def test_low_wind(self, quiet_inputs):
        assert LOW_WIND_NOTE in notes_for(replace(quiet_inputs, wind_velocity=4.9))
        assert LOW_WIND_NOTE not in notes_for(replace(quiet_inputs, wind_velocity=5.0))

    def test_small_temperature_difference(self, quiet_inputs):
        assert LOW_DELTA_T_NOTE in notes_for(replace(quiet_inputs, outside_temp_f=75.0))
        assert LOW_DELTA_T_NOTE not in notes_for(replace(quiet_inputs, outside_temp_f=70.0))

    def test_unobstructed_vent(self, quiet_inputs):
        assert UNOBSTRUCTED_NOTE in notes_for(replace(quiet_inputs, outlet_obstruction_factor=1.0))

    def test_parallel_orientation(self, quiet_inputs):
        assert PARALLEL_WIND_NOTE in notes_for(replace(quiet_inputs, wind_orientation_factor=0.15))
        assert PARALLEL_WIND_NOTE not in notes_for(replace(quiet_inputs, wind_orientation_factor=0.30))

    def test_fugitive_method_note(self, quiet_inputs):
        notes = notes_for(replace(quiet_inputs, method=CalculationMethod.fugitive_emission_method))
        assert FUGITIVE_METHOD_NOTE in notes
        assert AREA_METHOD_NOTE not in notes

    def test_large_floor_area_with_area_method(self, quiet_inputs):
        large = replace(quiet_inputs, length=60.0, width=40.0)
        assert LARGE_FLOOR_AREA_NOTE in notes_for(large, 50.0, 50.0)
        fugitive = replace(large, method=CalculationMethod.fugitive_emission_method)
        assert LARGE_FLOOR_AREA_NOTE not in notes_for(fugitive, 50.0, 50.0)

    def test_impractical_area(self, quiet_inputs):
        # 10% of 600 ft² is 60 ft²; the larger opening governs
        assert IMPRACTICAL_AREA_NOTE in notes_for(quiet_inputs, 20.0, 61.0)
        assert IMPRACTICAL_AREA_NOTE not in notes_for(quiet_inputs, 20.0, 60.0)

    def test_not_achievable(self, quiet_inputs):
        notes = notes_for(quiet_inputs, math.inf, math.inf)
        assert NOT_ACHIEVABLE_NOTE in notes
        assert IMPRACTICAL_AREA_NOTE not in notes

    def test_goal_note(self, quiet_inputs):
        notes = notes_for(replace(quiet_inputs, goal=CalculationGoal.maintain_div2))
        assert notes[-1] == GOAL_NOTES[CalculationGoal.maintain_div2]

    def test_rule_order(self, quiet_inputs):
        everything = replace(
            quiet_inputs,
            gas_type=GasType.heavier_than_air,
            wind_velocity=0.0,
            outside_temp_f=80.0,
            inlet_obstruction_factor=1.0,
            wind_orientation_factor=0.15,
        )
        assert notes_for(everything, math.inf, math.inf) == [
            HEAVIER_THAN_AIR_NOTE,
            LOW_WIND_NOTE,
            LOW_DELTA_T_NOTE,
            UNOBSTRUCTED_NOTE,
            PARALLEL_WIND_NOTE,
            AREA_METHOD_NOTE,
            NOT_ACHIEVABLE_NOTE,
            GOAL_NOTES[CalculationGoal.reclassify_div1_to_div2],
        ]


class TestRecommendationsInResult:

    def test_still_air_result_notes(self, calculator, still_air_inputs):
        result = calculator.compute(still_air_inputs)
        assert result.recommendations[-2] == NOT_ACHIEVABLE_NOTE
        assert LOW_WIND_NOTE in result.recommendations
        assert LOW_DELTA_T_NOTE in result.recommendations
        assert UNOBSTRUCTED_NOTE in result.recommendations
