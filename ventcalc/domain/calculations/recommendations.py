"""
Advisory recommendations for a ventilation sizing run.
Each rule fires independently; output order follows the rule order below.
"""

import math
from typing import List

from ventcalc.domain.core.constants import (
    AREA_METHOD_MAX_FLOOR_SQFT,
    LOW_DELTA_T_F,
    LOW_WIND_MPH,
    OBSTRUCTION_FACTORS,
    PRACTICAL_AREA_FRACTION,
    WIND_ORIENTATION_FACTORS,
)
from ventcalc.domain.core.models import CalculationInputs
from ventcalc.models.enums import (
    CalculationGoal,
    CalculationMethod,
    GasType,
    ObstructionType,
    WindOrientation,
)

HEAVIER_THAN_AIR_NOTE = (
    "Gas is heavier than air: reverse the vent placement convention. "
    "Locate inlet openings high and outlet openings low so that gas "
    "accumulating near the floor is purged."
)
LOW_WIND_NOTE = (
    "Design wind velocity is below 5 mph. Consider using a conservative "
    "site-average wind speed from local weather data."
)
LOW_DELTA_T_NOTE = (
    "Inside/outside temperature difference is less than 10 °F. The stack "
    "effect is minimal and ventilation will depend mainly on wind."
)
UNOBSTRUCTED_NOTE = (
    "At least one vent is sized as unobstructed. Verify that no screens, "
    "louvers or hoods will be installed later, as these reduce free area."
)
PARALLEL_WIND_NOTE = (
    "Vents are oriented parallel to the prevailing wind, the least "
    "effective orientation. Openings facing the wind perform better."
)
AREA_METHOD_NOTE = (
    "Area Method (AGA XL1001 Section 5.2, Appendix B): the required airflow "
    "is the greater of one complete air change every 5 minutes and "
    "1.5 CFM per square foot of floor area."
)
FUGITIVE_METHOD_NOTE = (
    "Fugitive Emission Method (API RP 500): the required airflow dilutes "
    "the estimated leak rate to the safety factor fraction of the LFL. "
    "Review the leak source inventory whenever equipment changes."
)
LARGE_FLOOR_AREA_NOTE = (
    "Floor area exceeds the 2,000 sq ft guideline for the Area Method "
    "(AGA XL1001 Section 5.2). The Fugitive Emission Method is recommended."
)
IMPRACTICAL_AREA_NOTE = (
    "Required gross vent area exceeds 10% of the floor area and may be "
    "impractical for natural ventilation. Consider mechanical ventilation."
)
NOT_ACHIEVABLE_NOTE = (
    "Ventilation impossible: with no wind and no temperature difference "
    "there is no natural driving force. Required vent area cannot be "
    "achieved; mechanical ventilation is required."
)
GOAL_NOTES = {
    CalculationGoal.reclassify_div1_to_div2: (
        "Goal: reclassify the building from Class I, Division 1 to "
        "Class I, Division 2 by providing adequate natural ventilation."
    ),
    CalculationGoal.maintain_div2: (
        "Goal: verify that natural ventilation is adequate to maintain the "
        "existing Class I, Division 2 classification."
    ),
}


def build_recommendations(
    inputs: CalculationInputs,
    floor_area: float,
    gross_inlet_area: float,
    gross_outlet_area: float
) -> List[str]:
    """
    Derive advisory text from validated inputs and computed areas.

    Args:
        inputs: Validated calculation inputs
        floor_area: Building floor area, ft²
        gross_inlet_area: Gross inlet area, ft² (may be inf)
        gross_outlet_area: Gross outlet area, ft² (may be inf)

    Returns:
        Recommendations in rule order
    """
    notes: List[str] = []
    unobstructed = OBSTRUCTION_FACTORS[ObstructionType.none]

    if inputs.gas_type == GasType.heavier_than_air:
        notes.append(HEAVIER_THAN_AIR_NOTE)

    if inputs.wind_velocity < LOW_WIND_MPH:
        notes.append(LOW_WIND_NOTE)

    if abs(inputs.inside_temp_f - inputs.outside_temp_f) < LOW_DELTA_T_F:
        notes.append(LOW_DELTA_T_NOTE)

    if (inputs.inlet_obstruction_factor == unobstructed
            or inputs.outlet_obstruction_factor == unobstructed):
        notes.append(UNOBSTRUCTED_NOTE)

    if inputs.wind_orientation_factor == WIND_ORIENTATION_FACTORS[WindOrientation.parallel]:
        notes.append(PARALLEL_WIND_NOTE)

    if inputs.method == CalculationMethod.area_method:
        notes.append(AREA_METHOD_NOTE)
        if floor_area > AREA_METHOD_MAX_FLOOR_SQFT:
            notes.append(LARGE_FLOOR_AREA_NOTE)
    else:
        notes.append(FUGITIVE_METHOD_NOTE)

    gross_area = max(gross_inlet_area, gross_outlet_area)
    if math.isinf(gross_area):
        notes.append(NOT_ACHIEVABLE_NOTE)
    elif gross_area > PRACTICAL_AREA_FRACTION * floor_area:
        notes.append(IMPRACTICAL_AREA_NOTE)

    notes.append(GOAL_NOTES[CalculationGoal(inputs.goal)])

    return notes
