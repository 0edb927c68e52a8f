"""
Physical constants and lookup tables for natural ventilation sizing.
All values are Imperial (ft, lb, °R, mph, CFM).
"""

from typing import Dict

from ventcalc.models.enums import (
    ComponentType,
    ObstructionType,
    TerrainType,
    VentType,
    WindOrientation,
)

# Air properties / gravity
GRAVITY_FT_S2 = 32.2
R_AIR = 53.353  # ft·lbf/(lb·°R)
P_ATM_PSF = 2116.22
RANKINE_OFFSET = 459.67

# mph -> ft/min
WIND_UNITS_CONSTANT = 88.0

# Forces below this are treated as zero
EPSILON = 1e-6

# AGA XL1001 Appendix B criteria
AIR_CHANGE_MINUTES = 5.0
AREA_METHOD_CFM_PER_SQFT = 1.5
AREA_METHOD_MAX_FLOOR_SQFT = 2000.0

# Advisory thresholds
LOW_WIND_MPH = 5.0
LOW_DELTA_T_F = 10.0
PRACTICAL_AREA_FRACTION = 0.10


TERRAIN_FACTORS: Dict[TerrainType, float] = {
    TerrainType.open: 1.00,
    TerrainType.suburban: 0.85,
    TerrainType.urban: 0.67,
    TerrainType.city_center: 0.47,
}

# Wind effectiveness coefficient by vent orientation
WIND_ORIENTATION_FACTORS: Dict[WindOrientation, float] = {
    WindOrientation.perpendicular: 0.55,
    WindOrientation.diagonal: 0.30,
    WindOrientation.parallel: 0.15,
}

DISCHARGE_COEFFICIENTS: Dict[VentType, float] = {
    VentType.sharp_edged: 0.65,
    VentType.louvered: 0.60,
    VentType.rounded: 0.80,
}

OBSTRUCTION_FACTORS: Dict[ObstructionType, float] = {
    ObstructionType.none: 1.00,
    ObstructionType.bird_screen: 0.92,
    ObstructionType.insect_screen: 0.85,
    ObstructionType.weather_hood: 0.75,
    ObstructionType.standard_louver: 0.55,
    ObstructionType.acoustic_louver: 0.35,
}

OBSTRUCTION_NAMES: Dict[ObstructionType, str] = {
    ObstructionType.none: 'None (Unobstructed)',
    ObstructionType.bird_screen: 'Bird Screen (92% Free Area)',
    ObstructionType.insect_screen: 'Insect Screen (85% Free Area)',
    ObstructionType.weather_hood: 'Weather Hood (75% Free Area)',
    ObstructionType.standard_louver: 'Standard Louver (55% Free Area)',
    ObstructionType.acoustic_louver: 'Acoustic Louver (35% Free Area)',
}

# Fugitive leak rate per component, CFM per unit
COMPONENT_LEAK_RATES_CFM: Dict[ComponentType, float] = {
    ComponentType.valve_stem: 0.23,
    ComponentType.flange: 0.02,
    ComponentType.pump_seal: 0.42,
    ComponentType.compressor_seal: 2.15,
    ComponentType.relief_valve: 0.88,
    ComponentType.threaded_connector: 0.09,
    ComponentType.open_ended_line: 0.09,
}


def obstruction_name(factor: float) -> str:
    """Display label for an obstruction free-area factor"""
    for obstruction, value in OBSTRUCTION_FACTORS.items():
        if value == factor:
            return OBSTRUCTION_NAMES[obstruction]
    return f"Custom Factor: {factor}"
