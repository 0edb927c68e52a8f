"""
Enums for VentCalc models to ensure type safety and consistency
"""

from enum import Enum


class CalculationMethod(str, Enum):
    """How the required ventilation rate is determined"""
    area_method = 'area_method'
    fugitive_emission_method = 'fugitive_emission_method'


class GasType(str, Enum):
    """Buoyancy of the hazardous gas relative to air"""
    lighter_than_air = 'lighter_than_air'
    heavier_than_air = 'heavier_than_air'


class CalculationGoal(str, Enum):
    """Classification outcome the calculation is meant to support"""
    reclassify_div1_to_div2 = 'reclassify_div1_to_div2'
    maintain_div2 = 'maintain_div2'


class TerrainType(str, Enum):
    """Site terrain, mapped to a wind velocity reduction factor"""
    open = 'open'
    suburban = 'suburban'
    urban = 'urban'
    city_center = 'city_center'


class WindOrientation(str, Enum):
    """Vent orientation relative to the prevailing wind"""
    perpendicular = 'perpendicular'
    diagonal = 'diagonal'
    parallel = 'parallel'


class VentType(str, Enum):
    """Vent opening geometry, mapped to a discharge coefficient"""
    sharp_edged = 'sharp_edged'
    louvered = 'louvered'
    rounded = 'rounded'


class ObstructionType(str, Enum):
    """Vent covering, mapped to its free-area fraction"""
    none = 'none'
    bird_screen = 'bird_screen'
    insect_screen = 'insect_screen'
    weather_hood = 'weather_hood'
    standard_louver = 'standard_louver'
    acoustic_louver = 'acoustic_louver'


class ComponentType(str, Enum):
    """Equipment components with a tabulated fugitive leak rate"""
    valve_stem = 'valve_stem'
    flange = 'flange'
    pump_seal = 'pump_seal'
    compressor_seal = 'compressor_seal'
    relief_valve = 'relief_valve'
    threaded_connector = 'threaded_connector'
    open_ended_line = 'open_ended_line'
