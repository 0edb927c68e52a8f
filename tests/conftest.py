"""
Pytest configuration and fixtures
"""
import pytest

from ventcalc.domain.calculations.ventilation import VentilationCalculator
from ventcalc.domain.core.models import CalculationInputs, LeakSource
from ventcalc.models.enums import CalculationMethod, ComponentType


@pytest.fixture
def calculator():
    return VentilationCalculator()


@pytest.fixture
def still_air_inputs():
    """40 x 30 x 12 ft building, no wind, no temperature difference"""
    return CalculationInputs(
        length=40.0,
        width=30.0,
        height=12.0,
        inside_temp_f=70.0,
        outside_temp_f=70.0,
        wind_velocity=0.0,
        method=CalculationMethod.area_method,
    )


@pytest.fixture
def stack_only_inputs():
    """Same building, 50 °F temperature difference, no wind"""
    return CalculationInputs(
        length=40.0,
        width=30.0,
        height=12.0,
        inside_temp_f=90.0,
        outside_temp_f=40.0,
        wind_velocity=0.0,
        discharge_coefficient=0.65,
        inlet_obstruction_factor=1.0,
        outlet_obstruction_factor=1.0,
    )


@pytest.fixture
def fugitive_inputs():
    """Ten flanges, 5% LFL gas, safety factor 0.25"""
    return CalculationInputs(
        length=40.0,
        width=30.0,
        height=12.0,
        inside_temp_f=90.0,
        outside_temp_f=40.0,
        wind_velocity=10.0,
        method=CalculationMethod.fugitive_emission_method,
        leak_sources=(LeakSource(ComponentType.flange, 10),),
        lfl=5.0,
        safety_factor=0.25,
    )
