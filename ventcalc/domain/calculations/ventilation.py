"""
Natural Ventilation Sizing for Hazardous-Area Enclosures
Required airflow by the Area Method (AGA XL1001) or the Fugitive Emission
Method (API RP 500), wind and stack driving forces combined in quadrature,
free vent area per opening and gross areas corrected for obstructions.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from ventcalc.domain.calculations.fugitive_emissions import (
    max_concentration,
    required_dilution_rate,
    resolve_leak_rate,
)
from ventcalc.domain.calculations.recommendations import build_recommendations
from ventcalc.domain.core.constants import (
    AIR_CHANGE_MINUTES,
    AREA_METHOD_CFM_PER_SQFT,
    EPSILON,
    GRAVITY_FT_S2,
    P_ATM_PSF,
    R_AIR,
    RANKINE_OFFSET,
    WIND_UNITS_CONSTANT,
    obstruction_name,
)
from ventcalc.domain.core.models import CalculationInputs, VentilationResult
from ventcalc.domain.validation.input_validator import InputValidator
from ventcalc.models.enums import CalculationGoal, CalculationMethod, GasType
from ventcalc.services.error_types import ValidationError

logger = logging.getLogger(__name__)


def to_rankine(temp_f: float) -> float:
    return temp_f + RANKINE_OFFSET


def air_density(temp_rankine: float) -> float:
    """Ideal gas density of air at atmospheric pressure, lb/ft³"""
    return P_ATM_PSF / (R_AIR * temp_rankine)


def wind_flow_per_area(
    wind_velocity_mph: float,
    terrain_factor: float,
    orientation_factor: float,
    obstruction_coefficient: float
) -> float:
    """
    Wind-driven flow per ft² of free area, CFM/ft²
    F_w = 88 × Cv × (V × terrain) × C_eff
    """
    effective_velocity = wind_velocity_mph * terrain_factor
    return WIND_UNITS_CONSTANT * orientation_factor * effective_velocity * obstruction_coefficient


def stack_flow_per_area(
    height_ft: float,
    density_delta: float,
    average_density: float,
    discharge_coefficient: float,
    obstruction_coefficient: float
) -> float:
    """
    Buoyancy-driven flow per ft² of free area, CFM/ft²
    F_s = 60 × K × C_eff × sqrt(g × h × Δρ / ρ_avg)

    The full height is the inlet-to-outlet separation. Zero without a
    density difference.
    """
    if density_delta <= EPSILON:
        return 0.0
    velocity_fps = math.sqrt(GRAVITY_FT_S2 * height_ft * density_delta / average_density)
    return 60.0 * discharge_coefficient * obstruction_coefficient * velocity_fps


def combine_driving_forces(wind_flow: float, stack_flow: float) -> float:
    """Wind and stack act independently; combine by root sum of squares"""
    return math.hypot(wind_flow, stack_flow)


def gross_area(free_area: float, obstruction_factor: float) -> float:
    """Physical vent size needed to provide free_area through an obstruction"""
    if math.isinf(free_area) or obstruction_factor == 0:
        return math.inf
    return free_area / obstruction_factor


class VentilationCalculator:
    """
    Natural ventilation calculator for Class I, Division 1/2 enclosures.

    compute() is a pure function of its inputs and the fixed constant
    tables; one instance can be shared across threads.
    """

    def __init__(self, validator: Optional[InputValidator] = None):
        self.validator = validator or InputValidator()

    def compute(self, inputs: CalculationInputs) -> VentilationResult:
        """
        Size natural ventilation openings.

        Args:
            inputs: Building, site and method inputs

        Returns:
            VentilationResult; areas are inf when no driving force exists

        Raises:
            ValidationError: inputs are missing, non-numeric or out of range
        """
        self.validator.validate_or_raise(inputs)
        logger.debug(f"Computing ventilation for inputs: {inputs}")

        method = CalculationMethod(inputs.method)
        volume = inputs.volume
        floor_area = inputs.floor_area

        # 1. Required ventilation rate
        required_rate, by_volume, by_area, leak_total, concentration = \
            self._calculate_required_rate(inputs, method, volume, floor_area)
        if not math.isfinite(required_rate):
            raise ValidationError(self._overflow_issues(inputs, method, "required ventilation rate"))

        # 2. Air properties
        inside_abs = to_rankine(inputs.inside_temp_f)
        outside_abs = to_rankine(inputs.outside_temp_f)
        rho_inside = air_density(inside_abs)
        rho_outside = air_density(outside_abs)
        rho_delta = abs(rho_inside - rho_outside)
        rho_avg = (rho_inside + rho_outside) / 2

        # 3. Driving forces
        c_eff = (inputs.inlet_obstruction_factor + inputs.outlet_obstruction_factor) / 2
        v_eff = inputs.wind_velocity * inputs.terrain_factor
        f_wind = wind_flow_per_area(
            inputs.wind_velocity, inputs.terrain_factor, inputs.wind_orientation_factor, c_eff
        )
        f_stack = stack_flow_per_area(
            inputs.height, rho_delta, rho_avg, inputs.discharge_coefficient, c_eff
        )
        f_total = combine_driving_forces(f_wind, f_stack)
        if not math.isfinite(f_total):
            raise ValidationError([
                {"field": name, "message": "wind driving force is too large to compute"}
                for name in ("wind_velocity", "terrain_factor", "wind_orientation_factor")
            ])

        logger.debug(f"Driving forces: wind={f_wind:.3f}, stack={f_stack:.3f}, "
                     f"total={f_total:.3f} CFM/ft²")

        # 4. Areas
        free_area = self._calculate_free_area(required_rate, f_total)
        gross_inlet = gross_area(free_area, inputs.inlet_obstruction_factor)
        gross_outlet = gross_area(free_area, inputs.outlet_obstruction_factor)
        if f_total >= EPSILON:
            self._check_areas_finite(inputs, method, free_area, gross_inlet, gross_outlet)

        # 5. Advisories
        recommendations = build_recommendations(inputs, floor_area, gross_inlet, gross_outlet)

        result = VentilationResult(
            method=method,
            gas_type=GasType(inputs.gas_type),
            goal=CalculationGoal(inputs.goal),
            building_volume=volume,
            floor_area=floor_area,
            inside_temp_abs=inside_abs,
            outside_temp_abs=outside_abs,
            air_density_inside=rho_inside,
            air_density_outside=rho_outside,
            air_density_delta=rho_delta,
            average_air_density=rho_avg,
            required_ventilation_rate=required_rate,
            airflow_by_volume=by_volume,
            airflow_by_area=by_area,
            total_leak_rate=leak_total,
            max_concentration=concentration,
            effective_obstruction_coefficient=c_eff,
            effective_wind_velocity=v_eff,
            wind_flow_per_area=f_wind,
            stack_flow_per_area=f_stack,
            total_flow_per_area=f_total,
            free_vent_area=free_area,
            gross_inlet_area=gross_inlet,
            gross_outlet_area=gross_outlet,
            total_gross_area=gross_inlet + gross_outlet,
            inlet_obstruction_name=obstruction_name(inputs.inlet_obstruction_factor),
            outlet_obstruction_name=obstruction_name(inputs.outlet_obstruction_factor),
            recommendations=tuple(recommendations),
        )

        if result.achievable:
            logger.info(f"Ventilation results: Qv={required_rate:.1f} CFM, "
                        f"free area={free_area:.2f} ft² per opening, "
                        f"gross inlet/outlet={gross_inlet:.2f}/{gross_outlet:.2f} ft²")
        else:
            logger.info(f"Ventilation results: Qv={required_rate:.1f} CFM, not achievable")

        return result

    def _calculate_required_rate(
        self,
        inputs: CalculationInputs,
        method: CalculationMethod,
        volume: float,
        floor_area: float
    ) -> Tuple[float, Optional[float], Optional[float], Optional[float], Optional[float]]:
        """
        Returns:
            (Qv, airflow_by_volume, airflow_by_area, total_leak_rate, max_concentration)
            with None for the values that do not apply to the method
        """
        if method == CalculationMethod.area_method:
            # One air change in 5 minutes vs. 1.5 CFM per ft² of floor
            by_volume = volume / AIR_CHANGE_MINUTES
            by_area = floor_area * AREA_METHOD_CFM_PER_SQFT
            required = max(by_volume, by_area)
            logger.debug(f"Area Method: volume criterion {by_volume:.1f} CFM, "
                         f"floor criterion {by_area:.1f} CFM")
            return required, by_volume, by_area, None, None

        leak_total = resolve_leak_rate(inputs)
        concentration = max_concentration(inputs.lfl, inputs.safety_factor)
        required = required_dilution_rate(leak_total, inputs.lfl, inputs.safety_factor)
        logger.debug(f"Fugitive Emission Method: Q_leak={leak_total:.4f} CFM, "
                     f"C×LFL={concentration:.4f}")
        return required, None, None, leak_total, concentration

    def _calculate_free_area(self, required_rate: float, total_flow_per_area: float) -> float:
        """Free area per opening; inf when there is no driving force"""
        if total_flow_per_area < EPSILON:
            logger.warning("No natural driving force (no wind, no temperature difference); "
                           "required vent area is not achievable")
            return math.inf
        return required_rate / total_flow_per_area

    def _check_areas_finite(
        self,
        inputs: CalculationInputs,
        method: CalculationMethod,
        free_area: float,
        gross_inlet: float,
        gross_outlet: float
    ) -> None:
        """With a driving force present, every area must be a real number"""
        if not math.isfinite(free_area):
            raise ValidationError(self._overflow_issues(inputs, method, "free vent area"))
        issues = [
            {"field": name, "message": "gross vent area is too large to compute"}
            for name, area in (
                ("inlet_obstruction_factor", gross_inlet),
                ("outlet_obstruction_factor", gross_outlet),
            )
            if not math.isfinite(area)
        ]
        if issues:
            raise ValidationError(issues)
        if not math.isfinite(gross_inlet + gross_outlet):
            raise ValidationError(self._overflow_issues(inputs, method, "total gross vent area"))

    @staticmethod
    def _overflow_issues(
        inputs: CalculationInputs,
        method: CalculationMethod,
        quantity: str
    ) -> List[Dict[str, str]]:
        """Issues naming the inputs that drive a quantity past float range"""
        if method == CalculationMethod.area_method:
            names = ("length", "width", "height")
        elif inputs.leak_sources:
            names = ("leak_sources",)
        else:
            names = ("leak_rate",)
        return [{"field": name, "message": f"{quantity} is too large to compute"} for name in names]


# Module-level instance
_ventilation_calculator = None


def get_ventilation_calculator() -> VentilationCalculator:
    """Get or create the global ventilation calculator"""
    global _ventilation_calculator
    if _ventilation_calculator is None:
        _ventilation_calculator = VentilationCalculator()
    return _ventilation_calculator


def calculate_ventilation(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    High-level function to size ventilation from a plain dict

    Args:
        input_data: CalculationInputs fields as JSON-style values

    Returns:
        VentilationResult as JSON-style dict (unachievable areas are None)
    """
    inputs = CalculationInputs.from_json(input_data)
    return get_ventilation_calculator().compute(inputs).to_json()
