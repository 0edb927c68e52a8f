"""
Data models for natural ventilation sizing
Inputs and results are immutable; every calculation produces a new result
"""

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type

from ventcalc.domain.core.constants import (
    DISCHARGE_COEFFICIENTS,
    OBSTRUCTION_FACTORS,
    TERRAIN_FACTORS,
    WIND_ORIENTATION_FACTORS,
)
from ventcalc.models.enums import (
    CalculationGoal,
    CalculationMethod,
    ComponentType,
    GasType,
    ObstructionType,
    TerrainType,
    VentType,
    WindOrientation,
)
from ventcalc.services.error_types import ValidationError


def _coerce_enum(enum_cls: Type[Enum], value: Any) -> Any:
    """Convert to enum_cls when possible; leave unknown values for the validator to report"""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class LeakSource:
    """Itemized fugitive emission source"""
    component_type: ComponentType
    quantity: int

    def to_json(self) -> Dict[str, Any]:
        return {
            "component_type": _enum_value(self.component_type),
            "quantity": self.quantity,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "LeakSource":
        return cls(
            component_type=_coerce_enum(ComponentType, data.get("component_type")),
            quantity=data.get("quantity"),
        )


@dataclass(frozen=True)
class ProjectInfo:
    """Report header information; not used by the calculation"""
    project_name: str = ""
    location: str = ""
    company: str = ""
    date: str = ""
    performed_by: str = ""

    def to_json(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> "ProjectInfo":
        data = data or {}
        return cls(**{f.name: str(data.get(f.name) or "") for f in fields(cls)})


@dataclass(frozen=True)
class CalculationInputs:
    """One set of building, site and method inputs"""
    # Geometry (ft)
    length: float
    width: float
    height: float

    # Environment
    inside_temp_f: float
    outside_temp_f: float
    wind_velocity: float = 0.0  # mph

    # Site / device factors
    terrain_factor: float = TERRAIN_FACTORS[TerrainType.open]
    wind_orientation_factor: float = WIND_ORIENTATION_FACTORS[WindOrientation.perpendicular]
    discharge_coefficient: float = DISCHARGE_COEFFICIENTS[VentType.sharp_edged]
    inlet_obstruction_factor: float = OBSTRUCTION_FACTORS[ObstructionType.none]
    outlet_obstruction_factor: float = OBSTRUCTION_FACTORS[ObstructionType.none]

    method: CalculationMethod = CalculationMethod.area_method
    gas_type: GasType = GasType.lighter_than_air
    goal: CalculationGoal = CalculationGoal.reclassify_div1_to_div2

    # Fugitive Emission Method only
    leak_sources: Tuple[LeakSource, ...] = field(default_factory=tuple)
    leak_rate: Optional[float] = None  # CFM, used when sources are not itemized
    lfl: Optional[float] = None  # % v/v
    safety_factor: Optional[float] = None

    @property
    def floor_area(self) -> float:
        return self.length * self.width

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    def to_json(self) -> Dict[str, Any]:
        data = {f.name: _enum_value(getattr(self, f.name)) for f in fields(self)}
        data["leak_sources"] = [source.to_json() for source in self.leak_sources]
        return data

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "CalculationInputs":
        """
        Build inputs from a parsed JSON object.

        Numeric values are passed through untouched so that the validator
        can report non-numeric entries by field name.
        """
        if not isinstance(data, dict):
            raise ValidationError([{"field": "inputs", "message": "must be an object"}])

        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}

        missing = [name for name in _REQUIRED_INPUTS if kwargs.get(name) is None]
        if missing:
            raise ValidationError([{"field": name, "message": "is required"} for name in missing])

        if "method" in kwargs:
            kwargs["method"] = _coerce_enum(CalculationMethod, kwargs["method"])
        if "gas_type" in kwargs:
            kwargs["gas_type"] = _coerce_enum(GasType, kwargs["gas_type"])
        if "goal" in kwargs:
            kwargs["goal"] = _coerce_enum(CalculationGoal, kwargs["goal"])

        sources = kwargs.pop("leak_sources", None) or []
        if not isinstance(sources, list) or not all(isinstance(s, dict) for s in sources):
            raise ValidationError([{"field": "leak_sources", "message": "must be a list of objects"}])
        kwargs["leak_sources"] = tuple(LeakSource.from_json(s) for s in sources)

        return cls(**kwargs)


_REQUIRED_INPUTS = ("length", "width", "height", "inside_temp_f", "outside_temp_f")

# Area fields that may be infinite when ventilation is not achievable
_UNBOUNDED_FIELDS = (
    "free_vent_area",
    "gross_inlet_area",
    "gross_outlet_area",
    "total_gross_area",
)


@dataclass(frozen=True)
class VentilationResult:
    """Output of one ventilation sizing run"""
    method: CalculationMethod
    gas_type: GasType
    goal: CalculationGoal

    # Geometry
    building_volume: float  # ft³
    floor_area: float  # ft²

    # Air properties
    inside_temp_abs: float  # °R
    outside_temp_abs: float  # °R
    air_density_inside: float  # lb/ft³
    air_density_outside: float
    air_density_delta: float
    average_air_density: float

    # Required ventilation rate and its components
    required_ventilation_rate: float  # CFM
    airflow_by_volume: Optional[float]
    airflow_by_area: Optional[float]
    total_leak_rate: Optional[float]
    max_concentration: Optional[float]

    # Driving forces (CFM per ft² of free area)
    effective_obstruction_coefficient: float
    effective_wind_velocity: float  # mph
    wind_flow_per_area: float
    stack_flow_per_area: float
    total_flow_per_area: float

    # Areas (ft²); inf when not achievable
    free_vent_area: float
    gross_inlet_area: float
    gross_outlet_area: float
    total_gross_area: float
    inlet_obstruction_name: str
    outlet_obstruction_name: str

    recommendations: Tuple[str, ...] = ()

    @property
    def achievable(self) -> bool:
        """False when there is no driving force to move air"""
        return math.isfinite(self.free_vent_area)

    def to_json(self) -> Dict[str, Any]:
        """Serialize; infinite areas are written as null"""
        data = {f.name: _enum_value(getattr(self, f.name)) for f in fields(self)}
        for name in _UNBOUNDED_FIELDS:
            if not math.isfinite(data[name]):
                data[name] = None
        data["recommendations"] = list(self.recommendations)
        data["achievable"] = self.achievable
        return data

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "VentilationResult":
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        for name in _UNBOUNDED_FIELDS:
            if kwargs.get(name) is None:
                kwargs[name] = math.inf
        kwargs["method"] = CalculationMethod(kwargs["method"])
        kwargs["gas_type"] = GasType(kwargs["gas_type"])
        kwargs["goal"] = CalculationGoal(kwargs["goal"])
        kwargs["recommendations"] = tuple(kwargs.get("recommendations") or ())
        return cls(**kwargs)
