from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from ventcalc.domain.core.constants import (
    DISCHARGE_COEFFICIENTS,
    OBSTRUCTION_FACTORS,
    TERRAIN_FACTORS,
    WIND_ORIENTATION_FACTORS,
)
from ventcalc.domain.core.models import CalculationInputs, LeakSource, ProjectInfo
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


class ProjectInfoModel(BaseModel):
    project_name: str = ""
    location: str = ""
    company: str = ""
    date: str = ""
    performed_by: str = ""

    def to_domain(self) -> ProjectInfo:
        return ProjectInfo(**self.model_dump())


class LeakSourceModel(BaseModel):
    component_type: ComponentType
    quantity: int


class CalculationRequest(BaseModel):
    """
    Calculation inputs as submitted by a form.

    Each site/device factor may be given as a preset (terrain, orientation,
    vent_type, inlet_obstruction, outlet_obstruction) or as a number; an
    explicit number wins over a preset.
    """
    project: Optional[ProjectInfoModel] = None

    length: float
    width: float
    height: float
    inside_temp_f: float
    outside_temp_f: float
    wind_velocity: float = 0.0

    terrain: Optional[TerrainType] = None
    terrain_factor: Optional[float] = None
    wind_orientation: Optional[WindOrientation] = None
    wind_orientation_factor: Optional[float] = None
    vent_type: Optional[VentType] = None
    discharge_coefficient: Optional[float] = None
    inlet_obstruction: Optional[ObstructionType] = None
    inlet_obstruction_factor: Optional[float] = None
    outlet_obstruction: Optional[ObstructionType] = None
    outlet_obstruction_factor: Optional[float] = None

    method: CalculationMethod = CalculationMethod.area_method
    gas_type: GasType = GasType.lighter_than_air
    goal: CalculationGoal = CalculationGoal.reclassify_div1_to_div2

    leak_sources: List[LeakSourceModel] = Field(default_factory=list)
    leak_rate: Optional[float] = None
    lfl: Optional[float] = None
    safety_factor: Optional[float] = None

    def to_inputs(self) -> CalculationInputs:
        return CalculationInputs(
            length=self.length,
            width=self.width,
            height=self.height,
            inside_temp_f=self.inside_temp_f,
            outside_temp_f=self.outside_temp_f,
            wind_velocity=self.wind_velocity,
            terrain_factor=_pick(self.terrain_factor, TERRAIN_FACTORS, self.terrain,
                                 TerrainType.open),
            wind_orientation_factor=_pick(self.wind_orientation_factor, WIND_ORIENTATION_FACTORS,
                                          self.wind_orientation, WindOrientation.perpendicular),
            discharge_coefficient=_pick(self.discharge_coefficient, DISCHARGE_COEFFICIENTS,
                                        self.vent_type, VentType.sharp_edged),
            inlet_obstruction_factor=_pick(self.inlet_obstruction_factor, OBSTRUCTION_FACTORS,
                                           self.inlet_obstruction, ObstructionType.none),
            outlet_obstruction_factor=_pick(self.outlet_obstruction_factor, OBSTRUCTION_FACTORS,
                                            self.outlet_obstruction, ObstructionType.none),
            method=self.method,
            gas_type=self.gas_type,
            goal=self.goal,
            leak_sources=tuple(
                LeakSource(component_type=s.component_type, quantity=s.quantity)
                for s in self.leak_sources
            ),
            leak_rate=self.leak_rate,
            lfl=self.lfl,
            safety_factor=self.safety_factor,
        )


def _pick(explicit: Optional[float], table: Dict[Any, float], preset: Any, default: Any) -> float:
    if explicit is not None:
        return explicit
    return table[preset if preset is not None else default]


class VentilationResultModel(BaseModel):
    method: CalculationMethod
    gas_type: GasType
    goal: CalculationGoal
    building_volume: float
    floor_area: float
    inside_temp_abs: float
    outside_temp_abs: float
    air_density_inside: float
    air_density_outside: float
    air_density_delta: float
    average_air_density: float
    required_ventilation_rate: float
    airflow_by_volume: Optional[float] = None
    airflow_by_area: Optional[float] = None
    total_leak_rate: Optional[float] = None
    max_concentration: Optional[float] = None
    effective_obstruction_coefficient: float
    effective_wind_velocity: float
    wind_flow_per_area: float
    stack_flow_per_area: float
    total_flow_per_area: float
    # None when ventilation is not achievable
    free_vent_area: Optional[float] = None
    gross_inlet_area: Optional[float] = None
    gross_outlet_area: Optional[float] = None
    total_gross_area: Optional[float] = None
    inlet_obstruction_name: str
    outlet_obstruction_name: str
    achievable: bool
    recommendations: List[str]


class CalculationResponse(BaseModel):
    version: int
    project: ProjectInfoModel
    inputs: Dict[str, Any]
    result: VentilationResultModel


class FactorTablesResponse(BaseModel):
    terrain_factors: Dict[str, float]
    wind_orientation_factors: Dict[str, float]
    discharge_coefficients: Dict[str, float]
    obstruction_factors: Dict[str, float]
    component_leak_rates_cfm: Dict[str, float]


class ErrorDetail(BaseModel):
    type: str
    message: str
    fields: Optional[List[str]] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
