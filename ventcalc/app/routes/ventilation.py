import logging
from typing import Any, Dict

from fastapi import APIRouter, Body

from ventcalc.domain.core.constants import (
    COMPONENT_LEAK_RATES_CFM,
    DISCHARGE_COEFFICIENTS,
    OBSTRUCTION_FACTORS,
    TERRAIN_FACTORS,
    WIND_ORIENTATION_FACTORS,
)
from ventcalc.models.schemas import (
    CalculationRequest,
    CalculationResponse,
    ErrorResponse,
    FactorTablesResponse,
)
from ventcalc.services.calculation_service import parse_calculation_document, run_calculation

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/calculate",
    response_model=CalculationResponse,
    responses={422: {"model": ErrorResponse}},
)
async def calculate(request: CalculationRequest):
    """
    Size natural ventilation openings for one building.

    An unachievable result (no driving force) is returned with
    achievable=false and null areas.
    """
    project = request.project.to_domain() if request.project else None
    saved = run_calculation(request.to_inputs(), project)
    return saved.to_json()


@router.post(
    "/recalculate",
    response_model=CalculationResponse,
    responses={422: {"model": ErrorResponse}},
)
async def recalculate(document: Dict[str, Any] = Body(...)):
    """Re-run a saved calculation (or bare inputs) through the current calculator"""
    project, inputs = parse_calculation_document(document)
    saved = run_calculation(inputs, project)
    return saved.to_json()


@router.get("/tables", response_model=FactorTablesResponse)
async def factor_tables():
    """Preset factor tables offered to form users"""
    return FactorTablesResponse(
        terrain_factors={k.value: v for k, v in TERRAIN_FACTORS.items()},
        wind_orientation_factors={k.value: v for k, v in WIND_ORIENTATION_FACTORS.items()},
        discharge_coefficients={k.value: v for k, v in DISCHARGE_COEFFICIENTS.items()},
        obstruction_factors={k.value: v for k, v in OBSTRUCTION_FACTORS.items()},
        component_leak_rates_cfm={k.value: v for k, v in COMPONENT_LEAK_RATES_CFM.items()},
    )
