"""
Fugitive Emission Method (API RP 500)
Required ventilation to dilute credible leaks below a fraction of the LFL
"""

import logging
from typing import Iterable

from ventcalc.domain.core.constants import COMPONENT_LEAK_RATES_CFM
from ventcalc.domain.core.models import CalculationInputs, LeakSource
from ventcalc.models.enums import ComponentType

logger = logging.getLogger(__name__)


def leak_rate_for(component_type: ComponentType) -> float:
    """Tabulated leak rate for one component, CFM per unit"""
    return COMPONENT_LEAK_RATES_CFM[ComponentType(component_type)]


def total_leak_rate(sources: Iterable[LeakSource]) -> float:
    """
    Sum of rate × quantity over all itemized sources.
    Zero-quantity sources contribute nothing.
    """
    total = 0.0
    for source in sources:
        total += leak_rate_for(source.component_type) * source.quantity
    return total


def resolve_leak_rate(inputs: CalculationInputs) -> float:
    """Itemized sources take precedence over a directly entered leak rate"""
    if inputs.leak_sources:
        q_leak = total_leak_rate(inputs.leak_sources)
        logger.debug(f"Leak rate from {len(inputs.leak_sources)} itemized sources: {q_leak:.4f} CFM")
        return q_leak
    return float(inputs.leak_rate)


def max_concentration(lfl_percent: float, safety_factor: float) -> float:
    """Highest allowed gas fraction: C × LFL (as a decimal)"""
    return safety_factor * (lfl_percent / 100.0)


def required_dilution_rate(leak_rate_cfm: float, lfl_percent: float, safety_factor: float) -> float:
    """
    Qv = Q_leak / (C × LFL_decimal)

    Args:
        leak_rate_cfm: Total credible leak rate
        lfl_percent: Lower flammable limit, % v/v
        safety_factor: C, 0 < C <= 1 (lower is more conservative)

    Returns:
        Required ventilation rate in CFM
    """
    return leak_rate_cfm / max_concentration(lfl_percent, safety_factor)
