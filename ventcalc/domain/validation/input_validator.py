"""
Calculation Input Validation

Checks a CalculationInputs record before any physics runs. Every problem is
collected first so the caller can report all offending fields together;
errors are then raised as a single ValidationError.

Covers:
- Numeric type, NaN and infinity checks
- Geometry and factor ranges, including derived floor area and volume
- Absolute temperature above zero
- Fugitive Emission Method parameters
"""

import logging
import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from ventcalc.domain.calculations.fugitive_emissions import total_leak_rate
from ventcalc.domain.core.constants import COMPONENT_LEAK_RATES_CFM, RANKINE_OFFSET
from ventcalc.domain.core.models import CalculationInputs, LeakSource
from ventcalc.models.enums import CalculationGoal, CalculationMethod, GasType
from ventcalc.services.error_types import ValidationError

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Validation issue severity levels"""
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationIssue:
    """Represents a validation issue found in calculation inputs"""
    field: str
    severity: ValidationSeverity
    message: str


@dataclass
class ValidationReport:
    """Result of input validation"""
    is_valid: bool
    issues: List[ValidationIssue]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]


def is_real_number(value: Any) -> bool:
    """True for finite real numbers; bools are rejected"""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


class InputValidator:
    """
    Validates calculation inputs against physical and method constraints.
    """

    def validate(self, inputs: CalculationInputs) -> ValidationReport:
        issues: List[ValidationIssue] = []

        # 1. Geometry
        geometry = ("length", "width", "height")
        geometry_ok = [
            self._check_number(issues, inputs, name, minimum=0.0, inclusive=False)
            for name in geometry
        ]
        if all(geometry_ok) and not (is_real_number(inputs.floor_area) and is_real_number(inputs.volume)):
            for name in geometry:
                issues.append(self._error(name, "building floor area or volume is too large to compute"))

        # 2. Environment
        for name in ("inside_temp_f", "outside_temp_f"):
            if self._check_number(issues, inputs, name):
                if getattr(inputs, name) + RANKINE_OFFSET <= 0:
                    issues.append(self._error(name, "absolute temperature must be above 0 °R"))
        self._check_number(issues, inputs, "wind_velocity", minimum=0.0)

        # 3. Site and device factors
        self._check_number(issues, inputs, "terrain_factor", minimum=0.0, inclusive=False)
        self._check_number(issues, inputs, "wind_orientation_factor", minimum=0.0, inclusive=False)
        for name in ("discharge_coefficient", "inlet_obstruction_factor", "outlet_obstruction_factor"):
            self._check_number(issues, inputs, name, minimum=0.0, inclusive=False, maximum=1.0)

        # 4. Selectors
        self._check_enum(issues, inputs, "method", CalculationMethod)
        self._check_enum(issues, inputs, "gas_type", GasType)
        self._check_enum(issues, inputs, "goal", CalculationGoal)

        # 5. Method-specific parameters
        if inputs.method == CalculationMethod.fugitive_emission_method:
            issues.extend(self._validate_fugitive(inputs))

        errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
        for issue in issues:
            if issue.severity == ValidationSeverity.WARNING:
                logger.warning(f"Input warning on {issue.field}: {issue.message}")

        return ValidationReport(is_valid=not errors, issues=issues)

    def validate_or_raise(self, inputs: CalculationInputs) -> ValidationReport:
        """Validate and raise a single ValidationError naming every bad field"""
        report = self.validate(inputs)
        if not report.is_valid:
            raise ValidationError(
                [{"field": i.field, "message": i.message} for i in report.errors]
            )
        return report

    def _validate_fugitive(self, inputs: CalculationInputs) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []

        if inputs.leak_sources:
            sources_ok = True
            for index, source in enumerate(inputs.leak_sources):
                prefix = f"leak_sources[{index}]"
                if not isinstance(source, LeakSource):
                    issues.append(self._error(prefix, "must be a leak source with component_type and quantity"))
                    sources_ok = False
                    continue
                component = source.component_type
                if not isinstance(component, str) or component not in COMPONENT_LEAK_RATES_CFM:
                    issues.append(self._error(
                        f"{prefix}.component_type",
                        f"unknown component type {source.component_type!r}"
                    ))
                    sources_ok = False
                quantity = source.quantity
                if (not isinstance(quantity, numbers.Integral) or not is_real_number(quantity)
                        or quantity < 0):
                    issues.append(self._error(f"{prefix}.quantity", "must be a non-negative integer"))
                    sources_ok = False

            if sources_ok:
                total = total_leak_rate(inputs.leak_sources)
                if not math.isfinite(total):
                    issues.append(self._error("leak_sources", "total leak rate is too large to compute"))
                elif total <= 0:
                    issues.append(self._error("leak_sources", "total leak rate must be greater than zero"))

            if inputs.leak_rate is not None:
                issues.append(ValidationIssue(
                    field="leak_rate",
                    severity=ValidationSeverity.WARNING,
                    message="ignored because leak sources are itemized"
                ))
        elif inputs.leak_rate is None:
            issues.append(self._error("leak_rate", "leak sources or a leak rate are required"))
        else:
            self._check_number(issues, inputs, "leak_rate", minimum=0.0, inclusive=False)

        self._check_number(issues, inputs, "lfl", minimum=0.0, inclusive=False, maximum=100.0,
                           required=True)
        self._check_number(issues, inputs, "safety_factor", minimum=0.0, inclusive=False,
                           maximum=1.0, required=True)
        return issues

    def _check_number(
        self,
        issues: List[ValidationIssue],
        inputs: CalculationInputs,
        name: str,
        minimum: Optional[float] = None,
        inclusive: bool = True,
        maximum: Optional[float] = None,
        required: bool = True
    ) -> bool:
        """Append an issue if the field is not a number within range; True when valid"""
        value = getattr(inputs, name)
        if value is None:
            if required:
                issues.append(self._error(name, "is required"))
            return False
        if not is_real_number(value):
            issues.append(self._error(name, f"must be a finite number, got {value!r}"))
            return False
        if minimum is not None:
            if inclusive and value < minimum:
                issues.append(self._error(name, f"must be at least {minimum:g}"))
                return False
            if not inclusive and value <= minimum:
                issues.append(self._error(name, f"must be greater than {minimum:g}"))
                return False
        if maximum is not None and value > maximum:
            issues.append(self._error(name, f"must not exceed {maximum:g}"))
            return False
        return True

    def _check_enum(self, issues: List[ValidationIssue], inputs: CalculationInputs,
                    name: str, enum_cls) -> None:
        value = getattr(inputs, name)
        try:
            enum_cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            issues.append(self._error(name, f"must be one of: {allowed}"))

    @staticmethod
    def _error(field: str, message: str) -> ValidationIssue:
        return ValidationIssue(field=field, severity=ValidationSeverity.ERROR, message=message)
