"""
Calculation Service

Runs ventilation calculations and handles saved calculation records
({version, project, inputs, result}). A reloaded record re-run through the
calculator reproduces its stored result exactly.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from ventcalc.domain.calculations.ventilation import get_ventilation_calculator
from ventcalc.domain.core.models import CalculationInputs, ProjectInfo, VentilationResult
from ventcalc.services.error_types import (
    NonCriticalError,
    SavedCalculationError,
    log_error_with_context,
)
from ventcalc.utils import json_utils
from ventcalc.utils.logging_utils import log_operation, timed_operation

logger = logging.getLogger(__name__)

SAVED_CALCULATION_VERSION = 1


@dataclass(frozen=True)
class SavedCalculation:
    """Inputs, result and project header of one calculation"""
    inputs: CalculationInputs
    result: VentilationResult
    project: ProjectInfo = field(default_factory=ProjectInfo)
    version: int = SAVED_CALCULATION_VERSION

    def to_json(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "project": self.project.to_json(),
            "inputs": self.inputs.to_json(),
            "result": self.result.to_json(),
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "SavedCalculation":
        project, inputs = parse_calculation_document(data)
        if not isinstance(data.get("result"), dict):
            raise SavedCalculationError("Saved calculation has no 'result' section")
        try:
            result = VentilationResult.from_json(data["result"])
        except (KeyError, TypeError, ValueError) as e:
            raise SavedCalculationError(f"Saved result is malformed: {e}") from e
        return cls(inputs=inputs, result=result, project=project)


def parse_calculation_document(data: Any) -> Tuple[ProjectInfo, CalculationInputs]:
    """
    Accept either a saved calculation or a bare inputs object.

    Raises:
        SavedCalculationError: unsupported layout or version
        ValidationError: inputs are missing required fields
    """
    if not isinstance(data, dict):
        raise SavedCalculationError("Calculation document must be a JSON object")

    if "inputs" not in data:
        return ProjectInfo(), CalculationInputs.from_json(data)

    version = data.get("version", SAVED_CALCULATION_VERSION)
    if version != SAVED_CALCULATION_VERSION:
        raise SavedCalculationError(
            f"Unsupported saved calculation version: {version}",
            {"supported": SAVED_CALCULATION_VERSION}
        )

    try:
        project = ProjectInfo.from_json(data.get("project"))
    except (AttributeError, TypeError) as e:
        log_error_with_context(
            NonCriticalError(f"Project information ignored: {e}"), {"section": "project"}
        )
        project = ProjectInfo()

    return project, CalculationInputs.from_json(data["inputs"])


def run_calculation(inputs: CalculationInputs, project: Optional[ProjectInfo] = None) -> SavedCalculation:
    """Compute a result and bundle it with its inputs"""
    project = project or ProjectInfo()
    context = {"project": project.project_name, "method": str(getattr(inputs.method, "value", inputs.method))}
    with log_operation("ventilation_calculation", context, logger):
        result = get_ventilation_calculator().compute(inputs)
    return SavedCalculation(inputs=inputs, result=result, project=project)


def recalculate(saved: SavedCalculation) -> SavedCalculation:
    """Re-run the stored inputs through the current calculator"""
    return run_calculation(saved.inputs, saved.project)


@timed_operation("save_calculation")
def save_calculation(saved: SavedCalculation, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(json_utils.dumps(saved, indent=2), encoding="utf-8")
    logger.info(f"Saved calculation to {path}")
    return path


@timed_operation("load_calculation")
def load_calculation(path: Union[str, Path]) -> SavedCalculation:
    """
    Load a saved calculation file.

    Raises:
        SavedCalculationError: file missing, not JSON, or malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SavedCalculationError(f"Saved calculation not found: {path}") from e
    except json.JSONDecodeError as e:
        raise SavedCalculationError(f"Saved calculation is not valid JSON: {e}") from e
    return SavedCalculation.from_json(data)


def load_document(path: Union[str, Path]) -> Tuple[ProjectInfo, CalculationInputs]:
    """Read inputs from either a saved calculation or a bare inputs file"""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SavedCalculationError(f"Input file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise SavedCalculationError(f"Input file is not valid JSON: {e}") from e
    return parse_calculation_document(data)
