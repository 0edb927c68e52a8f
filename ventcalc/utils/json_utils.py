"""
JSON serialization utilities for enums, dataclasses and non-finite floats
"""

import json
import math
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any


def ensure_json_serializable(data: Any) -> Any:
    """
    Recursively convert results to plain JSON values.

    Enums become their values, records with to_json() use it, and NaN or
    infinity (an unachievable vent area) becomes None.
    """
    if isinstance(data, Enum):
        return data.value
    elif isinstance(data, float):
        return data if math.isfinite(data) else None
    elif isinstance(data, dict):
        return {k: ensure_json_serializable(v) for k, v in data.items()}
    elif isinstance(data, (list, tuple, set)):
        return [ensure_json_serializable(item) for item in data]
    elif hasattr(data, 'to_json'):
        return ensure_json_serializable(data.to_json())
    elif is_dataclass(data):
        return ensure_json_serializable(asdict(data))
    return data


def dumps(data: Any, **kwargs) -> str:
    """Strict JSON text: non-finite floats are written as null"""
    return json.dumps(ensure_json_serializable(data), allow_nan=False, **kwargs)
