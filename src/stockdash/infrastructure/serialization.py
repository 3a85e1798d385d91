"""JSON output for DTOs: amounts become plain JSON numbers with 2 decimals."""

from __future__ import annotations

import dataclasses
import json
from decimal import Decimal
from typing import Any


def _default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_jsonable(dto: Any) -> Any:
    """Convert a DTO (or a list of DTOs) to plain dicts and lists."""
    if isinstance(dto, list):
        return [to_jsonable(item) for item in dto]
    if dataclasses.is_dataclass(dto) and not isinstance(dto, type):
        return dataclasses.asdict(dto)
    return dto


def to_json(dto: Any) -> str:
    return json.dumps(to_jsonable(dto), indent=2, default=_default)
