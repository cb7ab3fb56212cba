"""Request parameter normalization shared by every operation."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from .context import ExecutionContext
from .errors import MissingFieldError


def normalize_params(params: Any, name: str) -> Dict[str, Any]:
    """
    Normalize a mapping-typed parameter to a dictionary.

    MCP clients frequently send objects as JSON strings, so both forms are accepted.

    Args:
        params: The value passed by the caller
        name: Parameter name for error reporting

    Returns:
        Normalized dictionary (empty for None)

    Raises:
        ValueError: If params cannot be normalized to a dictionary
    """
    if params is None or params == "":
        return {}

    if isinstance(params, Mapping):
        return dict(params)

    if isinstance(params, str):
        try:
            parsed = json.loads(params)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in {name}: {e}. "
                f"{name} should be an object, e.g. {{\"js\": true}}. "
                f"Received: {params[:100]}{'...' if len(params) > 100 else ''}"
            )
        if not isinstance(parsed, dict):
            raise ValueError(f"{name} must be a JSON object, not {type(parsed).__name__}")
        return parsed

    raise ValueError(
        f"{name} must be an object, not {type(params).__name__}. "
        f"Received: {str(params)[:100]}{'...' if len(str(params)) > 100 else ''}"
    )


def clean_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop every key whose value is None or the empty string."""
    return {k: v for k, v in params.items() if v is not None and v != ""}


def build_params(
    primary: tuple[str, Any],
    *,
    defaults: Optional[Mapping[str, Any]] = None,
    options: Optional[Mapping[str, Any]] = None,
    derived: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Assemble the flat request parameters for one item.

    `{primary, **defaults}` is overlaid by the options collection (options win),
    then by derived fields, and finally pruned of empty values.
    """
    key, value = primary
    params: Dict[str, Any] = {key: value}
    params.update(defaults or {})
    params.update(options or {})
    params.update(derived or {})
    return clean_params(params)


def get_primary(ctx: ExecutionContext, name: str, index: int) -> str:
    value = ctx.get_parameter(name, index)
    if value is None or value == "":
        raise MissingFieldError(name, item_index=index)
    return str(value)


def get_options(ctx: ExecutionContext, index: int, name: str = "options") -> Dict[str, Any]:
    return normalize_params(ctx.get_parameter(name, index, {}), name)
