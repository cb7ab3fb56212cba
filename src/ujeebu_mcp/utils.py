"""Common utility helpers for Ujeebu MCP tools."""
from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Optional

from .errors import (
    EmptyRulesError,
    InvalidRulesError,
    MissingFieldError,
    UjeebuAPIError,
    UjeebuConfigError,
    UjeebuError,
    UnknownOperationError,
)

logger = logging.getLogger("ujeebu_mcp")


# ---------------------------------------------------------------------------
# Progress reporting to the MCP client
# ---------------------------------------------------------------------------

async def safe_ctx_info(ctx: Optional[Any], message: str) -> None:
    """Send a progress line to the client; a no-op outside an MCP request.

    The debug routes and direct `run_batch` calls pass no context, and a context
    created outside a request raises when used.
    """
    if ctx is None:
        return
    try:
        await ctx.info(message)
    except (ValueError, AttributeError):
        logger.debug("No MCP request context for progress: %s", message)


# ---------------------------------------------------------------------------
# Tool result envelopes
# ---------------------------------------------------------------------------

def ok_response(*, tool: str, input: dict[str, Any], output: Any) -> dict[str, Any]:
    return {"ok": True, "tool": tool, "input": input, "output": output}


def error_response(
    *,
    tool: str,
    input: dict[str, Any],
    error_type: str,
    message: str,
    details: Any | None = None,
    code: str = "E0000",
) -> dict[str, Any]:
    """Failure envelope; `code` is one of the E#### codes from classify_api_error / error_to_response."""
    return {
        "ok": False,
        "tool": tool,
        "input": input,
        "error": {"type": error_type, "code": code, "message": message, "details": details},
    }


def classify_api_error(status_code: int | None) -> tuple[str, str]:
    """Map an HTTP status (None for network failures) to (error_type, code)."""
    if status_code is None:
        return "network_error", "E2002"
    if status_code in (401, 403):
        return "auth_failed", "E2101"
    if status_code == 429:
        return "rate_limited", "E2103"
    if status_code == 404:
        return "not_found", "E2104"
    if status_code >= 500:
        return "upstream_error", "E2106"
    return "api_error", "E2001"


def error_to_response(tool: str, input: dict[str, Any], e: Exception) -> dict[str, Any]:
    details: dict[str, Any] = {}
    if isinstance(e, UjeebuError) and e.item_index is not None:
        details["item_index"] = e.item_index

    if isinstance(e, UjeebuConfigError):
        error_type, code = "config_error", "E1001"
    elif isinstance(e, UjeebuAPIError):
        error_type, code = classify_api_error(e.status_code)
        details["status_code"] = e.status_code
        details["payload"] = e.payload
    elif isinstance(e, InvalidRulesError):
        error_type, code = "json_error", "E4002"
    elif isinstance(e, (EmptyRulesError, MissingFieldError, ValueError)):
        error_type, code = "validation_error", "E4001"
    elif isinstance(e, UnknownOperationError):
        error_type, code = "invalid_tool", "E4003"
        details.update(resource=e.resource, operation=e.operation)
    elif isinstance(e, UjeebuError):
        error_type, code = "api_error", "E2001"
    else:
        error_type, code = "unexpected_error", "E9000"

    return error_response(
        tool=tool,
        input=input,
        error_type=error_type,
        code=code,
        message=str(e),
        details=details or None,
    )


# ---------------------------------------------------------------------------
# Decorator to convert adapter exceptions to structured output
# ---------------------------------------------------------------------------

def handle_mcp_errors(func: Callable) -> Callable:  # noqa: D401
    """Wrap a tool so it always returns dict instead of raising adapter errors."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):  # type: ignore[return-value]
        try:
            return await func(*args, **kwargs)
        except UjeebuError as e:
            logger.error("%s failed: %s", func.__name__, e)
            return error_to_response(func.__name__, _tool_input(kwargs), e)
        except ValueError as e:
            logger.error("Invalid input for %s: %s", func.__name__, e)
            return error_to_response(func.__name__, _tool_input(kwargs), e)
        except Exception as e:  # pragma: no cover
            logger.error("Unexpected error in %s: %s", func.__name__, str(e), exc_info=False)
            return error_to_response(func.__name__, _tool_input(kwargs), e)

    return wrapper


def _tool_input(kwargs: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in kwargs.items() if k != "ctx"}


def mask_secret(v: str | None) -> dict[str, Any]:
    if not v:
        return {"set": False}
    return {
        "set": True,
        "length": len(v),
        "tail4": v[-4:] if len(v) >= 4 else v,
    }
