"""Exception hierarchy raised by the Ujeebu adapter.

Every error raised while handling an input item ends up at the dispatcher's per-item
boundary. Messages are human-readable and preserved verbatim, since callers match on
substrings such as "Invalid JSON" or "At least one extraction rule is required".
"""
from __future__ import annotations

from typing import Any


class UjeebuError(Exception):
    """Base class for adapter errors."""

    def __init__(self, message: str, *, item_index: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.item_index = item_index


class UjeebuConfigError(UjeebuError):
    """No usable credentials were configured."""


class UjeebuAPIError(UjeebuError):
    """Transport-level failure talking to the Ujeebu API (network error, timeout, non-2xx)."""

    PREFIX = "Ujeebu API error: "

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
        item_index: int | None = None,
    ) -> None:
        if not message.startswith(self.PREFIX):
            message = f"{self.PREFIX}{message}"
        super().__init__(message, item_index=item_index)
        self.status_code = status_code
        self.payload = payload


class MissingFieldError(UjeebuError):
    def __init__(self, field: str, *, item_index: int | None = None) -> None:
        super().__init__(f"The required parameter '{field}' is missing or empty", item_index=item_index)
        self.field = field


class InvalidRulesError(UjeebuError):
    """Extraction rules given in JSON mode could not be parsed into an object."""


class EmptyRulesError(UjeebuError):
    def __init__(self, message: str = "At least one extraction rule is required", *, item_index: int | None = None) -> None:
        super().__init__(message, item_index=item_index)


class UnknownOperationError(UjeebuError):
    def __init__(self, resource: str, operation: str) -> None:
        super().__init__(f"Unknown operation '{operation}' for resource '{resource}'")
        self.resource = resource
        self.operation = operation
