from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from ..context import ExecutionContext
from ..schema import Property
from ..types import HttpMethod, OutputItem

BuildParams = Callable[[ExecutionContext, int], dict[str, Any]]
PackageResponse = Callable[[ExecutionContext, int, Any], Awaitable[OutputItem]]


@dataclass(frozen=True)
class OperationHandler:
    """Everything the dispatcher needs to run one (resource, operation) pair."""

    resource: str
    operation: str
    endpoint: str
    method: HttpMethod
    build_params: BuildParams
    package_response: PackageResponse
    properties: tuple[Property, ...] = field(default_factory=tuple)
    description: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.resource, self.operation)

    @property
    def tool_name(self) -> str:
        return f"{self.resource}.{self.operation}"
