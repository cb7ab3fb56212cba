from __future__ import annotations

import sys
from typing import Any, Optional

from mcp.server.fastmcp import Context, FastMCP

from .actions.base import OperationHandler
from .config import settings
from .context import ServerContext
from .dispatcher import HANDLERS, describe_operations, execute
from .params import normalize_params
from .schema import describe_properties
from .transport import check_credentials
from .utils import handle_mcp_errors, mask_secret, ok_response, safe_ctx_info

_BATCH_HELP = (
    "\n\nArguments:\n"
    "- params: parameters shared by every item (object or JSON string)\n"
    "- items: optional list of per-item parameter overrides; one output item per entry\n"
    "- continue_on_fail: record per-item errors as {\"error\": ...} instead of aborting the batch"
)


def _normalize_items(items: Any) -> list[dict[str, Any]] | None:
    if items is None:
        return None
    if not isinstance(items, list):
        raise ValueError(f"items must be a list of objects, not {type(items).__name__}")
    return [normalize_params(item, f"items[{i}]") for i, item in enumerate(items)]


async def run_batch(
    *,
    resource: str,
    operation: str,
    params: Any,
    items: Any,
    continue_on_fail: bool | None,
    ctx: Optional[Context] = None,
) -> dict[str, Any]:
    """Run one batch through the dispatcher and wrap the result."""
    p = normalize_params(params, "params")
    p["resource"] = resource
    p["operation"] = operation
    item_overrides = _normalize_items(items)

    count = 1 if item_overrides is None else len(item_overrides)
    await safe_ctx_info(ctx, f"{resource}.{operation} items={count}")

    exec_ctx = await ServerContext.create_execution_context(
        parameters=p,
        items=item_overrides,
        continue_on_fail=continue_on_fail,
    )
    outputs = await execute(exec_ctx)
    return ok_response(
        tool=f"{resource}.{operation}",
        input={"params": p, "items": count, "continue_on_fail": exec_ctx.continue_on_fail},
        output={"items": [o.to_dict() for o in outputs]},
    )


def _register_operation(mcp: FastMCP, handler: OperationHandler) -> None:
    description = (
        f"{handler.description} ({handler.method} {handler.endpoint})\n\n"
        f"params:\n{describe_properties(handler.properties)}"
        f"{_BATCH_HELP}"
    )

    async def run_operation(
        params: Any = None,
        items: list[Any] | None = None,
        continue_on_fail: bool | None = None,
        ctx: Optional[Context] = None,
    ) -> dict[str, Any]:
        return await run_batch(
            resource=handler.resource,
            operation=handler.operation,
            params=params,
            items=items,
            continue_on_fail=continue_on_fail,
            ctx=ctx,
        )

    run_operation.__name__ = handler.tool_name.replace(".", "_")
    mcp.tool(name=handler.tool_name, description=description)(handle_mcp_errors(run_operation))


def register(mcp: FastMCP) -> None:
    """Register every Ujeebu tool with the MCP server instance.

    - one tool per operation: extract.article, scrape.getHtml, scrape.screenshot,
      scrape.pdf, scrape.extractRules, serp.webSearch ... serp.mapsSearch
    - ujeebu.run: same batch contract with resource/operation as arguments
    - ujeebu.operations: parameter catalogue
    - account.check: credential test (GET /account)
    - debug.status: effective configuration (no secrets)
    """
    for handler in HANDLERS:
        _register_operation(mcp, handler)

    @mcp.tool(name="ujeebu.run", description="Run any Ujeebu operation by resource and operation." + _BATCH_HELP)
    @handle_mcp_errors
    async def ujeebu_run(
        resource: str,
        operation: str,
        params: Any = None,
        items: list[Any] | None = None,
        continue_on_fail: bool | None = None,
        ctx: Optional[Context] = None,
    ) -> dict[str, Any]:
        return await run_batch(
            resource=resource,
            operation=operation,
            params=params,
            items=items,
            continue_on_fail=continue_on_fail,
            ctx=ctx,
        )

    @mcp.tool(name="ujeebu.operations", description="List Ujeebu operations with endpoints and parameters.")
    @handle_mcp_errors
    async def ujeebu_operations(ctx: Optional[Context] = None) -> dict[str, Any]:
        operations = describe_operations()
        await safe_ctx_info(ctx, f"{len(operations)} operations available.")
        return ok_response(tool="ujeebu.operations", input={}, output={"operations": operations})

    @mcp.tool(name="account.check", description="Verify the configured API key (GET /account) and return account usage.")
    @handle_mcp_errors
    async def account_check(ctx: Optional[Context] = None) -> dict[str, Any]:
        await safe_ctx_info(ctx, "Checking Ujeebu credentials.")
        exec_ctx = await ServerContext.create_execution_context()
        account = await check_credentials(exec_ctx)
        return ok_response(tool="account.check", input={}, output={"valid": True, "account": account})

    @mcp.tool(name="debug.status", description="Return server status and effective configuration (no secrets).")
    async def debug_status() -> dict[str, Any]:
        return ok_response(
            tool="debug.status",
            input={},
            output={
                "python": sys.version,
                "settings": {
                    "UJEEBU_API_KEY": mask_secret(settings.UJEEBU_API_KEY),
                    "UJEEBU_BASE_URL": settings.UJEEBU_BASE_URL,
                    "UJEEBU_CONTINUE_ON_FAIL": settings.UJEEBU_CONTINUE_ON_FAIL,
                    "UJEEBU_HTTP_TIMEOUT": settings.UJEEBU_HTTP_TIMEOUT,
                },
                "operations": [h.tool_name for h in HANDLERS],
            },
        )
