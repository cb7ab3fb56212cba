"""Batch dispatcher.

Resource and operation are read once, from item 0, and the same handler runs for
every item of the batch. Items run one after another in input order; each yields an
`ItemResult`. With continue-on-failure a failed item becomes `{"error": message}`,
otherwise the first failure is raised and the remaining items never start.
"""
from __future__ import annotations

from contextlib import aclosing
from typing import Any, AsyncIterator

from .actions import extract, scrape, serp
from .actions.base import OperationHandler
from .context import ExecutionContext
from .errors import UjeebuError, UnknownOperationError
from .schema import Option, Property, property_schema
from .transport import ujeebu_api_request
from .types import ItemResult, OutputItem
from .utils import logger

HANDLERS: tuple[OperationHandler, ...] = extract.HANDLERS + scrape.HANDLERS + serp.HANDLERS

DISPATCH_TABLE: dict[tuple[str, str], OperationHandler] = {h.key: h for h in HANDLERS}

EXPECTED_OPERATIONS = frozenset(
    {
        ("extract", "article"),
        ("scrape", "getHtml"),
        ("scrape", "screenshot"),
        ("scrape", "pdf"),
        ("scrape", "extractRules"),
        ("serp", "webSearch"),
        ("serp", "newsSearch"),
        ("serp", "imageSearch"),
        ("serp", "videoSearch"),
        ("serp", "mapsSearch"),
    }
)

if len(DISPATCH_TABLE) != len(HANDLERS) or set(DISPATCH_TABLE) != EXPECTED_OPERATIONS:
    raise RuntimeError(
        "Dispatch table mismatch: "
        f"missing={sorted(EXPECTED_OPERATIONS - set(DISPATCH_TABLE))} "
        f"extra={sorted(set(DISPATCH_TABLE) - EXPECTED_OPERATIONS)}"
    )


def _operation_property(resource: str, default: str) -> Property:
    return Property(
        "operation", "Operation", "options", default,
        options=tuple(Option(h.operation, h.operation, h.description) for h in HANDLERS if h.resource == resource),
        show={"resource": (resource,)},
    )


NODE_PROPERTIES: tuple[Property, ...] = (
    Property(
        "resource", "Resource", "options", "scrape",
        options=(
            Option("Extract", "extract", "Extract article content from news/blog URLs"),
            Option("Scrape", "scrape", "Scrape web pages, take screenshots, or generate PDFs"),
            Option("SERP", "serp", "Get Google search results"),
        ),
    ),
    _operation_property("extract", "article"),
    _operation_property("scrape", "getHtml"),
    _operation_property("serp", "webSearch"),
) + tuple(p for h in HANDLERS for p in h.properties)


def get_handler(resource: str, operation: str) -> OperationHandler:
    handler = DISPATCH_TABLE.get((resource, operation))
    if handler is None:
        raise UnknownOperationError(resource, operation)
    return handler


async def execute_item(ctx: ExecutionContext, handler: OperationHandler, index: int) -> OutputItem:
    """Build parameters, call the API and package the response for one item."""
    params = handler.build_params(ctx, index)
    if handler.method == "GET":
        response = await ujeebu_api_request(ctx, "GET", handler.endpoint, qs=params)
    else:
        response = await ujeebu_api_request(ctx, "POST", handler.endpoint, body=params)
    item = await handler.package_response(ctx, index, response)
    item.paired_item = index
    return item


def _select(ctx: ExecutionContext) -> tuple[str, str]:
    return ctx.get_parameter("resource", 0), ctx.get_parameter("operation", 0)


async def iter_results(ctx: ExecutionContext) -> AsyncIterator[ItemResult]:
    """Yield one ItemResult per input item, in order. Never raises for item failures."""
    resource, operation = _select(ctx)
    for index in range(len(ctx.get_input_data())):
        try:
            handler = get_handler(resource, operation)
            yield ItemResult(index=index, output=await execute_item(ctx, handler, index))
        except Exception as e:
            if isinstance(e, UjeebuError) and e.item_index is None:
                e.item_index = index
            yield ItemResult(index=index, error=e)


async def iter_outputs(ctx: ExecutionContext) -> AsyncIterator[OutputItem]:
    """Yield output items; raise the first failure unless continue-on-failure is set."""
    async with aclosing(iter_results(ctx)) as results:
        async for result in results:
            if result.ok:
                yield result.output  # type: ignore[misc]
                continue
            error = result.error
            if not ctx.continue_on_fail:
                logger.error("Item %d failed, aborting batch: %s", result.index, error)
                raise error  # type: ignore[misc]
            logger.warning("Item %d failed, continuing: %s", result.index, error)
            yield OutputItem(json={"error": str(error)}, paired_item=result.index)


async def execute(ctx: ExecutionContext) -> list[OutputItem]:
    """Run the whole batch and return the output items in input order."""
    return [item async for item in iter_outputs(ctx)]


def describe_operations() -> list[dict[str, Any]]:
    return [
        {
            "tool": h.tool_name,
            "resource": h.resource,
            "operation": h.operation,
            "endpoint": h.endpoint,
            "method": h.method,
            "description": h.description,
            "parameters": [property_schema(p) for p in h.properties],
        }
        for h in HANDLERS
    ]
