"""Scrape: rendered HTML of a page."""
from __future__ import annotations

from typing import Any

from ...context import ExecutionContext
from ...output import package_html
from ...params import build_params, get_options, get_primary
from ...schema import Property, displayed_for
from ...types import Endpoint, OutputItem
from ..base import OperationHandler
from .common import RESOURCE, options_property, url_property

OPERATION = "getHtml"

PROPERTIES: tuple[Property, ...] = (
    url_property(OPERATION, "URL to scrape"),
    Property(
        "stripTags", "Strip Tags", "string", "",
        placeholder="script,style,noscript",
        description="Comma-separated list of tags/selectors to remove after rendering",
        show=displayed_for(RESOURCE, OPERATION),
    ),
    options_property(OPERATION),
)


def build(ctx: ExecutionContext, index: int) -> dict[str, Any]:
    url = get_primary(ctx, "url", index)
    strip_tags = ctx.get_parameter("stripTags", index, "")
    options = get_options(ctx, index)

    return build_params(
        ("url", url),
        defaults={"response_type": "html", "json": True},
        options=options,
        derived={"strip_tags": strip_tags} if strip_tags else None,
    )


async def package(ctx: ExecutionContext, index: int, response: Any) -> OutputItem:
    return package_html(response, ctx.get_parameter("url", index))


HANDLER = OperationHandler(
    resource=RESOURCE,
    operation=OPERATION,
    endpoint=Endpoint.SCRAPE,
    method="GET",
    build_params=build,
    package_response=package,
    properties=PROPERTIES,
    description="Get the rendered HTML of a web page.",
)
