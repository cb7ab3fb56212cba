"""Scrape: screenshot of a page, the full page, one element or a region."""
from __future__ import annotations

import json
from typing import Any

from ...context import ExecutionContext
from ...output import SCREENSHOT, package_binary
from ...params import build_params, get_options, get_primary
from ...schema import Option, Property, displayed_for
from ...types import Endpoint, OutputItem
from ..base import OperationHandler
from .common import RESOURCE, options_property, url_property

OPERATION = "screenshot"


def _shown(**extra: tuple[Any, ...]) -> dict[str, tuple[Any, ...]]:
    return displayed_for(RESOURCE, OPERATION, **extra)


PROPERTIES: tuple[Property, ...] = (
    url_property(OPERATION, "URL to capture screenshot of"),
    Property(
        "fullPage", "Full Page", "boolean", False,
        description="Whether to capture the full scrollable page instead of just the viewport",
        show=_shown(),
    ),
    Property(
        "screenshotType", "Partial Screenshot", "options", "none",
        options=(
            Option("Full Page or Viewport", "none"),
            Option("CSS Selector", "selector"),
            Option("Coordinates", "coordinates"),
        ),
        description="Capture a specific element or region",
        show=_shown(),
    ),
    Property(
        "elementSelector", "Element Selector", "string", "",
        placeholder="#main-content",
        show=_shown(screenshotType=("selector",)),
    ),
    Property("coordX", "X Coordinate", "number", 0, show=_shown(screenshotType=("coordinates",))),
    Property("coordY", "Y Coordinate", "number", 0, show=_shown(screenshotType=("coordinates",))),
    Property("coordWidth", "Width", "number", 800, show=_shown(screenshotType=("coordinates",))),
    Property("coordHeight", "Height", "number", 600, show=_shown(screenshotType=("coordinates",))),
    Property(
        "outputBinary", "Output Binary", "boolean", True,
        description="Whether to output the screenshot as binary data for download",
        show=_shown(),
    ),
    Property(
        "binaryPropertyName", "Binary Property Name", "string", "screenshot",
        show=_shown(outputBinary=(True,)),
    ),
    options_property(OPERATION),
)


def _number(value: Any) -> Any:
    # 800.0 must serialize as 800
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def screenshot_partial(ctx: ExecutionContext, index: int) -> str | None:
    screenshot_type = ctx.get_parameter("screenshotType", index, "none")
    if screenshot_type == "selector":
        return ctx.get_parameter("elementSelector", index)
    if screenshot_type == "coordinates":
        coords = {
            "x": _number(ctx.get_parameter("coordX", index)),
            "y": _number(ctx.get_parameter("coordY", index)),
            "width": _number(ctx.get_parameter("coordWidth", index)),
            "height": _number(ctx.get_parameter("coordHeight", index)),
        }
        return json.dumps(coords, separators=(",", ":"))
    return None


def build(ctx: ExecutionContext, index: int) -> dict[str, Any]:
    url = get_primary(ctx, "url", index)
    full_page = ctx.get_parameter("fullPage", index, False)
    options = get_options(ctx, index)
    partial = screenshot_partial(ctx, index)

    return build_params(
        ("url", url),
        defaults={"response_type": "screenshot", "json": True, "screenshot_fullpage": full_page},
        options=options,
        derived={"screenshot_partial": partial} if partial is not None else None,
    )


async def package(ctx: ExecutionContext, index: int, response: Any) -> OutputItem:
    output_binary = ctx.get_parameter("outputBinary", index, True)
    return await package_binary(
        ctx,
        response,
        SCREENSHOT,
        meta={"url": ctx.get_parameter("url", index), "fullPage": ctx.get_parameter("fullPage", index, False)},
        output_binary=output_binary,
        binary_property_name=ctx.get_parameter("binaryPropertyName", index, "screenshot") if output_binary else "",
    )


HANDLER = OperationHandler(
    resource=RESOURCE,
    operation=OPERATION,
    endpoint=Endpoint.SCRAPE,
    method="GET",
    build_params=build,
    package_response=package,
    properties=PROPERTIES,
    description="Capture a screenshot of a web page (viewport, full page, element or region).",
)
