"""Scrape: convert a page to PDF."""
from __future__ import annotations

from typing import Any

from ...context import ExecutionContext
from ...output import PDF, package_binary
from ...params import build_params, get_options, get_primary
from ...schema import Property, displayed_for
from ...types import Endpoint, OutputItem
from ..base import OperationHandler
from .common import RESOURCE, options_property, url_property

OPERATION = "pdf"

PROPERTIES: tuple[Property, ...] = (
    url_property(OPERATION, "URL to convert to PDF"),
    Property(
        "outputBinary", "Output Binary", "boolean", True,
        description="Whether to output the PDF as binary data for download",
        show=displayed_for(RESOURCE, OPERATION),
    ),
    Property(
        "binaryPropertyName", "Binary Property Name", "string", "pdf",
        show=displayed_for(RESOURCE, OPERATION, outputBinary=(True,)),
    ),
    options_property(OPERATION),
)


def build(ctx: ExecutionContext, index: int) -> dict[str, Any]:
    return build_params(
        ("url", get_primary(ctx, "url", index)),
        defaults={"response_type": "pdf", "json": True},
        options=get_options(ctx, index),
    )


async def package(ctx: ExecutionContext, index: int, response: Any) -> OutputItem:
    output_binary = ctx.get_parameter("outputBinary", index, True)
    return await package_binary(
        ctx,
        response,
        PDF,
        meta={"url": ctx.get_parameter("url", index)},
        output_binary=output_binary,
        binary_property_name=ctx.get_parameter("binaryPropertyName", index, "pdf") if output_binary else "",
    )


HANDLER = OperationHandler(
    resource=RESOURCE,
    operation=OPERATION,
    endpoint=Endpoint.SCRAPE,
    method="GET",
    build_params=build,
    package_response=package,
    properties=PROPERTIES,
    description="Convert a web page to PDF.",
)
