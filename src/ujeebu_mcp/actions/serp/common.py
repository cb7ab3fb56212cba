"""Options and handler factory shared by the SERP operations.

All SERP searches are GET /serp with the query under `search` and a fixed
`search_type`; only the type and the schema texts differ between operations.
"""
from __future__ import annotations

from typing import Any

from ...context import ExecutionContext
from ...output import pass_through
from ...params import build_params, get_options, get_primary
from ...schema import Option, Property, displayed_for
from ...types import Endpoint, OutputItem
from ..base import OperationHandler

RESOURCE = "serp"

SEARCH_TYPES = ("search", "news", "images", "videos", "maps")

COMMON_SERP_OPTIONS: tuple[Property, ...] = (
    Property("lang", "Language", "string", "en", placeholder="en, es, fr, de", description="ISO 639-1 language code"),
    Property(
        "location", "Location", "string", "us",
        placeholder="us, uk, fr, de",
        description="Geographic location for the search (ISO 3166-1 alpha-2)",
    ),
    Property(
        "device", "Device", "options", "desktop",
        options=(Option("Desktop", "desktop"), Option("Mobile", "mobile"), Option("Tablet", "tablet")),
    ),
    Property("results_count", "Results Count", "number", 10, description="Maximum number of results per page"),
    Property("page", "Page", "number", 1),
    Property(
        "extra_params", "Extra Parameters", "string", "",
        placeholder="&safe=active",
        description="Additional query parameters to include in the search",
    ),
)


def search_properties(operation: str, description: str, placeholder: str) -> tuple[Property, ...]:
    return (
        Property(
            "search", "Search Query", "string", "",
            required=True,
            placeholder=placeholder,
            description=description,
            show=displayed_for(RESOURCE, operation),
        ),
        Property(
            "options", "Options", "collection", {},
            options=COMMON_SERP_OPTIONS,
            show=displayed_for(RESOURCE, operation),
        ),
    )


def make_serp_handler(
    operation: str,
    search_type: str,
    *,
    description: str,
    placeholder: str,
) -> OperationHandler:
    if search_type not in SEARCH_TYPES:
        raise ValueError(f"Unknown search_type: {search_type}")

    def build(ctx: ExecutionContext, index: int) -> dict[str, Any]:
        return build_params(
            ("search", get_primary(ctx, "search", index)),
            defaults={"search_type": search_type},
            options=get_options(ctx, index),
        )

    async def package(ctx: ExecutionContext, index: int, response: Any) -> OutputItem:
        return pass_through(response)

    return OperationHandler(
        resource=RESOURCE,
        operation=operation,
        endpoint=Endpoint.SERP,
        method="GET",
        build_params=build,
        package_response=package,
        properties=search_properties(operation, f"The {description} query to perform", placeholder),
        description=description,
    )
