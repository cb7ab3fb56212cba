"""Scrape: extract structured data with CSS selector rules."""
from __future__ import annotations

from typing import Any

from ...context import ExecutionContext
from ...output import package_extract_rules
from ...params import build_params, get_options, get_primary, normalize_params
from ...rules import RULE_TYPES, BuilderRules, JsonRules, RuleInput, compile_extract_rules
from ...schema import Option, Property, displayed_for
from ...types import Endpoint, OutputItem
from ..base import OperationHandler
from .common import RESOURCE, options_property, url_property

OPERATION = "extractRules"

RULE_FIELDS: tuple[Property, ...] = (
    Property("fieldName", "Field Name", "string", "", placeholder="title", description="Name of the field in the output"),
    Property("selector", "CSS Selector", "string", "", placeholder="h1.title"),
    Property(
        "type", "Type", "options", "text",
        options=tuple(Option(t, t) for t in RULE_TYPES),
        description="text, link (href), image (src), attr (named attribute) or obj (nested rules)",
    ),
    Property(
        "attribute", "Attribute Name", "string", "",
        placeholder="data-id",
        description="Attribute to extract (for attr type)",
        show={"type": ("attr",)},
    ),
    Property("multiple", "Multiple", "boolean", False, description="Whether to extract all matching elements as an array"),
)

PROPERTIES: tuple[Property, ...] = (
    url_property(OPERATION, "URL to extract data from", "https://example.com/products"),
    Property(
        "rulesMode", "Extract Rules Mode", "options", "builder",
        options=(Option("Visual Builder", "builder"), Option("JSON", "json")),
        show=displayed_for(RESOURCE, OPERATION),
    ),
    Property(
        "extractRulesJson", "Extract Rules (JSON)", "json", "{}",
        placeholder='{"title": {"selector": "h1", "type": "text"}}',
        show=displayed_for(RESOURCE, OPERATION, rulesMode=("json",)),
    ),
    Property(
        "extractionRules", "Extraction Rules", "fixedCollection", {},
        options=RULE_FIELDS,
        description='{"rules": [{"fieldName": ..., "selector": ..., "type": ..., "attribute": ..., "multiple": ...}]}',
        show=displayed_for(RESOURCE, OPERATION, rulesMode=("builder",)),
    ),
    options_property(OPERATION),
)


def rule_input(ctx: ExecutionContext, index: int) -> RuleInput:
    if ctx.get_parameter("rulesMode", index) == "json":
        return JsonRules(ctx.get_parameter("extractRulesJson", index))

    raw = ctx.get_parameter("extractionRules", index, {})
    # A bare list of rows is accepted as shorthand for {"rules": [...]}
    rows = raw if isinstance(raw, list) else normalize_params(raw, "extractionRules").get("rules") or []
    return BuilderRules.from_rows(rows)


def build(ctx: ExecutionContext, index: int) -> dict[str, Any]:
    url = get_primary(ctx, "url", index)
    options = get_options(ctx, index)
    extract_rules = compile_extract_rules(rule_input(ctx, index))

    return build_params(
        ("url", url),
        defaults={"extract_rules": extract_rules, "json": True},
        options=options,
    )


async def package(ctx: ExecutionContext, index: int, response: Any) -> OutputItem:
    return package_extract_rules(response, ctx.get_parameter("url", index))


HANDLER = OperationHandler(
    resource=RESOURCE,
    operation=OPERATION,
    endpoint=Endpoint.SCRAPE,
    method="POST",
    build_params=build,
    package_response=package,
    properties=PROPERTIES,
    description="Extract structured data from a web page using CSS selector rules.",
)
