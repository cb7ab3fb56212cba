"""Extract: article content (title, text, author, dates, images) from news and blog URLs."""
from __future__ import annotations

from typing import Any

from ...context import ExecutionContext
from ...output import pass_through
from ...params import build_params, get_options, get_primary
from ...schema import Option, Property, displayed_for
from ...types import Endpoint, OutputItem
from ..base import OperationHandler

RESOURCE = "extract"
OPERATION = "article"

EXTRACT_OPTIONS: tuple[Property, ...] = (
    Property(
        "js", "Enable JavaScript", "options", False,
        options=(Option("No", False), Option("Yes", True), Option("Auto", "auto")),
        description='Whether to execute JavaScript. "auto" lets the extractor decide.',
    ),
    Property("author", "Extract Author", "boolean", True),
    Property("feeds", "Extract Feeds", "boolean", False, description="Whether to extract RSS feeds"),
    Property("html", "Extract HTML", "boolean", True),
    Property("images", "Extract Images", "boolean", True),
    Property("media", "Extract Media", "boolean", False, description="Whether to extract embedded media (videos, audio)"),
    Property("pub_date", "Extract Publish Date", "boolean", True),
    Property("text", "Extract Text", "boolean", True),
    Property("image_analysis", "Image Analysis", "boolean", True, description="Whether to analyze images for minimum dimensions"),
    Property(
        "is_article", "Is Article Detection", "boolean", True,
        description="Whether to return the probability of the URL being an article (0-1)",
    ),
    Property("js_timeout", "JS Timeout", "number", 30),
    Property("min_image_height", "Min Image Height", "number", 100),
    Property("min_image_width", "Min Image Width", "number", 200),
    Property("proxy_country", "Proxy Country", "string", "US", placeholder="US, UK, DE"),
    Property(
        "proxy_type", "Proxy Type", "options", "rotating",
        options=(
            Option("Rotating", "rotating"),
            Option("Advanced", "advanced"),
            Option("Premium", "premium"),
            Option("Residential", "residential"),
        ),
    ),
    Property(
        "quick_mode", "Quick Mode", "boolean", False,
        description="Faster (30-60%) but less detailed analysis",
    ),
    Property("scroll_down", "Scroll Down", "boolean", False),
    Property("scroll_wait", "Scroll Wait", "number", 100),
    Property("strip_tags", "Strip Tags", "string", "form", placeholder="form,script,style"),
    Property("timeout", "Timeout", "number", 60),
    Property(
        "wait_until", "Wait Until", "options", "load",
        options=(
            Option("Load", "load"),
            Option("DOM Content Loaded", "domcontentloaded"),
            Option("Network Idle", "networkidle"),
            Option("Commit", "commit"),
        ),
    ),
)

PROPERTIES: tuple[Property, ...] = (
    Property(
        "url", "URL", "string", "",
        required=True,
        placeholder="https://example.com/article",
        description="URL of the article to extract",
        show=displayed_for(RESOURCE, OPERATION),
    ),
    Property("options", "Options", "collection", {}, options=EXTRACT_OPTIONS, show=displayed_for(RESOURCE, OPERATION)),
)


def build(ctx: ExecutionContext, index: int) -> dict[str, Any]:
    return build_params(("url", get_primary(ctx, "url", index)), options=get_options(ctx, index))


async def package(ctx: ExecutionContext, index: int, response: Any) -> OutputItem:
    return pass_through(response)


HANDLER = OperationHandler(
    resource=RESOURCE,
    operation=OPERATION,
    endpoint=Endpoint.EXTRACT,
    method="POST",
    build_params=build,
    package_response=package,
    properties=PROPERTIES,
    description="Extract article content (title, text, author, publish date, images) into structured JSON.",
)
