"""SERP: Google web search (organic results, knowledge graph, related questions)."""
from __future__ import annotations

from .common import make_serp_handler

HANDLER = make_serp_handler(
    "webSearch",
    "search",
    description="Google web search",
    placeholder="web scraping API",
)
