"""SERP: Google News articles."""
from __future__ import annotations

from .common import make_serp_handler

HANDLER = make_serp_handler(
    "newsSearch",
    "news",
    description="Google News search",
    placeholder="artificial intelligence",
)
