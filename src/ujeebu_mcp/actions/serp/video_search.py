"""SERP: Google Videos results."""
from __future__ import annotations

from .common import make_serp_handler

HANDLER = make_serp_handler(
    "videoSearch",
    "videos",
    description="Google Videos search",
    placeholder="python tutorial",
)
