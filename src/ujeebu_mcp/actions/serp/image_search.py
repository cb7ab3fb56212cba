"""SERP: Google Images results."""
from __future__ import annotations

from .common import make_serp_handler

HANDLER = make_serp_handler(
    "imageSearch",
    "images",
    description="Google Images search",
    placeholder="sunset landscape",
)
