"""SERP: Google Maps / local business results."""
from __future__ import annotations

from .common import make_serp_handler

HANDLER = make_serp_handler(
    "mapsSearch",
    "maps",
    description="Google Maps search",
    placeholder="restaurants near me",
)
