"""Ujeebu operations.

Each module declares its parameter schema (`PROPERTIES`) and an `OperationHandler`
(`HANDLER`) pairing a parameter builder with a response packager:

- extract/: article extraction (POST /extract)
- scrape/: HTML, screenshot, PDF and rule-based extraction (/scrape)
- serp/: Google web, news, image, video and maps search (GET /serp)
"""

from __future__ import annotations

from .base import OperationHandler

__all__ = [
    "OperationHandler",
    "extract",
    "scrape",
    "serp",
]
