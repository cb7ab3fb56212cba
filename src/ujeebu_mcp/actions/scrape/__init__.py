"""Scrape API operations (/scrape)."""

from __future__ import annotations

from . import extract_rules, html, pdf, screenshot

HANDLERS = (
    html.HANDLER,
    screenshot.HANDLER,
    pdf.HANDLER,
    extract_rules.HANDLER,
)

__all__ = ["HANDLERS", "extract_rules", "html", "pdf", "screenshot"]
