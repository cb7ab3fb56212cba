"""Extract API operations (/extract)."""

from __future__ import annotations

from . import article

HANDLERS = (article.HANDLER,)

__all__ = ["HANDLERS", "article"]
