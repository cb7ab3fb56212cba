"""SERP API operations (GET /serp)."""

from __future__ import annotations

from . import image_search, maps_search, news_search, video_search, web_search

HANDLERS = (
    web_search.HANDLER,
    news_search.HANDLER,
    image_search.HANDLER,
    video_search.HANDLER,
    maps_search.HANDLER,
)

__all__ = ["HANDLERS", "image_search", "maps_search", "news_search", "video_search", "web_search"]
