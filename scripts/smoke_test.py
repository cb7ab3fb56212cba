"""
Live smoke test for the Ujeebu MCP tool surface.

Runs tools in-process via FastMCP.call_tool() (no MCP client needed) against the
real API, so every call consumes credits.

Requirements:
- Set env var UJEEBU_API_KEY (or put it in .env)
"""

from __future__ import annotations

import asyncio
from typing import Any

from mcp.server.fastmcp import FastMCP

from ujeebu_mcp.config import settings
from ujeebu_mcp.context import ServerContext
from ujeebu_mcp.registry import register


async def _call(m: FastMCP, name: str, args: dict[str, Any]) -> Any:
    print(f"\n==> call {name} {args}")
    out = await m.call_tool(name, args)
    # FastMCP may return content blocks or (blocks, structured) depending on version.
    print("<== result type:", type(out).__name__)
    if isinstance(out, tuple) and len(out) == 2 and isinstance(out[1], dict):
        structured = out[1].get("result", out[1])
        print("<== ok:", structured.get("ok"))
        if structured.get("ok") is False:
            print("<== error:", structured.get("error"))
    else:
        print("<== blocks:", len(out))
    return out


async def main() -> None:
    if not settings.UJEEBU_API_KEY:
        raise SystemExit("Missing env var: UJEEBU_API_KEY")

    try:
        m = FastMCP("Ujeebu")
        register(m)

        tools = await m.list_tools()
        print("Registered tools:", [t.name for t in tools])

        await _call(m, "account.check", {})
        await _call(m, "serp.webSearch", {"params": {"search": "pizza", "options": {"results_count": 5}}})
        await _call(m, "scrape.getHtml", {"params": {"url": "https://example.com", "options": {"js": False}}})
        await _call(m, "extract.article", {"params": {"url": "https://ujeebu.com/blog/scraping-javascript-heavy-pages-using-puppeteer/"}})
        await _call(
            m,
            "scrape.extractRules",
            {"params": {"url": "https://example.com", "extractionRules": {"rules": [{"fieldName": "title", "selector": "h1"}]}}},
        )
    finally:
        await ServerContext.cleanup()


if __name__ == "__main__":
    asyncio.run(main())
