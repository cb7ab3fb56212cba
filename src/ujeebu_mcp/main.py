"""
Ujeebu MCP Server

Exposes the Ujeebu web data API (article extraction, scraping, screenshots, PDFs,
rule-based extraction and Google SERP) as MCP tools.

Usage:
    ujeebu-mcp                                  # stdio (Claude Desktop, IDEs)
    ujeebu-mcp --transport streamable-http --port 8000
"""
from __future__ import annotations

import argparse
import logging

from mcp.server.fastmcp import FastMCP

from .config import settings
from .debug_http import create_debug_routes
from .registry import register

logger = logging.getLogger("ujeebu_mcp")


def create_server(host: str = "127.0.0.1", port: int = 8000, debug_routes: bool = False) -> FastMCP:
    mcp = FastMCP("Ujeebu", host=host, port=port)
    register(mcp)

    if debug_routes:
        for route in create_debug_routes(mcp):
            mcp.custom_route(route.path, methods=sorted(route.methods or ["POST"]))(route.endpoint)
        logger.info("Debug routes enabled under /debug")
    return mcp


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Ujeebu MCP server")
    parser.add_argument("--transport", choices=["stdio", "streamable-http"], default="stdio")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if not settings.UJEEBU_API_KEY:
        logger.warning("UJEEBU_API_KEY is not set; tool calls will fail with config_error.")

    mcp = create_server(
        host=args.host,
        port=args.port,
        debug_routes=settings.UJEEBU_DEBUG_ROUTES and args.transport == "streamable-http",
    )
    logger.info("Ujeebu MCP server starting (transport=%s)", args.transport)
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
