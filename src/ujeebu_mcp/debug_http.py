from __future__ import annotations

from typing import Any, List

from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from mcp.server.fastmcp import FastMCP

from .registry import run_batch
from .utils import error_to_response, logger

__all__ = ["create_debug_routes"]


def _jsonify(data: Any) -> Any:
    """Best-effort make data JSON serializable."""
    if isinstance(data, (str, int, float, bool)) or data is None:
        return data
    if isinstance(data, dict):
        return {k: _jsonify(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [_jsonify(i) for i in data]
    if hasattr(data, "model_dump"):
        return _jsonify(data.model_dump())  # pydantic BaseModel
    return str(data)


async def _json_payload(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


def create_debug_routes(mcp_app: FastMCP, base_path: str = "/debug") -> List[Route]:
    """Return Starlette Route objects for the debug API.

    POST {base}/tools/list -> registered tool names and descriptions
    POST {base}/execute    -> {"resource", "operation", "params", "items", "continue_on_fail"}
                              run through the dispatcher without an MCP client
    """

    async def list_tools(request: Request) -> Response:
        tools_raw = await mcp_app.list_tools()
        tools = [
            {"name": getattr(t, "name", None), "description": getattr(t, "description", None)}
            for t in tools_raw
        ]
        return JSONResponse({"ok": True, "tools": tools})

    async def execute(request: Request) -> Response:
        payload = await _json_payload(request)
        if not isinstance(payload, dict):
            return JSONResponse({"ok": False, "error": "Body must be a JSON object"}, status_code=400)
        resource = payload.get("resource")
        operation = payload.get("operation")
        if not isinstance(resource, str) or not isinstance(operation, str):
            return JSONResponse({"ok": False, "error": "Missing resource or operation"}, status_code=400)

        try:
            result = await run_batch(
                resource=resource,
                operation=operation,
                params=payload.get("params"),
                items=payload.get("items"),
                continue_on_fail=payload.get("continue_on_fail"),
            )
        except Exception as e:
            logger.error("Debug execute %s.%s failed: %s", resource, operation, e)
            return JSONResponse(_jsonify(error_to_response(f"{resource}.{operation}", payload, e)))
        return JSONResponse(_jsonify(result))

    return [
        Route(f"{base_path}/tools/list", list_tools, methods=["POST"]),
        Route(f"{base_path}/execute", execute, methods=["POST"]),
    ]
