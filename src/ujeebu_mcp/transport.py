"""Ujeebu API transport.

Builds and sends one authenticated request per call. There is no retry; any failure
is re-raised as `UjeebuAPIError` with the "Ujeebu API error: " prefix.
"""
from __future__ import annotations

from typing import Any, Optional

import httpx

from .context import ExecutionContext
from .errors import UjeebuAPIError
from .monitoring import PerformanceTimer
from .types import CREDENTIALS_TYPE, Endpoint, HttpMethod, RequestOptions
from .utils import logger


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


async def ujeebu_api_request(
    ctx: ExecutionContext,
    method: HttpMethod,
    endpoint: str,
    body: Optional[dict[str, Any]] = None,
    qs: Optional[dict[str, Any]] = None,
) -> Any:
    """Make an authenticated request to the Ujeebu API and return the decoded body."""
    credentials = await ctx.get_credentials(CREDENTIALS_TYPE)

    options = RequestOptions(
        method=method,
        url=f"{credentials.base_url}{endpoint}",
        headers={
            "ApiKey": credentials.api_key,
            "Content-Type": "application/json",
        },
    )
    if body:
        options.body = body
    if qs:
        options.qs = qs

    logger.info("Ujeebu %s %s", method, endpoint)
    try:
        with PerformanceTimer(method=method, endpoint=endpoint):
            return await ctx.http_request(options)
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error("Ujeebu %s %s returned HTTP %s", method, endpoint, status)
        raise UjeebuAPIError(
            f"Request failed with status code {status}",
            status_code=status,
            payload=_error_payload(e.response),
        ) from e
    except httpx.HTTPError as e:
        logger.error("Ujeebu %s %s failed: %s", method, endpoint, e)
        raise UjeebuAPIError(str(e) or type(e).__name__) from e


async def ujeebu_api_get(
    ctx: ExecutionContext,
    endpoint: str,
    qs: Optional[dict[str, Any]] = None,
) -> Any:
    return await ujeebu_api_request(ctx, "GET", endpoint, None, qs)


async def ujeebu_api_post(
    ctx: ExecutionContext,
    endpoint: str,
    body: Optional[dict[str, Any]] = None,
    qs: Optional[dict[str, Any]] = None,
) -> Any:
    return await ujeebu_api_request(ctx, "POST", endpoint, body, qs)


async def check_credentials(ctx: ExecutionContext) -> Any:
    """GET /account; succeeds only when the API key is accepted."""
    return await ujeebu_api_get(ctx, Endpoint.ACCOUNT)
