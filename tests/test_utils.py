import pytest

from ujeebu_mcp.errors import (
    EmptyRulesError,
    InvalidRulesError,
    MissingFieldError,
    UjeebuAPIError,
    UjeebuConfigError,
    UnknownOperationError,
)
from ujeebu_mcp.monitoring import PerformanceTimer
from ujeebu_mcp.utils import classify_api_error, error_to_response, handle_mcp_errors, mask_secret


@pytest.mark.parametrize(
    "status,expected",
    [
        (None, ("network_error", "E2002")),
        (401, ("auth_failed", "E2101")),
        (403, ("auth_failed", "E2101")),
        (404, ("not_found", "E2104")),
        (429, ("rate_limited", "E2103")),
        (400, ("api_error", "E2001")),
        (502, ("upstream_error", "E2106")),
    ],
)
def test_classify_api_error(status, expected):
    assert classify_api_error(status) == expected


@pytest.mark.parametrize(
    "error,code",
    [
        (UjeebuConfigError("no key"), "E1001"),
        (InvalidRulesError("Invalid JSON in extract rules: x"), "E4002"),
        (EmptyRulesError(), "E4001"),
        (MissingFieldError("url"), "E4001"),
        (ValueError("options must be an object"), "E4001"),
        (UnknownOperationError("scrape", "crawl"), "E4003"),
        (RuntimeError("surprise"), "E9000"),
    ],
)
def test_error_codes(error, code):
    assert error_to_response("t", {}, error)["error"]["code"] == code


def test_api_error_message_prefix_is_not_doubled():
    assert str(UjeebuAPIError("Ujeebu API error: timeout")) == "Ujeebu API error: timeout"
    assert str(UjeebuAPIError("timeout")) == "Ujeebu API error: timeout"


@pytest.mark.asyncio
async def test_handle_mcp_errors_returns_envelope():
    @handle_mcp_errors
    async def scrape_getHtml(params=None, ctx=None):
        raise MissingFieldError("url", item_index=2)

    result = await scrape_getHtml(params={"x": 1}, ctx=object())
    assert result["ok"] is False
    assert result["tool"] == "scrape_getHtml"
    assert result["input"] == {"params": {"x": 1}}
    assert result["error"]["details"] == {"item_index": 2}


def test_mask_secret():
    assert mask_secret(None) == {"set": False}
    assert mask_secret("abc") == {"set": True, "length": 3, "tail4": "abc"}


def test_performance_timer_records_elapsed():
    with PerformanceTimer(endpoint="/serp") as timer:
        pass
    assert timer.elapsed_ms is not None and timer.elapsed_ms >= 0
