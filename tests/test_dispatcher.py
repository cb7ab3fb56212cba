import httpx
import pytest

from ujeebu_mcp.dispatcher import (
    DISPATCH_TABLE,
    EXPECTED_OPERATIONS,
    HANDLERS,
    describe_operations,
    execute,
    get_handler,
    iter_results,
)
from ujeebu_mcp.errors import MissingFieldError, UjeebuAPIError, UnknownOperationError

ENDPOINTS = {
    ("extract", "article"): ("/extract", "POST"),
    ("scrape", "getHtml"): ("/scrape", "GET"),
    ("scrape", "screenshot"): ("/scrape", "GET"),
    ("scrape", "pdf"): ("/scrape", "GET"),
    ("scrape", "extractRules"): ("/scrape", "POST"),
    ("serp", "webSearch"): ("/serp", "GET"),
    ("serp", "newsSearch"): ("/serp", "GET"),
    ("serp", "imageSearch"): ("/serp", "GET"),
    ("serp", "videoSearch"): ("/serp", "GET"),
    ("serp", "mapsSearch"): ("/serp", "GET"),
}


def test_every_operation_has_exactly_one_handler():
    assert set(DISPATCH_TABLE) == EXPECTED_OPERATIONS == set(ENDPOINTS)
    assert len(HANDLERS) == len(EXPECTED_OPERATIONS)


@pytest.mark.parametrize("key", sorted(ENDPOINTS))
def test_endpoint_and_method(key):
    handler = get_handler(*key)
    assert (handler.endpoint, handler.method) == ENDPOINTS[key]
    assert handler.tool_name == f"{key[0]}.{key[1]}"


def test_unknown_operation():
    with pytest.raises(UnknownOperationError, match="Unknown operation 'crawl' for resource 'scrape'"):
        get_handler("scrape", "crawl")


@pytest.mark.asyncio
async def test_unknown_operation_fails_the_item(api, make_ctx):
    with pytest.raises(UnknownOperationError):
        await execute(make_ctx({"resource": "scrape", "operation": "crawl"}))
    assert api.requests == []


@pytest.mark.asyncio
async def test_outputs_follow_input_order(api, make_ctx):
    api.handler = lambda request: httpx.Response(200, json={"seen": api.body(request)["url"]})
    urls = [f"https://example.com/{i}" for i in range(4)]
    ctx = make_ctx({"resource": "extract", "operation": "article"}, items=[{"url": u} for u in urls])

    outputs = await execute(ctx)

    assert [o.json["seen"] for o in outputs] == urls
    assert [o.paired_item for o in outputs] == [0, 1, 2, 3]
    assert [api.body(r)["url"] for r in api.requests] == urls


def _fail_on_b(request):
    if request.url.params.get("url") == "https://b":
        return httpx.Response(500, json={"message": "boom"})
    return httpx.Response(200, json={"ok": True})


@pytest.mark.asyncio
async def test_continue_on_fail_records_errors_in_place(api, make_ctx):
    api.handler = _fail_on_b
    ctx = make_ctx(
        {"resource": "scrape", "operation": "getHtml"},
        items=[{"url": "https://a"}, {"url": "https://b"}, {"url": ""}, {"url": "https://d"}],
        continue_on_fail=True,
    )
    outputs = await execute(ctx)

    assert len(outputs) == 4
    assert outputs[0].json == {"html": None, "url": "https://a"}
    assert outputs[1].json == {"error": "Ujeebu API error: Request failed with status code 500"}
    assert outputs[2].json == {"error": "The required parameter 'url' is missing or empty"}
    assert outputs[3].json == {"html": None, "url": "https://d"}
    assert [o.paired_item for o in outputs] == [0, 1, 2, 3]
    assert len(api.requests) == 3


@pytest.mark.asyncio
async def test_without_continue_on_fail_first_error_aborts(api, make_ctx):
    api.handler = _fail_on_b
    ctx = make_ctx(
        {"resource": "scrape", "operation": "getHtml"},
        items=[{"url": "https://a"}, {"url": "https://b"}, {"url": "https://c"}],
    )
    with pytest.raises(UjeebuAPIError) as exc:
        await execute(ctx)

    assert exc.value.status_code == 500
    assert exc.value.item_index == 1
    assert [str(r.url.params["url"]) for r in api.requests] == ["https://a", "https://b"]


@pytest.mark.asyncio
async def test_validation_error_carries_item_index(api, make_ctx):
    ctx = make_ctx({"resource": "serp", "operation": "webSearch"}, items=[{"search": "a"}, {"search": ""}])
    with pytest.raises(MissingFieldError) as exc:
        await execute(ctx)
    assert exc.value.item_index == 1
    assert len(api.requests) == 1


@pytest.mark.asyncio
async def test_iter_results_reports_every_item(api, make_ctx):
    api.handler = _fail_on_b
    ctx = make_ctx({"resource": "scrape", "operation": "getHtml"}, items=[{"url": "https://b"}, {"url": "https://c"}])
    results = [r async for r in iter_results(ctx)]

    assert [r.index for r in results] == [0, 1]
    assert not results[0].ok and isinstance(results[0].error, UjeebuAPIError)
    assert results[1].ok and results[1].output.json["url"] == "https://c"


@pytest.mark.asyncio
async def test_resource_and_operation_are_read_from_the_first_item(api, make_ctx):
    ctx = make_ctx(
        {"resource": "serp", "operation": "webSearch"},
        items=[{"search": "a"}, {"search": "b", "operation": "newsSearch"}],
    )
    await execute(ctx)
    assert [r.url.params["search_type"] for r in api.requests] == ["search", "search"]


def test_describe_operations_lists_parameters():
    ops = {op["tool"]: op for op in describe_operations()}
    assert set(ops) == {h.tool_name for h in HANDLERS}

    shot = ops["scrape.screenshot"]
    assert shot["endpoint"] == "/scrape" and shot["method"] == "GET"
    names = [p["name"] for p in shot["parameters"]]
    assert names[0] == "url"
    assert {"fullPage", "screenshotType", "coordX", "outputBinary", "binaryPropertyName", "options"} <= set(names)

    options = next(p for p in ops["scrape.getHtml"]["parameters"] if p["name"] == "options")
    password = next(o for o in options["options"] if o["name"] == "custom_proxy_password")
    assert password["default"] is None
