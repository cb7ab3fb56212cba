import base64

import pytest

from ujeebu_mcp.errors import UjeebuError
from ujeebu_mcp.output import PDF, SCREENSHOT, decode_base64, package_binary, package_html, pass_through

PNG = b"\x89PNG\r\n\x1a\n" + bytes(range(65))
PNG_B64 = base64.b64encode(PNG).decode()


def test_pass_through_keeps_mapping_and_wraps_other_bodies():
    assert pass_through({"article": {"title": "t"}}).json == {"article": {"title": "t"}}
    assert pass_through("plain text").json == {"data": "plain text"}
    assert pass_through(None).json == {"data": None}


def test_package_html_falls_back_to_html_source():
    assert package_html({"html": "<a/>"}, "u").json == {"html": "<a/>", "url": "u"}
    assert package_html({"html_source": "<b/>"}, "u").json == {"html": "<b/>", "url": "u"}
    assert package_html("not a mapping", "u").json == {"html": None, "url": "u"}


def test_decode_base64_is_lenient_about_whitespace_and_padding():
    wrapped = "\n".join(PNG_B64[i:i + 20] for i in range(0, len(PNG_B64), 20))
    assert decode_base64(wrapped, "screenshot") == PNG
    assert decode_base64(PNG_B64.rstrip("="), "screenshot") == PNG


def test_decode_base64_rejects_garbage():
    with pytest.raises(UjeebuError, match="not valid base64"):
        decode_base64("abcde", "pdf")


@pytest.mark.asyncio
async def test_binary_output_holds_the_same_bytes_as_inline_output(make_ctx):
    ctx = make_ctx()
    response = {"screenshot": PNG_B64}

    binary = await package_binary(
        ctx, response, SCREENSHOT, meta={"url": "u"}, output_binary=True, binary_property_name="shot",
    )
    inline = await package_binary(
        ctx, response, SCREENSHOT, meta={"url": "u"}, output_binary=False, binary_property_name="",
    )

    assert binary.json == {"url": "u"}
    assert set(binary.binary) == {"shot"}
    data = binary.binary["shot"]
    assert data.mime_type == "image/png"
    assert data.file_name == "screenshot.png"
    assert data.file_size == len(PNG)
    assert base64.b64decode(data.data) == base64.b64decode(inline.json["screenshot"]) == PNG
    assert inline.binary is None


@pytest.mark.asyncio
async def test_missing_payload_stays_inline_even_in_binary_mode(make_ctx):
    item = await package_binary(
        make_ctx(), {}, PDF, meta={"url": "u"}, output_binary=True, binary_property_name="pdf",
    )
    assert item.json == {"url": "u", "pdf": None}
    assert item.binary is None


def test_decode_base64_accepts_url_safe_alphabet():
    raw = bytes([0xFB, 0xFF, 0xBF]) * 4
    encoded = base64.urlsafe_b64encode(raw).decode()
    assert "-" in encoded or "_" in encoded
    assert decode_base64(encoded, "screenshot") == raw


@pytest.mark.parametrize("payload", ["iVBO!!RwoK", "aGVs*bG8="])
def test_decode_base64_rejects_characters_outside_the_alphabet(payload):
    with pytest.raises(UjeebuError, match="not valid base64"):
        decode_base64(payload, "screenshot")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"nested": "x"}, 42])
async def test_non_string_payload_stays_inline(make_ctx, payload):
    item = await package_binary(
        make_ctx(), {"screenshot": payload}, SCREENSHOT, meta={"url": "u"}, output_binary=True,
        binary_property_name="screenshot",
    )
    assert item.json == {"url": "u", "screenshot": payload}
    assert item.binary is None
