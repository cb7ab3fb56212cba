"""Turn raw API responses into output items."""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Mapping

from .context import ExecutionContext
from .errors import UjeebuError
from .types import OutputItem


@dataclass(frozen=True)
class BinaryKind:
    field: str  # response field carrying the base64 payload
    file_name: str
    mime_type: str


SCREENSHOT = BinaryKind(field="screenshot", file_name="screenshot.png", mime_type="image/png")
PDF = BinaryKind(field="pdf", file_name="document.pdf", mime_type="application/pdf")


def as_mapping(response: Any) -> Mapping[str, Any]:
    return response if isinstance(response, Mapping) else {}


def pass_through(response: Any) -> OutputItem:
    if isinstance(response, Mapping):
        return OutputItem(json=dict(response))
    return OutputItem(json={"data": response})


def package_html(response: Any, url: str) -> OutputItem:
    body = as_mapping(response)
    return OutputItem(json={"html": body.get("html") or body.get("html_source"), "url": url})


def package_extract_rules(response: Any, url: str) -> OutputItem:
    return OutputItem(json={"url": url, "result": as_mapping(response).get("result")})


_URLSAFE = str.maketrans("-_", "+/")


def decode_base64(payload: str, field: str) -> bytes:
    """Decode standard or URL-safe base64; whitespace and missing padding are tolerated."""
    data = "".join(payload.split()).translate(_URLSAFE)
    data += "=" * (-len(data) % 4)
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise UjeebuError(f"Response field '{field}' is not valid base64: {e}") from e


async def package_binary(
    ctx: ExecutionContext,
    response: Any,
    kind: BinaryKind,
    *,
    meta: dict[str, Any],
    output_binary: bool,
    binary_property_name: str,
) -> OutputItem:
    """Attach the base64 payload as binary data, or keep it inline in json.

    `meta` is the json kept in both cases ({url} or {url, fullPage}).
    """
    payload = as_mapping(response).get(kind.field)
    item = OutputItem(json=dict(meta))

    if output_binary and isinstance(payload, str) and payload:
        raw = decode_base64(payload, kind.field)
        item.binary = {
            binary_property_name: await ctx.prepare_binary_data(raw, kind.file_name, kind.mime_type),
        }
    else:
        item.json[kind.field] = payload
    return item
