"""Data shapes shared across the adapter: credentials, output items and API payloads."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Literal, Optional, TypedDict


class Endpoint:
    """Ujeebu API endpoint paths."""

    SCRAPE = "/scrape"
    EXTRACT = "/extract"
    SERP = "/serp"
    CARD = "/card"
    ACCOUNT = "/account"


CREDENTIALS_TYPE = "ujeebuApi"

HttpMethod = Literal["GET", "POST"]


@dataclass(frozen=True)
class ApiCredentials:
    api_key: str
    base_url: str = "https://api.ujeebu.com"


@dataclass
class RequestOptions:
    """A single HTTP request as handed to the host's HTTP helper."""

    method: HttpMethod
    url: str
    headers: dict[str, str]
    body: Optional[dict[str, Any]] = None
    qs: Optional[dict[str, Any]] = None


@dataclass
class BinaryData:
    data: str  # base64
    mime_type: str
    file_name: str
    file_size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "mimeType": self.mime_type,
            "fileName": self.file_name,
            "fileSize": self.file_size,
        }


@dataclass
class OutputItem:
    json: dict[str, Any]
    binary: Optional[dict[str, BinaryData]] = None
    paired_item: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"json": self.json}
        if self.binary:
            out["binary"] = {name: b.to_dict() for name, b in self.binary.items()}
        if self.paired_item is not None:
            out["pairedItem"] = {"item": self.paired_item}
        return out


@dataclass
class RuleTuple:
    """One row of the extraction rule builder."""

    fieldName: str = ""
    selector: str = ""
    type: str = "text"
    attribute: str = ""
    multiple: bool = False

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RuleTuple":
        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in raw.items() if k in known and v is not None})


@dataclass
class ItemResult:
    """Outcome of one input item: exactly one of `output` / `error` is set."""

    index: int
    output: Optional[OutputItem] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# API payloads (documentation of what the remote API returns)
# ---------------------------------------------------------------------------

ExtractionRuleType = Literal["text", "link", "image", "attr", "obj"]


class ExtractionRule(TypedDict, total=False):
    selector: str
    type: ExtractionRuleType
    attribute: str
    multiple: bool


class ErrorResponse(TypedDict, total=False):
    url: str
    message: str
    error_code: int
    errors: list[dict[str, str]]


class Article(TypedDict, total=False):
    url: str
    canonical_url: Optional[str]
    title: Optional[str]
    text: Optional[str]
    html: Optional[str]
    summary: Optional[str]
    image: Optional[str]
    images: Optional[list[str]]
    media: Optional[list[str]]
    language: Optional[str]
    author: Optional[str]
    pub_date: Optional[str]
    modified_date: Optional[str]
    site_name: Optional[str]
    favicon: Optional[str]
    encoding: Optional[str]


class ExtractResponse(TypedDict, total=False):
    article: Article
    time: float
    js: bool
    pagination: bool


class ScrapeHtmlResponse(TypedDict, total=False):
    html: str
    html_source: str


class ScrapeScreenshotResponse(TypedDict, total=False):
    screenshot: str


class ScrapePdfResponse(TypedDict, total=False):
    pdf: str


class ScrapeExtractRulesResponse(TypedDict, total=False):
    result: dict[str, Any]


class AccountResponse(TypedDict, total=False):
    balance: float
    days_till_next_billing: int
    next_billing_date: Optional[str]
    plan: str
    quota: str
    concurrent_requests: int
    total_requests: int
    used: int
    used_percent: float
    userid: str


__all__ = [
    "Endpoint",
    "CREDENTIALS_TYPE",
    "HttpMethod",
    "ApiCredentials",
    "RequestOptions",
    "BinaryData",
    "OutputItem",
    "RuleTuple",
    "ItemResult",
    "ExtractionRule",
    "ErrorResponse",
    "Article",
    "ExtractResponse",
    "ScrapeHtmlResponse",
    "ScrapeScreenshotResponse",
    "ScrapePdfResponse",
    "ScrapeExtractRulesResponse",
    "AccountResponse",
]
