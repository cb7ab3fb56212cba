"""Execution context handed to every operation.

`ExecutionContext` is the host surface the operations are written against: parameter
lookup per item, credential retrieval, binary preparation, the continue-on-failure
flag and a single HTTP request helper. `ServerContext` owns the process-wide pieces
(the shared httpx client and the configured credentials) and builds execution
contexts for MCP tool calls.
"""
from __future__ import annotations

import base64
from typing import Any, Iterable, Optional, Sequence

import httpx

from .config import settings
from .errors import MissingFieldError, UjeebuConfigError
from .schema import Property, find_property
from .types import CREDENTIALS_TYPE, ApiCredentials, BinaryData, RequestOptions

_MISSING: Any = object()

# Node-level selectors; items cannot override them.
NODE_ONLY_PARAMETERS = frozenset({"resource", "operation"})


def decode_response(response: httpx.Response) -> Any:
    """Return the decoded JSON body, or the text when the body is not JSON."""
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


class ExecutionContext:
    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        credentials: Optional[ApiCredentials],
        parameters: Optional[dict[str, Any]] = None,
        items: Optional[Sequence[dict[str, Any]]] = None,
        properties: Iterable[Property] = (),
        continue_on_fail: bool = False,
    ) -> None:
        self.http_client = http_client
        self.credentials = credentials
        self.parameters = dict(parameters or {})
        # No explicit items means a single item driven by the node-level parameters.
        self.items: list[dict[str, Any]] = [dict(i) for i in items] if items is not None else [{}]
        self.properties = list(properties)
        self.continue_on_fail = continue_on_fail

    def get_input_data(self) -> list[dict[str, Any]]:
        return self.items

    def _values(self, item_index: int) -> dict[str, Any]:
        if 0 <= item_index < len(self.items):
            item = {k: v for k, v in self.items[item_index].items() if k not in NODE_ONLY_PARAMETERS}
            return {**self.parameters, **item}
        return self.parameters

    def _visible_property(self, name: str, item_index: int) -> Optional[Property]:
        def lookup(key: str) -> Any:
            try:
                return self.get_parameter(key, item_index)
            except MissingFieldError:
                return None

        return find_property(self.properties, name, lookup)

    def get_parameter(self, name: str, item_index: int, default: Any = _MISSING) -> Any:
        """Return parameter `name` for item `item_index`.

        Lookup order: the item's own value, the node-level value, the explicit
        `default`, then the default of the schema property visible for the current
        values. Required properties must resolve to a non-empty value.
        """
        values = self._values(item_index)
        if name in values:
            value = values[name]
        elif default is not _MISSING:
            return default
        else:
            prop = self._visible_property(name, item_index)
            if prop is None:
                raise MissingFieldError(name, item_index=item_index)
            value = prop.default_value()

        if value is None or value == "":
            prop = self._visible_property(name, item_index)
            if prop is not None and prop.required:
                raise MissingFieldError(name, item_index=item_index)
        return value

    async def get_credentials(self, type_name: str = CREDENTIALS_TYPE) -> ApiCredentials:
        if type_name != CREDENTIALS_TYPE:
            raise UjeebuConfigError(f"Unknown credential type: {type_name}")
        if self.credentials is None or not self.credentials.api_key:
            raise UjeebuConfigError("Missing credentials. Please set UJEEBU_API_KEY in .env")
        return self.credentials

    async def prepare_binary_data(self, data: bytes, file_name: str, mime_type: str) -> BinaryData:
        return BinaryData(
            data=base64.b64encode(data).decode("ascii"),
            mime_type=mime_type,
            file_name=file_name,
            file_size=len(data),
        )

    async def http_request(self, options: RequestOptions) -> Any:
        """Send one request; non-2xx answers raise httpx.HTTPStatusError."""
        kwargs: dict[str, Any] = {"headers": options.headers}
        if options.qs is not None:
            kwargs["params"] = options.qs
        if options.body is not None:
            kwargs["json"] = options.body
        response = await self.http_client.request(options.method, options.url, **kwargs)
        response.raise_for_status()
        return decode_response(response)


class ServerContext:
    """Process-wide state shared by MCP tool calls."""

    _client: Optional[httpx.AsyncClient] = None

    @classmethod
    async def get_client(cls) -> httpx.AsyncClient:
        if cls._client is None or cls._client.is_closed:
            cls._client = httpx.AsyncClient(timeout=httpx.Timeout(settings.UJEEBU_HTTP_TIMEOUT))
        return cls._client

    @classmethod
    def set_client(cls, client: Optional[httpx.AsyncClient]) -> None:
        cls._client = client

    @classmethod
    def get_credentials(cls) -> Optional[ApiCredentials]:
        if not settings.UJEEBU_API_KEY:
            return None
        return ApiCredentials(
            api_key=settings.UJEEBU_API_KEY,
            base_url=settings.UJEEBU_BASE_URL.rstrip("/"),
        )

    @classmethod
    async def create_execution_context(
        cls,
        *,
        parameters: Optional[dict[str, Any]] = None,
        items: Optional[Sequence[dict[str, Any]]] = None,
        continue_on_fail: Optional[bool] = None,
    ) -> ExecutionContext:
        from .dispatcher import NODE_PROPERTIES

        return ExecutionContext(
            http_client=await cls.get_client(),
            credentials=cls.get_credentials(),
            parameters=parameters,
            items=items,
            properties=NODE_PROPERTIES,
            continue_on_fail=settings.UJEEBU_CONTINUE_ON_FAIL if continue_on_fail is None else continue_on_fail,
        )

    @classmethod
    async def cleanup(cls) -> None:
        if cls._client is not None and not cls._client.is_closed:
            await cls._client.aclose()
        cls._client = None
