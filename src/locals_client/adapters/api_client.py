"""HTTP wrapper for the marketplace REST API."""

import logging
from dataclasses import dataclass
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from locals_client.adapters.local_storage import AUTH_TOKEN_KEY, KeyValueStorage
from locals_client.config import is_tunnel_url
from locals_client.domain.results import Failure, FailureKind, Ok
from locals_client.errors import ApiError, NetworkError

TUNNEL_HEADER = "ngrok-skip-browser-warning"
NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."

M = TypeVar("M", bound=BaseModel)

_logger = logging.getLogger(__name__)


@dataclass
class HttpxApiClient:
    """Marketplace API client with bearer-token injection.

    Every outgoing request passes through a request hook that adds the
    stored token and, for tunnel base URLs, the tunnel bypass header.
    Failures are raised as ``ApiError`` or ``NetworkError``; nothing is
    retried.
    """

    base_url: str
    storage: KeyValueStorage
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    def __post_init__(self) -> None:
        hooks = dict(self.http_client.event_hooks)
        hooks["request"] = [*hooks.get("request", []), self._prepare_request]
        self.http_client.event_hooks = hooks

    @classmethod
    def create(
        cls, base_url: str, storage: KeyValueStorage, timeout: float = 10.0
    ) -> "HttpxApiClient":
        """Create an API client with a managed httpx session."""
        return cls(
            base_url=base_url,
            storage=storage,
            http_client=httpx.AsyncClient(base_url=base_url, timeout=timeout),
            timeout=timeout,
        )

    async def _prepare_request(self, request: httpx.Request) -> None:
        if is_tunnel_url(self.base_url):
            request.headers[TUNNEL_HEADER] = "true"
        if "Authorization" in request.headers:
            return
        token = await self.storage.get_item(AUTH_TOKEN_KEY)
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, object] | None = None,
        params: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, object]:
        """Send a request and return the parsed JSON body."""
        try:
            response = await self.http_client.request(
                method,
                path,
                json=json,
                params=_clean_params(params),
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.TransportError as exc:
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc
        payload = _json_body(response)
        if response.is_error:
            message = payload.get("message")
            raise ApiError(
                response.status_code,
                message if isinstance(message, str) else "",
                payload,
            )
        return payload

    async def get(
        self, path: str, params: dict[str, object] | None = None
    ) -> dict[str, object]:
        """Send a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: dict[str, object] | None = None,
        params: dict[str, object] | None = None,
    ) -> dict[str, object]:
        """Send a POST request."""
        return await self.request("POST", path, json=json, params=params)

    async def put(
        self,
        path: str,
        json: dict[str, object] | None = None,
        params: dict[str, object] | None = None,
    ) -> dict[str, object]:
        """Send a PUT request."""
        return await self.request("PUT", path, json=json, params=params)

    async def delete(
        self,
        path: str,
        json: dict[str, object] | None = None,
        params: dict[str, object] | None = None,
    ) -> dict[str, object]:
        """Send a DELETE request."""
        return await self.request("DELETE", path, json=json, params=params)

    async def call(  # noqa: PLR0913
        self,
        method: str,
        path: str,
        model: type[M],
        *,
        json: dict[str, object] | None = None,
        params: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Ok[M] | Failure:
        """Send a request and validate the body into ``model``."""
        try:
            payload = await self.request(
                method, path, json=json, params=params, headers=headers
            )
        except NetworkError as exc:
            _logger.warning("%s %s failed without a response: %s", method, path, exc)
            return Failure(FailureKind.NETWORK, NETWORK_ERROR_MESSAGE)
        except ApiError as exc:
            _logger.warning(
                "%s %s failed (status=%s): %s",
                method,
                path,
                exc.status_code,
                exc.message or "no message",
            )
            return Failure(FailureKind.HTTP, exc.message, exc.status_code)

        if payload.get("success") is not True:
            message = payload.get("message")
            return Failure(
                FailureKind.REJECTED, message if isinstance(message, str) else ""
            )
        try:
            return Ok(model.model_validate(payload))
        except ValidationError as exc:
            _logger.warning("%s %s returned an unexpected body: %s", method, path, exc)
            return Failure(
                FailureKind.INVALID_RESPONSE, "Unexpected response from server."
            )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _clean_params(params: dict[str, object] | None) -> dict[str, object] | None:
    if params is None:
        return None
    return {key: value for key, value in params.items() if value is not None}


def _json_body(response: httpx.Response) -> dict[str, object]:
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
