"""Raw file transfer to signed storage URLs."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlparse

import httpx

from locals_client.errors import ApiError, LocalFileError, NetworkError


class BlobClient(Protocol):
    """Interface for reading picked files and uploading their bytes."""

    async def read_bytes(self, uri: str) -> bytes:
        """Return the bytes behind a local reference."""

    async def put_bytes(self, url: str, content: bytes, content_type: str) -> None:
        """PUT raw bytes to a signed URL."""


@dataclass
class HttpxBlobClient(BlobClient):
    """Blob client using httpx without the API auth hook."""

    http_client: httpx.AsyncClient
    timeout: float = 60.0

    @classmethod
    def create(cls, timeout: float = 60.0) -> "HttpxBlobClient":
        """Create a blob client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(), timeout=timeout)

    async def read_bytes(self, uri: str) -> bytes:
        """Read a filesystem path, ``file://`` URI or remote http(s) URL."""
        if uri.startswith(("http://", "https://")):
            try:
                response = await self.http_client.get(uri, timeout=self.timeout)
            except httpx.TransportError as exc:
                raise NetworkError(str(exc) or exc.__class__.__name__) from exc
            if response.is_error:
                raise ApiError(response.status_code, "")
            return response.content
        path = unquote(urlparse(uri).path) if uri.startswith("file://") else uri
        try:
            return await asyncio.to_thread(Path(path).read_bytes)
        except OSError as exc:
            raise LocalFileError(f"Could not read {uri}") from exc

    async def put_bytes(self, url: str, content: bytes, content_type: str) -> None:
        """Upload bytes with the declared content type."""
        try:
            response = await self.http_client.put(
                url,
                content=content,
                headers={"Content-Type": content_type},
                timeout=self.timeout,
            )
        except httpx.TransportError as exc:
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc
        if response.is_error:
            raise ApiError(response.status_code, "")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
