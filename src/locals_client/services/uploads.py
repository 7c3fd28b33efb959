"""Image upload and remote deletion for merchant forms."""

import logging
import time
from dataclasses import dataclass, field
from itertools import count
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Protocol
from urllib.parse import unquote, urlparse

from locals_client.adapters.blob_client import BlobClient
from locals_client.domain.responses import MessageResponse, UploadUrlResponse
from locals_client.domain.results import Failure, FailureKind, Ok, message_or
from locals_client.domain.uploads import (
    ItemAdded,
    ItemConfirmed,
    ItemDeleteFailed,
    ItemDeleting,
    ItemErrored,
    ItemRemoved,
    ItemUploading,
    LocalFile,
    UploadAction,
    UploadItem,
    reduce_upload_items,
    remote_urls,
)
from locals_client.errors import ApiError, LocalsClientError, NetworkError
from locals_client.services.notifications import Notifier
from locals_client.services.task_queue import TaskQueue

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

_logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "m4v": "video/x-m4v",
    "webm": "video/webm",
}

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "video/mp4": "mp4",
    "video/quicktime": "mov",
    "video/x-m4v": "m4v",
    "video/webm": "webm",
}

DEFAULT_UPLOAD_MESSAGE = "Failed to upload image. Please try again."
BAD_REQUEST_MESSAGE = "Invalid request. Please check your image format."
UNAUTHORIZED_MESSAGE = "Authentication failed. Please log in again."
FORBIDDEN_MESSAGE = "You do not have permission to upload images."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
NETWORK_MESSAGE = "Network error. Please check your internet connection."
DELETE_FAILED_MESSAGE = "Failed to delete image. Please try again."


class UploadsApi(Protocol):
    """Interface for signed upload endpoints."""

    async def request_upload_url(
        self, file_name: str, file_type: str, role: str, permanent: bool
    ) -> Ok[UploadUrlResponse] | Failure:
        """Request a signed destination for one file."""

    async def delete_file(self, file_url: str) -> Ok[MessageResponse] | Failure:
        """Delete an uploaded file."""


class UploadRejectedError(LocalsClientError):
    """The backend answered the upload URL request without a usable target."""


def guess_mime_type(name: str) -> str:
    """Infer a MIME type from a file extension, defaulting to JPEG."""
    suffix = PurePosixPath(name).suffix.lower().lstrip(".")
    return MIME_TYPES.get(suffix, DEFAULT_MIME_TYPE)


def display_name(file: LocalFile, mime_type: str) -> str:
    """Return the name sent to the backend for a picked file."""
    if file.file_name:
        return file.file_name
    path = unquote(urlparse(file.uri).path) if "://" in file.uri else file.uri
    segment = PurePosixPath(path).name
    if segment and "." in segment:
        return segment
    extension = _EXTENSIONS.get(mime_type, "jpg")
    return f"image_{int(time.time() * 1000)}.{extension}"


def upload_error_message(exc: BaseException) -> str:
    """Map an upload failure to the message shown on the item."""
    if isinstance(exc, NetworkError):
        return NETWORK_MESSAGE
    if isinstance(exc, ApiError):
        if exc.status_code == 400:
            return exc.message or BAD_REQUEST_MESSAGE
        if exc.status_code == 401:
            return UNAUTHORIZED_MESSAGE
        if exc.status_code == 403:
            return FORBIDDEN_MESSAGE
        if exc.status_code == 500:
            return SERVER_ERROR_MESSAGE
    return DEFAULT_UPLOAD_MESSAGE


def _failure_error(failure: Failure) -> LocalsClientError:
    if failure.kind is FailureKind.NETWORK:
        return NetworkError(failure.message)
    if failure.kind is FailureKind.HTTP and failure.status_code is not None:
        return ApiError(failure.status_code, failure.message)
    return UploadRejectedError(failure.message or "Failed to get upload URL")


@dataclass
class ImageUploader:
    """
    Ordered list of image slots backed by signed uploads.

    - Picked files appear immediately and upload through a task queue.
    - ``on_change`` receives the confirmed remote URLs once per batch and
      after each confirmed remote deletion.
    - After ``dispose()`` results of calls still in flight are ignored.
    """

    uploads_api: UploadsApi
    blob_client: BlobClient
    notifier: Notifier
    on_change: "Callable[[list[str]], None]"
    max_items: int = 5
    role: str = "Merchant"
    permanent: bool = True
    concurrency: int = 1
    items: tuple[UploadItem, ...] = field(default=(), init=False)
    is_busy: bool = field(default=False, init=False)
    _disposed: bool = field(default=False, init=False, repr=False)
    _keys: "count[int]" = field(default_factory=count, init=False, repr=False)

    @property
    def remote_urls(self) -> list[str]:
        return remote_urls(self.items)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispatch(self, action: UploadAction) -> None:
        if self._disposed:
            return
        self.items = reduce_upload_items(self.items, action)

    def seed(self, urls: "Sequence[str]") -> None:
        """Show already uploaded URLs as confirmed remote items."""
        for url in urls:
            self.dispatch(ItemAdded(self._next_key(), url, remote=True))

    def dispose(self) -> None:
        """Stop applying results; in-flight calls are left to finish."""
        self._disposed = True

    async def add_files(
        self, files: "Sequence[LocalFile]", multiple: bool = True
    ) -> list[str]:
        """Upload picked files and return the URLs confirmed in this batch."""
        if self.is_busy or self._disposed or not files:
            return []
        remaining = self.max_items - len(self.items)
        if remaining <= 0:
            await self._alert_capacity()
            return []
        selected = list(files) if multiple else list(files[:1])
        if len(selected) > remaining:
            await self._alert_capacity()
            selected = selected[:remaining]

        batch: list[tuple[str, LocalFile]] = []
        for file in selected:
            key = self._next_key()
            self.dispatch(ItemAdded(key, file.uri))
            batch.append((key, file))

        self.is_busy = True
        try:
            queue = TaskQueue(self.concurrency)
            outcomes = await queue.run(
                [self._upload_job(key, file) for key, file in batch]
            )
        finally:
            self.is_busy = False

        if self._disposed:
            _logger.debug("Uploader disposed; dropping %d results", len(outcomes))
            return []
        # a job that returns None was removed before it started
        attempted = [o for o in outcomes if not (o.ok and o.value is None)]
        uploaded = [o.value for o in attempted if o.ok and o.value is not None]
        self.on_change(self.remote_urls)
        failed = [o.error for o in attempted if o.error is not None]
        if failed and len(attempted) == 1:
            await self.notifier.alert("Upload Error", upload_error_message(failed[0]))
        elif failed:
            await self.notifier.alert(
                "Partial Upload",
                f"Successfully uploaded {len(uploaded)} of {len(attempted)} images.",
            )
        return uploaded

    async def remove(self, key: str) -> bool:
        """Remove one item, deleting it remotely when it was uploaded."""
        item = next((i for i in self.items if i.key == key), None)
        if item is None or self._disposed or item.uploading or item.deleting:
            return False
        if not item.can_delete_remotely:
            self.dispatch(ItemRemoved(key))
            return True

        self.dispatch(ItemDeleting(key))
        result = await self.uploads_api.delete_file(item.uri)
        if self._disposed:
            return False
        if isinstance(result, Ok):
            self.dispatch(ItemRemoved(key))
            self.on_change(self.remote_urls)
            return True
        _logger.warning("Failed to delete %s: %s", item.uri, result.message)
        self.dispatch(ItemDeleteFailed(key))
        await self.notifier.alert("Error", message_or(result, DELETE_FAILED_MESSAGE))
        return False

    def _upload_job(
        self, key: str, file: LocalFile
    ) -> "Callable[[], Awaitable[str | None]]":
        async def job() -> str | None:
            if not any(item.key == key for item in self.items):
                _logger.debug("Skipping upload of removed item %s", key)
                return None
            self.dispatch(ItemUploading(key))
            try:
                url = await self._upload(file)
            except Exception as exc:
                _logger.warning("Upload of %s failed: %s", file.uri, exc)
                self.dispatch(ItemErrored(key, upload_error_message(exc)))
                raise
            self.dispatch(ItemConfirmed(key, url))
            return url

        return job

    async def _upload(self, file: LocalFile) -> str:
        mime_type = file.mime_type or guess_mime_type(file.file_name or file.uri)
        name = display_name(file, mime_type)
        result = await self.uploads_api.request_upload_url(
            name, mime_type, self.role, self.permanent
        )
        if isinstance(result, Failure):
            raise _failure_error(result)
        target = result.value
        content = await self.blob_client.read_bytes(file.uri)
        await self.blob_client.put_bytes(target.upload_url, content, mime_type)
        return target.public_url

    async def _alert_capacity(self) -> None:
        await self.notifier.alert(
            "Maximum Images Reached",
            f"You can only upload up to {self.max_items} images.",
        )

    def _next_key(self) -> str:
        return f"image_{next(self._keys)}"
