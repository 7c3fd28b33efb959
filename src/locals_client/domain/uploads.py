"""Upload item state and the reducer that drives it."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class LocalFile:
    """A file picked on the device, before upload."""

    uri: str
    mime_type: str | None = None
    file_name: str | None = None


@dataclass(frozen=True)
class UploadItem:
    """One image slot in an uploader list."""

    key: str
    uri: str
    uploading: bool = False
    remote: bool = False
    error: bool = False
    deleting: bool = False
    error_message: str | None = None

    @property
    def is_local_pending(self) -> bool:
        return not (self.uploading or self.remote or self.error)

    @property
    def can_delete_remotely(self) -> bool:
        return self.remote and not (self.error or self.uploading or self.deleting)


@dataclass(frozen=True)
class ItemAdded:
    key: str
    uri: str
    remote: bool = False


@dataclass(frozen=True)
class ItemUploading:
    key: str


@dataclass(frozen=True)
class ItemConfirmed:
    key: str
    remote_url: str


@dataclass(frozen=True)
class ItemErrored:
    key: str
    message: str


@dataclass(frozen=True)
class ItemDeleting:
    key: str


@dataclass(frozen=True)
class ItemDeleteFailed:
    key: str


@dataclass(frozen=True)
class ItemRemoved:
    key: str


UploadAction = (
    ItemAdded
    | ItemUploading
    | ItemConfirmed
    | ItemErrored
    | ItemDeleting
    | ItemDeleteFailed
    | ItemRemoved
)


def reduce_upload_items(
    items: tuple[UploadItem, ...], action: UploadAction
) -> tuple[UploadItem, ...]:
    """Return the item list after applying one action.

    Actions addressing an unknown key leave the list unchanged, so results
    arriving after an item was removed are dropped.
    """
    if isinstance(action, ItemAdded):
        if any(item.key == action.key for item in items):
            return items
        added = UploadItem(key=action.key, uri=action.uri, remote=action.remote)
        return (*items, added)
    if isinstance(action, ItemRemoved):
        return tuple(item for item in items if item.key != action.key)
    return tuple(
        _apply(item, action) if item.key == action.key else item for item in items
    )


def _apply(item: UploadItem, action: UploadAction) -> UploadItem:
    if isinstance(action, ItemUploading):
        return replace(item, uploading=True, error=False, error_message=None)
    if isinstance(action, ItemConfirmed):
        return replace(
            item,
            uri=action.remote_url,
            uploading=False,
            remote=True,
            error=False,
            error_message=None,
        )
    if isinstance(action, ItemErrored):
        return replace(
            item,
            uploading=False,
            remote=False,
            error=True,
            error_message=action.message,
        )
    if isinstance(action, ItemDeleting):
        return replace(item, deleting=True)
    if isinstance(action, ItemDeleteFailed):
        return replace(item, deleting=False)
    return item


def remote_urls(items: tuple[UploadItem, ...]) -> list[str]:
    """Return confirmed remote URLs in list order."""
    return [item.uri for item in items if item.remote and not item.error]
