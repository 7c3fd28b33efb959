"""Signed upload endpoints."""

from dataclasses import dataclass

from locals_client.adapters.api_client import HttpxApiClient
from locals_client.domain.responses import MessageResponse, UploadUrlResponse
from locals_client.domain.results import Failure, Ok
from locals_client.services.uploads import UploadsApi

_BASE = "/api/v1/upload"


@dataclass
class RestUploadsApi(UploadsApi):
    """Uploads API over the marketplace REST client."""

    api: HttpxApiClient

    async def request_upload_url(
        self, file_name: str, file_type: str, role: str, permanent: bool
    ) -> Ok[UploadUrlResponse] | Failure:
        """Request a signed destination for one file."""
        return await self.api.call(
            "POST",
            f"{_BASE}/url",
            UploadUrlResponse,
            json={
                "fileType": file_type,
                "fileName": file_name,
                "role": role,
                "isPermanent": permanent,
            },
        )

    async def delete_file(self, file_url: str) -> Ok[MessageResponse] | Failure:
        """Delete a previously uploaded file from remote storage."""
        return await self.api.call(
            "DELETE", f"{_BASE}/file", MessageResponse, json={"fileUrl": file_url}
        )
