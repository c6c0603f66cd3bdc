"""Appwrite Storage API (buckets and files); implements IFileStore."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

from restaurant_backend.infrastructure.appwrite._rest_client import AppwriteRESTClient


class AppwriteStorage:
    """Storage service bound to one REST client."""

    def __init__(self, client: AppwriteRESTClient) -> None:
        self._client = client

    async def create_bucket(
        self,
        bucket_id: str,
        name: str,
        permissions: list[str] | None = None,
        file_security: bool = True,
        enabled: bool = True,
        maximum_file_size: int | None = None,
        allowed_file_extensions: list[str] | None = None,
        compression: str = "none",
        encryption: bool = True,
        antivirus: bool = True,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "bucketId": bucket_id,
            "name": name,
            "permissions": permissions or [],
            "fileSecurity": file_security,
            "enabled": enabled,
            "allowedFileExtensions": allowed_file_extensions or [],
            "compression": compression,
            "encryption": encryption,
            "antivirus": antivirus,
        }
        if maximum_file_size is not None:
            body["maximumFileSize"] = maximum_file_size
        return await self._client.call("POST", "/storage/buckets", body=body)

    async def get_bucket(self, bucket_id: str) -> dict[str, Any]:
        return await self._client.call("GET", f"/storage/buckets/{quote(bucket_id, safe='')}")

    async def create_file(
        self,
        bucket_id: str,
        file_id: str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> dict[str, Any]:
        """Upload a file in a single multipart request.

        Appwrite expects chunked uploads above 5 MB; images stay well below that.
        """
        file_tuple = (filename, content, content_type or "application/octet-stream")
        return await self._client.call(
            "POST",
            f"/storage/buckets/{quote(bucket_id, safe='')}/files",
            data={"fileId": file_id},
            files={"file": file_tuple},
        )

    def get_file_preview_url(
        self, bucket_id: str, file_id: str, width: int = 400, height: int = 300
    ) -> str:
        query = urlencode({"width": width, "height": height, "project": self._client.project_id})
        path = (
            f"/storage/buckets/{quote(bucket_id, safe='')}"
            f"/files/{quote(file_id, safe='')}/preview"
        )
        return f"{self._client.url(path)}?{query}"

    def get_file_download_url(self, bucket_id: str, file_id: str) -> str:
        query = urlencode({"project": self._client.project_id})
        path = (
            f"/storage/buckets/{quote(bucket_id, safe='')}"
            f"/files/{quote(file_id, safe='')}/download"
        )
        return f"{self._client.url(path)}?{query}"
