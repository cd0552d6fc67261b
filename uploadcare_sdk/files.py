"""
File resource of the REST API.

Files are the main Uploadcare resource. Each uploaded file has a UUID that
is assigned once and never changes.
"""

from typing import Iterator, List, Optional, Sequence

from .client import RestClient
from .exceptions import ValidationError
from .models import (
    BatchResult, CopyParams, FileInfo, FileList, FileListParams,
    LocalCopyResult, RemoteCopyResult,
)

MAX_BATCH_SIZE = 100


class FileService:
    """Calls to the file API."""

    def __init__(self, client: RestClient):
        self.client = client

    def info(self, file_id: str) -> FileInfo:
        """Get information about a file."""
        data = self.client.call("GET", f"/files/{file_id}/")
        return FileInfo.from_dict(data)

    def list(self, params: Optional[FileListParams] = None) -> FileList:
        """
        List files.

        Args:
            params: Filtering, ordering and paging, see ``FileListParams``

        Returns:
            First page of files. Follow ``next`` with ``get_page`` or use
            ``iterate`` to walk every page.
        """
        params = params or FileListParams()
        data = self.client.call("GET", "/files/", params=params.to_params())
        return FileList.from_dict(data)

    def get_page(self, url: str) -> FileList:
        """Get a page by its ``next`` or ``previous`` URL."""
        data = self.client.call_url("GET", url)
        return FileList.from_dict(data)

    def iterate(self, params: Optional[FileListParams] = None) -> Iterator[FileInfo]:
        """Yield files from every page, requesting pages as they are consumed."""
        page = self.list(params)
        while True:
            yield from page.results
            if not page.next:
                break
            page = self.get_page(page.next)

    def store(self, file_id: str) -> FileInfo:
        """Store a single file."""
        data = self.client.call("PUT", f"/files/{file_id}/storage/")
        return FileInfo.from_dict(data)

    def batch_store(self, file_ids: Sequence[str]) -> BatchResult:
        """Store up to 100 files in one request."""
        data = self.client.call("PUT", "/files/storage/", json=_batch(file_ids))
        return BatchResult.from_dict(data)

    def delete(self, file_id: str) -> FileInfo:
        """Remove a single file."""
        data = self.client.call("DELETE", f"/files/{file_id}/")
        return FileInfo.from_dict(data)

    def batch_delete(self, file_ids: Sequence[str]) -> BatchResult:
        """Remove up to 100 files in one request."""
        data = self.client.call("DELETE", "/files/storage/", json=_batch(file_ids))
        return BatchResult.from_dict(data)

    def copy(self, params: CopyParams) -> LocalCopyResult:
        """Copy a file with the API v0.5 endpoint. Prefer ``local_copy`` and ``remote_copy``."""
        data = self.client.call("POST", "/files/", json=params.to_json())
        return LocalCopyResult.from_dict(data)

    def local_copy(self, params: CopyParams) -> LocalCopyResult:
        """
        Copy a file or its modified version to the default storage.

        The source may be stored or temporary but must not be deleted.
        ``store`` defaults to False and ``make_public`` to True.
        """
        payload = params.to_json()
        payload.setdefault("store", "false")
        payload.setdefault("make_public", "true")

        data = self.client.call("POST", "/files/local_copy/", json=payload)
        return LocalCopyResult.from_dict(data)

    def remote_copy(self, params: CopyParams) -> RemoteCopyResult:
        """
        Copy a file or its modified version to a custom storage.

        ``target`` names the storage; ``make_public`` defaults to True.
        """
        if not params.target:
            raise ValidationError("target is required for remote copy", field="target")

        payload = params.to_json()
        payload.setdefault("make_public", "true")

        data = self.client.call("POST", "/files/remote_copy/", json=payload)
        return RemoteCopyResult.from_dict(data)


def _batch(file_ids: Sequence[str]) -> List[str]:
    if isinstance(file_ids, str):
        raise ValidationError("file_ids must be a sequence of IDs, not a string", field="file_ids")

    ids = list(file_ids)
    if not ids:
        raise ValidationError("at least one file ID is required", field="file_ids")
    if len(ids) > MAX_BATCH_SIZE:
        raise ValidationError(
            f"at most {MAX_BATCH_SIZE} files are supported per request, got {len(ids)}",
            field="file_ids",
        )
    return ids
