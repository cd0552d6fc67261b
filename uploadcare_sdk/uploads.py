"""
Upload API.

Every uploaded file is temporary and deleted within 24 hours unless it is
stored. Two upload modes exist:

- Direct uploads for files under 100MB, sent as one multipart/form-data
  request.
- Multipart uploads for files of 10MB and more: the file is split into
  5MB parts that go straight to presigned storage URLs.
"""

import logging
import mimetypes
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Sequence, Union

from .client import UploadClient
from .exceptions import ValidationError
from .models import (
    FileUploadParams, FromUrlParams, FromUrlResult, FromUrlStatus,
    MultipartParams, MultipartUpload, ToStore, UploadedFileInfo, UploadGroupInfo,
)
from .utils import MULTIPART_CHUNK_SIZE, chunk_file, enum_value

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class UploadService:
    """Calls to the Upload API."""

    def __init__(self, client: UploadClient):
        self.client = client

    def _form(self, fields: Dict[str, str]) -> Dict[str, str]:
        form = dict(fields)
        form.update(self.client.auth.fields())
        return form

    def file(self, params: FileUploadParams) -> Dict[str, str]:
        """
        Upload a file directly.

        Args:
            params: Path or binary file object, name and storing behaviour

        Returns:
            Mapping of the uploaded file name to its UUID
        """
        if isinstance(params.file, (str, Path)):
            path = Path(params.file)
            if not path.is_file():
                raise ValidationError(f"File not found: {path}", field="file")

            name = params.name or path.name
            with open(path, "rb") as f:
                return self._upload_base(f, name, params.store)

        if not params.name:
            raise ValidationError("name is required when uploading file-like objects", field="name")
        return self._upload_base(params.file, params.name, params.store)

    def _upload_base(self, file_obj: BinaryIO, name: str, store: ToStore) -> Dict[str, str]:
        mime_type = mimetypes.guess_type(name)[0] or DEFAULT_MIME_TYPE
        form = self._form({"UPLOADCARE_STORE": enum_value(store)})

        logger.debug("uploading %s (%s)", name, mime_type)
        data = self.client.call("POST", "/base/", data=form, files={name: (name, file_obj, mime_type)})
        return data or {}

    def from_url(self, params: FromUrlParams) -> FromUrlResult:
        """Upload a file from a public HTTP or HTTPS URL."""
        data = self.client.call("POST", "/from_url/", data=self._form(params.to_form()))
        return FromUrlResult.from_dict(data or {})

    def from_url_status(self, token: str) -> FromUrlStatus:
        """Check the status of an upload from URL."""
        data = self.client.call("GET", "/from_url/status/", params={"token": token})
        return FromUrlStatus.from_dict(data or {})

    def file_info(self, file_id: str) -> UploadedFileInfo:
        """Get information about an uploaded file."""
        data = self.client.call(
            "GET", "/info/",
            params={"pub_key": self.client.auth.pub_key, "file_id": file_id},
        )
        return UploadedFileInfo.from_dict(data)

    def create_group(self, file_ids: Sequence[str]) -> UploadGroupInfo:
        """
        Create a group from file IDs.

        IDs may carry CDN operations, for example
        ``b1026315-8116-4632-8364-607e64fca723/-/resize/x800/``.
        """
        if isinstance(file_ids, str) or not file_ids:
            raise ValidationError("a non-empty sequence of file IDs is required", field="file_ids")

        fields = {f"files[{pos}]": file_id for pos, file_id in enumerate(file_ids)}
        data = self.client.call("POST", "/group/", data=self._form(fields))
        return UploadGroupInfo.from_dict(data)

    def group_info(self, group_id: str) -> UploadGroupInfo:
        """Get information about a group, ID format ``<uuid>~<count>``."""
        data = self.client.call(
            "GET", "/group/info/",
            params={"pub_key": self.client.auth.pub_key, "group_id": group_id},
        )
        return UploadGroupInfo.from_dict(data)

    def multipart_start(self, params: MultipartParams) -> MultipartUpload:
        """
        Start a multipart upload.

        Use it for files larger than 100MB or when accelerated uploads are
        wanted. Files smaller than 10MB are rejected by the API.
        """
        data = self.client.call("POST", "/multipart/start/", data=self._form(params.to_form()))
        return MultipartUpload.from_dict(data)

    def upload_part(self, url: str, data: bytes) -> None:
        """
        Upload one part to its presigned URL.

        Every part is 5MB except the last one, which may be smaller.
        """
        self.client.put_raw(url, data)

    def multipart_complete(self, uuid: str) -> UploadedFileInfo:
        """Complete a multipart upload once all parts are uploaded."""
        data = self.client.call("POST", "/multipart/complete/", data=self._form({"uuid": uuid}))
        return UploadedFileInfo.from_dict(data)

    def multipart_upload(
        self,
        path: Union[str, Path],
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        store: ToStore = ToStore.FALSE,
    ) -> UploadedFileInfo:
        """
        Upload a file from disk with the multipart API.

        Starts the upload, sends the parts in order and completes it.
        """
        path = Path(path)
        if not path.is_file():
            raise ValidationError(f"File not found: {path}", field="path")

        filename = filename or path.name
        params = MultipartParams(
            filename=filename,
            size=path.stat().st_size,
            content_type=content_type or mimetypes.guess_type(filename)[0] or DEFAULT_MIME_TYPE,
            store=store,
        )
        upload = self.multipart_start(params)

        with open(path, "rb") as f:
            chunks = chunk_file(f, MULTIPART_CHUNK_SIZE)
            for index, url in enumerate(upload.parts):
                chunk = next(chunks, None)
                if chunk is None:
                    raise ValidationError(
                        f"file {path} ran out of data at part {index + 1} of {len(upload.parts)}",
                        field="path",
                    )
                logger.debug("uploading part %d/%d of %s", index + 1, len(upload.parts), filename)
                self.upload_part(url, chunk)

        return self.multipart_complete(upload.uuid)
