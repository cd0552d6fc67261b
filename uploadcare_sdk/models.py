"""
Data models for the Uploadcare SDK.

Response objects mirror the JSON returned by the REST and Upload APIs and
are built with ``from_dict``. Parameter objects describe requests and know
how to render themselves as query strings, JSON bodies or form fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .utils import bool_param, compact, enum_value, parse_datetime


class FileOrdering(Enum):
    """Sort order for file lists."""
    DATETIME_UPLOADED = "datetime_uploaded"
    DATETIME_UPLOADED_DESC = "-datetime_uploaded"
    SIZE = "size"
    SIZE_DESC = "-size"


class GroupOrdering(Enum):
    """Sort order for group lists."""
    DATETIME_CREATED = "datetime_created"
    DATETIME_CREATED_DESC = "-datetime_created"


class ColorMode(Enum):
    """Image color modes."""
    RGB = "RGB"
    RGBA = "RGBA"
    RGBa = "RGBa"
    RGBX = "RGBX"
    L = "L"
    LA = "LA"
    La = "La"
    P = "P"
    PA = "PA"
    CMYK = "CMYK"
    YCbCr = "YCbCr"
    HSV = "HSV"
    LAB = "LAB"


class CopyPattern(Enum):
    """File name patterns passed to a custom storage on remote copy."""
    DEFAULT = "${default}"
    AUTO_FILENAME = "${filename} ${effects} ${ext}"
    EFFECTS = "${effects}"
    FILENAME = "${filename}"
    UUID = "${uuid}"
    EXT = "${ext}"


class ToStore(Enum):
    """File storing behaviour for uploads."""
    TRUE = "1"
    FALSE = "0"
    AUTO = "auto"


class UrlDuplicates(Enum):
    """Duplicate handling flags for uploads from URL."""
    TRUE = "1"
    FALSE = "0"


class UploadStatus(Enum):
    """Status of an upload from URL."""
    SUCCESS = "success"
    PROGRESS = "progress"
    ERROR = "error"
    WAITING = "waiting"
    UNKNOWN = "unknown"


class WebhookEvent(Enum):
    """Events a webhook can subscribe to."""
    FILE_UPLOADED = "file.uploaded"


def _enum_or_raw(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _nested(cls, data: Optional[Dict[str, Any]]):
    if not data:
        return None
    return cls.from_dict(data)


# ---------------------------------------------------------------------------
# File metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GeoLocation:
    """Image geo location."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeoLocation":
        return cls(latitude=data.get("latitude"), longitude=data.get("longitude"))


@dataclass(frozen=True)
class ImageInfo:
    """Image-specific information."""

    color_mode: Optional[Union[ColorMode, str]] = None
    orientation: Optional[int] = None
    format: Optional[str] = None
    sequence: Optional[bool] = None
    height: Optional[int] = None
    width: Optional[int] = None
    geo_location: Optional[GeoLocation] = None
    datetime_original: Optional[datetime] = None
    dpi: Optional[List[float]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageInfo":
        """Create ImageInfo from API response dictionary."""
        return cls(
            color_mode=_enum_or_raw(ColorMode, data.get("color_mode")),
            orientation=data.get("orientation"),
            format=data.get("format"),
            sequence=data.get("sequence"),
            height=data.get("height"),
            width=data.get("width"),
            geo_location=_nested(GeoLocation, data.get("geo_location")),
            datetime_original=parse_datetime(data.get("datetime_original")),
            dpi=data.get("dpi"),
        )


@dataclass(frozen=True)
class AudioStream:
    """Audio stream of a video file."""

    bitrate: Optional[float] = None
    codec: Optional[str] = None
    sample_rate: Optional[float] = None
    channels: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AudioStream":
        channels = data.get("channels")
        return cls(
            bitrate=data.get("bitrate"),
            codec=data.get("codec"),
            sample_rate=data.get("sample_rate"),
            channels=str(channels) if channels is not None else None,
        )


@dataclass(frozen=True)
class VideoStream:
    """Video stream of a video file."""

    height: Optional[float] = None
    width: Optional[float] = None
    frame_rate: Optional[float] = None
    bitrate: Optional[float] = None
    codec: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VideoStream":
        return cls(
            height=data.get("height"),
            width=data.get("width"),
            frame_rate=data.get("frame_rate"),
            bitrate=data.get("bitrate"),
            codec=data.get("codec"),
        )


@dataclass(frozen=True)
class VideoInfo:
    """Video-specific information. Duration is in milliseconds."""

    duration: Optional[float] = None
    format: Optional[str] = None
    bitrate: Optional[float] = None
    audio: Optional[AudioStream] = None
    video: Optional[VideoStream] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VideoInfo":
        return cls(
            duration=data.get("duration"),
            format=data.get("format"),
            bitrate=data.get("bitrate"),
            audio=_nested(AudioStream, data.get("audio")),
            video=_nested(VideoStream, data.get("video")),
        )


# ---------------------------------------------------------------------------
# REST API: files
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FileInfo:
    """Information about a file as returned by the REST API."""

    uuid: str
    datetime_removed: Optional[datetime] = None
    datetime_stored: Optional[datetime] = None
    datetime_uploaded: Optional[datetime] = None
    image_info: Optional[ImageInfo] = None
    is_image: Optional[bool] = None
    is_ready: Optional[bool] = None
    mime_type: Optional[str] = None
    original_file_url: Optional[str] = None
    original_filename: Optional[str] = None
    size: Optional[int] = None
    url: Optional[str] = None
    variations: Optional[Dict[str, Any]] = None
    video_info: Optional[VideoInfo] = None
    source: Optional[str] = None
    rekognition_info: Optional[Dict[str, float]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileInfo":
        """Create FileInfo from API response dictionary."""
        return cls(
            uuid=data["uuid"],
            datetime_removed=parse_datetime(data.get("datetime_removed")),
            datetime_stored=parse_datetime(data.get("datetime_stored")),
            datetime_uploaded=parse_datetime(data.get("datetime_uploaded")),
            image_info=_nested(ImageInfo, data.get("image_info")),
            is_image=data.get("is_image"),
            is_ready=data.get("is_ready"),
            mime_type=data.get("mime_type"),
            original_file_url=data.get("original_file_url"),
            original_filename=data.get("original_filename"),
            size=data.get("size"),
            url=data.get("url"),
            variations=data.get("variations"),
            video_info=_nested(VideoInfo, data.get("video_info")),
            source=data.get("source"),
            rekognition_info=data.get("rekognition_info"),
        )

    @property
    def is_stored(self) -> bool:
        return self.datetime_stored is not None

    @property
    def is_removed(self) -> bool:
        return self.datetime_removed is not None


@dataclass(frozen=True)
class FileList:
    """A page of files."""

    results: List[FileInfo] = field(default_factory=list)
    next: Optional[str] = None
    previous: Optional[str] = None
    total: Optional[int] = None
    per_page: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileList":
        return cls(
            results=[FileInfo.from_dict(item) for item in data.get("results") or []],
            next=data.get("next"),
            previous=data.get("previous"),
            total=data.get("total"),
            per_page=data.get("per_page"),
        )


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of a batch store or delete.

    ``problems`` maps each rejected file ID to the reason it was rejected;
    ``result`` holds the files that were processed.
    """

    problems: Dict[str, str] = field(default_factory=dict)
    result: List[FileInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BatchResult":
        return cls(
            problems=data.get("problems") or {},
            result=[FileInfo.from_dict(item) for item in data.get("result") or []],
        )


@dataclass(frozen=True)
class LocalCopyResult:
    """Result of copying a file to the default storage."""

    result: FileInfo

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocalCopyResult":
        return cls(result=FileInfo.from_dict(data["result"]))


@dataclass(frozen=True)
class RemoteCopyResult:
    """
    Result of copying a file to a custom storage.

    ``result`` is an ``s3://`` URL with the bucket name as host.
    """

    result: Optional[str] = None
    already_exists: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemoteCopyResult":
        return cls(
            result=data.get("result"),
            already_exists=data.get("already_exists", False),
        )


# ---------------------------------------------------------------------------
# REST API: groups, project, webhooks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GroupInfo:
    """Information about a file group. Group IDs look like ``<uuid>~<count>``."""

    id: str
    files_count: int = 0
    cdn_url: Optional[str] = None
    datetime_created: Optional[datetime] = None
    datetime_stored: Optional[datetime] = None
    url: Optional[str] = None
    files: Optional[List[Optional[FileInfo]]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroupInfo":
        """Create GroupInfo from API response dictionary."""
        files = data.get("files")
        if files is not None:
            # removed files show up as nulls
            files = [FileInfo.from_dict(item) if item else None for item in files]

        return cls(
            id=data["id"],
            files_count=data.get("files_count", 0),
            cdn_url=data.get("cdn_url"),
            datetime_created=parse_datetime(data.get("datetime_created")),
            datetime_stored=parse_datetime(data.get("datetime_stored")),
            url=data.get("url"),
            files=files,
        )


@dataclass(frozen=True)
class GroupList:
    """A page of groups."""

    results: List[GroupInfo] = field(default_factory=list)
    next: Optional[str] = None
    previous: Optional[str] = None
    total: Optional[int] = None
    per_page: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroupList":
        return cls(
            results=[GroupInfo.from_dict(item) for item in data.get("results") or []],
            next=data.get("next"),
            previous=data.get("previous"),
            total=data.get("total"),
            per_page=data.get("per_page"),
        )


@dataclass(frozen=True)
class Collaborator:
    """A project collaborator."""

    email: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Collaborator":
        return cls(email=data["email"], name=data["name"])


@dataclass(frozen=True)
class ProjectInfo:
    """Account project information."""

    name: str
    pub_key: str
    collaborators: List[Collaborator] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectInfo":
        return cls(
            name=data["name"],
            pub_key=data["pub_key"],
            collaborators=[Collaborator.from_dict(item) for item in data.get("collaborators") or []],
        )


@dataclass(frozen=True)
class Webhook:
    """A webhook subscription."""

    id: int
    event: str
    target_url: str
    is_active: bool = True
    project: Optional[int] = None
    signing_secret: Optional[str] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Webhook":
        """Create Webhook from API response dictionary."""
        return cls(
            id=data["id"],
            event=data["event"],
            target_url=data["target_url"],
            is_active=data.get("is_active", True),
            project=data.get("project"),
            signing_secret=data.get("signing_secret"),
            created=parse_datetime(data.get("created")),
            updated=parse_datetime(data.get("updated")),
        )


# ---------------------------------------------------------------------------
# REST API: conversion
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConversionJob:
    """A single conversion job."""

    uuid: Optional[str] = None
    token: Optional[int] = None
    original_source: Optional[str] = None
    thumbnails_group_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversionJob":
        return cls(
            uuid=data.get("uuid"),
            token=data.get("token"),
            original_source=data.get("original_source"),
            thumbnails_group_id=data.get("thumbnails_group_id"),
        )


@dataclass(frozen=True)
class ConversionJobResult:
    """Response to a conversion request. ``problems`` is keyed by requested path."""

    problems: Dict[str, str] = field(default_factory=dict)
    result: List[ConversionJob] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversionJobResult":
        return cls(
            problems=data.get("problems") or {},
            result=[ConversionJob.from_dict(item) for item in data.get("result") or []],
        )


@dataclass(frozen=True)
class ConversionStatus:
    """
    Status of a conversion job.

    ``status`` is one of ``pending``, ``processing``, ``finished``,
    ``failed`` or ``canceled``.
    """

    status: str
    error: Optional[str] = None
    result: Optional[ConversionJob] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversionStatus":
        return cls(
            status=data["status"],
            error=data.get("error"),
            result=_nested(ConversionJob, data.get("result")),
        )


# ---------------------------------------------------------------------------
# Upload API
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UploadedFileInfo:
    """File information in the upload context."""

    uuid: str
    file_id: Optional[str] = None
    size: int = 0
    done: int = 0
    total: int = 0
    is_stored: bool = False
    is_ready: bool = False
    is_image: bool = False
    filename: Optional[str] = None
    original_filename: Optional[str] = None
    mime_type: Optional[str] = None
    image_info: Optional[ImageInfo] = None
    video_info: Optional[VideoInfo] = None
    s3_bucket: Optional[str] = None
    default_effects: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadedFileInfo":
        """Create UploadedFileInfo from API response dictionary."""
        return cls(
            uuid=data.get("uuid") or data.get("file_id", ""),
            file_id=data.get("file_id"),
            size=data.get("size") or 0,
            done=data.get("done") or 0,
            total=data.get("total") or 0,
            is_stored=bool(data.get("is_stored")),
            is_ready=bool(data.get("is_ready")),
            is_image=bool(data.get("is_image")),
            filename=data.get("filename"),
            original_filename=data.get("original_filename"),
            mime_type=data.get("mime_type"),
            image_info=_nested(ImageInfo, data.get("image_info")),
            video_info=_nested(VideoInfo, data.get("video_info")),
            s3_bucket=data.get("s3_bucket"),
            default_effects=data.get("default_effects"),
        )


@dataclass(frozen=True)
class UploadGroupInfo:
    """Group information in the upload context."""

    id: str
    files_count: int = 0
    cdn_url: Optional[str] = None
    url: Optional[str] = None
    datetime_created: Optional[datetime] = None
    datetime_stored: Optional[datetime] = None
    files: List[UploadedFileInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadGroupInfo":
        return cls(
            id=data["id"],
            files_count=data.get("files_count", 0),
            cdn_url=data.get("cdn_url"),
            url=data.get("url"),
            datetime_created=parse_datetime(data.get("datetime_created")),
            datetime_stored=parse_datetime(data.get("datetime_stored")),
            files=[UploadedFileInfo.from_dict(item) for item in data.get("files") or [] if item],
        )


@dataclass(frozen=True)
class FromUrlResult:
    """
    Response to an upload from URL.

    The API answers with a token to poll (``type == "token"``) or, when a
    duplicate was found, the file itself (``type == "file_info"``).
    """

    type: str
    token: Optional[str] = None
    file_info: Optional[UploadedFileInfo] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FromUrlResult":
        result_type = data.get("type", "token")
        if result_type == "file_info":
            return cls(type=result_type, file_info=UploadedFileInfo.from_dict(data))
        return cls(type=result_type, token=data.get("token"))

    @property
    def is_token(self) -> bool:
        return self.type == "token"


@dataclass(frozen=True)
class FromUrlStatus:
    """Progress of an upload from URL."""

    status: Union[UploadStatus, str]
    done: Optional[int] = None
    total: Optional[int] = None
    error: Optional[str] = None
    file_info: Optional[UploadedFileInfo] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FromUrlStatus":
        status = _enum_or_raw(UploadStatus, data.get("status", "unknown"))

        file_info = None
        if status == UploadStatus.SUCCESS:
            file_info = UploadedFileInfo.from_dict(data)

        return cls(
            status=status,
            done=data.get("done"),
            total=data.get("total"),
            error=data.get("error"),
            file_info=file_info,
        )


@dataclass(frozen=True)
class MultipartUpload:
    """A started multipart upload: presigned part URLs and the file UUID."""

    uuid: str
    parts: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MultipartUpload":
        return cls(uuid=data["uuid"], parts=list(data.get("parts") or []))


# ---------------------------------------------------------------------------
# Request parameters
# ---------------------------------------------------------------------------

@dataclass
class FileListParams:
    """
    Query parameters for listing files.

    Attributes:
        removed: Only include removed files
        stored: True for stored files only, False for temporary ones,
            None for both
        limit: Files per page, up to 1000
        ordering: Sort order
        from_: Starting point, its format depends on ``ordering``
    """

    removed: bool = False
    stored: Optional[bool] = None
    limit: int = 1000
    ordering: FileOrdering = FileOrdering.DATETIME_UPLOADED
    from_: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        """Convert to API query parameters."""
        params = {"removed": bool_param(self.removed)}

        if self.stored is not None:
            params["stored"] = bool_param(self.stored)
        params["limit"] = str(self.limit)
        params["ordering"] = enum_value(self.ordering)
        if self.from_:
            params["from"] = self.from_

        return params


@dataclass
class GroupListParams:
    """
    Query parameters for listing groups.

    ``from_`` must be a datetime with ``T`` as separator, for example
    ``2015-01-02T10:00:00``.
    """

    limit: int = 100
    ordering: GroupOrdering = GroupOrdering.DATETIME_CREATED
    from_: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        """Convert to API query parameters."""
        params = {
            "limit": str(self.limit),
            "ordering": enum_value(self.ordering),
        }
        if self.from_:
            params["from"] = self.from_
        return params


@dataclass
class CopyParams:
    """
    Parameters for copying a file.

    Attributes:
        source: CDN URL or UUID of the file to copy
        store: Store the copy, applies to the default storage only
        make_public: Make the copy public, applies to custom storage only
        target: Name of a custom storage connected to the project
        pattern: File name pattern for the custom storage
    """

    source: str
    store: Optional[bool] = None
    make_public: Optional[bool] = None
    target: Optional[str] = None
    pattern: Optional[CopyPattern] = None

    def to_json(self) -> Dict[str, str]:
        return compact({
            "source": self.source,
            "store": bool_param(self.store) if self.store is not None else None,
            "make_public": bool_param(self.make_public) if self.make_public is not None else None,
            "target": self.target,
            "pattern": enum_value(self.pattern),
        })


@dataclass
class WebhookCreateParams:
    """Parameters for subscribing a webhook."""

    target_url: str
    event: WebhookEvent = WebhookEvent.FILE_UPLOADED
    signing_secret: Optional[str] = None
    is_active: Optional[bool] = None

    def to_json(self) -> Dict[str, Any]:
        return compact({
            "event": enum_value(self.event),
            "target_url": self.target_url,
            "signing_secret": self.signing_secret,
            "is_active": True if self.is_active is None else self.is_active,
        })


@dataclass
class WebhookUpdateParams:
    """Parameters for updating a webhook. Fields left as None are unchanged."""

    id: int
    event: Optional[WebhookEvent] = None
    target_url: Optional[str] = None
    signing_secret: Optional[str] = None
    is_active: Optional[bool] = None

    def to_json(self) -> Dict[str, Any]:
        return compact({
            "event": enum_value(self.event),
            "target_url": self.target_url,
            "signing_secret": self.signing_secret,
            "is_active": self.is_active,
        })


@dataclass
class ConversionParams:
    """
    Parameters for a conversion job.

    Each path is ``<uuid>/document/-/format/<target>/`` (or ``video``) or
    a full CDN URL of that form.
    """

    paths: List[str]
    store: Optional[bool] = None

    def to_json(self) -> Dict[str, Any]:
        return compact({
            "paths": list(self.paths),
            "store": bool_param(self.store) if self.store is not None else None,
        })


@dataclass
class FileUploadParams:
    """
    Parameters for a direct upload.

    ``file`` is a path or a binary file object. Direct uploads are limited
    to 100MB; use multipart uploads for anything larger.
    """

    file: Any
    name: Optional[str] = None
    store: ToStore = ToStore.FALSE


@dataclass
class FromUrlParams:
    """Parameters for uploading a file from a public URL."""

    source_url: str
    store: ToStore = ToStore.FALSE
    filename: Optional[str] = None
    check_url_duplicates: Optional[UrlDuplicates] = None
    save_url_duplicates: Optional[UrlDuplicates] = None

    def to_form(self) -> Dict[str, str]:
        return compact({
            "source_url": self.source_url,
            "store": enum_value(self.store),
            "filename": self.filename,
            "check_URL_duplicates": enum_value(self.check_url_duplicates),
            "save_URL_duplicates": enum_value(self.save_url_duplicates),
        })


@dataclass
class MultipartParams:
    """Parameters for starting a multipart upload. Files must be at least 10MB."""

    filename: str
    size: int
    content_type: str = "application/octet-stream"
    store: ToStore = ToStore.FALSE

    def to_form(self) -> Dict[str, str]:
        return {
            "filename": self.filename,
            "size": str(self.size),
            "content_type": self.content_type,
            "UPLOADCARE_STORE": enum_value(self.store),
        }
