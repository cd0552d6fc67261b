"""
Uploadcare SDK - Python client for the Uploadcare REST and Upload APIs.

This package provides:
- A REST API client with simple or signature based authentication
- Services for files, groups, projects, webhooks and conversions
- An Upload API client for direct, from-URL and multipart uploads
- Typed, immutable response models
- A CLI for everyday project operations

Logging goes through the ``uploadcare_sdk`` logger; configure a handler in
your application to see it.
"""

import logging

__version__ = "0.3.0"

from .config import ApiCreds, ApiVersion, RestConfig, UploadConfig
from .client import RestClient, UploadClient
from .files import FileService
from .groups import GroupService
from .projects import ProjectService
from .webhooks import WebhookService
from .conversions import ConversionService
from .uploads import UploadService
from .models import (
    FileInfo,
    FileList,
    FileListParams,
    FileOrdering,
    GroupInfo,
    GroupList,
    GroupListParams,
    GroupOrdering,
    CopyParams,
    CopyPattern,
    ProjectInfo,
    Webhook,
    WebhookCreateParams,
    WebhookUpdateParams,
    WebhookEvent,
    ConversionParams,
    ConversionStatus,
    FileUploadParams,
    FromUrlParams,
    MultipartParams,
    ToStore,
    UrlDuplicates,
    UploadedFileInfo,
    UploadGroupInfo,
)
from .exceptions import (
    UploadcareError,
    ApiError,
    ConfigurationError,
    ValidationError,
    NetworkError,
    RequestTimeoutError,
    ResponseParseError,
    BadRequestError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    NotAcceptableError,
    PayloadTooLargeError,
    RateLimitError,
    ClientError,
    ServerError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Configuration and clients
    "ApiCreds",
    "ApiVersion",
    "RestConfig",
    "UploadConfig",
    "RestClient",
    "UploadClient",

    # Services
    "FileService",
    "GroupService",
    "ProjectService",
    "WebhookService",
    "ConversionService",
    "UploadService",

    # Data models
    "FileInfo",
    "FileList",
    "FileListParams",
    "FileOrdering",
    "GroupInfo",
    "GroupList",
    "GroupListParams",
    "GroupOrdering",
    "CopyParams",
    "CopyPattern",
    "ProjectInfo",
    "Webhook",
    "WebhookCreateParams",
    "WebhookUpdateParams",
    "WebhookEvent",
    "ConversionParams",
    "ConversionStatus",
    "FileUploadParams",
    "FromUrlParams",
    "MultipartParams",
    "ToStore",
    "UrlDuplicates",
    "UploadedFileInfo",
    "UploadGroupInfo",

    # Exceptions
    "UploadcareError",
    "ApiError",
    "ConfigurationError",
    "ValidationError",
    "NetworkError",
    "RequestTimeoutError",
    "ResponseParseError",
    "BadRequestError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "NotAcceptableError",
    "PayloadTooLargeError",
    "RateLimitError",
    "ClientError",
    "ServerError",
]
