"""
HTTP clients for the Uploadcare REST and Upload APIs.

Both clients own a ``requests.Session``, issue one blocking request per
call and translate HTTP failures into SDK exceptions. Resource services
(files, groups, uploads, ...) are thin layers on top of ``call``.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.exceptions import ReadTimeoutError
from urllib3.util.retry import Retry

from . import __version__
from .auth import SignatureAuth, SimpleAuth, UploadAuth
from .config import ApiCreds, RestConfig, UploadConfig
from .exceptions import (
    STATUS_ERRORS, ClientError, NetworkError, RateLimitError,
    RequestTimeoutError, ResponseParseError, ServerError,
)
from .utils import http_date

logger = logging.getLogger(__name__)

USER_AGENT_PREFIX = "UploadcarePython"
JSON_CONTENT_TYPE = "application/json"
UPLOAD_RETRY_AFTER = 30  # the Upload API does not send Retry-After


def _is_read_timeout(error: requests.exceptions.ConnectionError) -> bool:
    reason = getattr(error.args[0], "reason", None) if error.args else None
    return isinstance(reason, ReadTimeoutError)


class BaseClient:
    """Session handling and error mapping shared by both API clients."""

    default_retry_after: Optional[int] = None

    def __init__(self, creds: ApiCreds, base_url: str, timeout: float, max_retries: int):
        creds.validate()

        self.creds = creds
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        """Send a request, mapping transport and HTTP errors to SDK exceptions."""
        logger.debug("sending request: %s %s", method, url)

        try:
            response = self.session.request(method=method, url=url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(f"Request timeout: {e}", timeout_seconds=self.timeout) from e
        except requests.exceptions.ConnectionError as e:
            # exhausted retries on idempotent methods wrap the read timeout
            if _is_read_timeout(e):
                raise RequestTimeoutError(f"Request timeout: {e}", timeout_seconds=self.timeout) from e
            raise NetworkError(f"Connection error: {e}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Request failed: {e}") from e

        logger.debug("received response: %s %s -> %s", method, url, response.status_code)

        self._raise_for_status(response)
        return response

    def _raise_for_status(self, response: requests.Response):
        status = response.status_code
        if status < 400:
            return

        if status == 429:
            raise RateLimitError(
                retry_after=self._retry_after(response),
                status_code=status,
            )

        message = self._error_message(response)
        logger.debug("request failed with %s: %s", status, message)

        error_cls = STATUS_ERRORS.get(status)
        if error_cls is None:
            error_cls = ServerError if status >= 500 else ClientError
        raise error_cls(message, status_code=status)

    def _retry_after(self, response: requests.Response) -> Optional[int]:
        value = response.headers.get("Retry-After")
        try:
            return int(value)
        except (TypeError, ValueError):
            return self.default_retry_after

    def _error_message(self, response: requests.Response) -> str:
        return response.text or response.reason or f"HTTP {response.status_code}"

    def _decode(self, response: requests.Response) -> Any:
        if not response.content or not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ResponseParseError(f"Invalid JSON in response: {e}", body=response.text) from e

    def close(self):
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


class RestClient(BaseClient):
    """
    Client for the Uploadcare REST API.

    Prepares versioned, authenticated JSON requests. Use the resource
    properties (``files``, ``groups``, ...) or pass the client to a
    service class directly.
    """

    def __init__(self, creds: ApiCreds, config: Optional[RestConfig] = None):
        """
        Initialize the REST client.

        Args:
            creds: Project API credentials
            config: Client configuration, defaults to signed v0.5 requests
        """
        self.config = config or RestConfig()
        super().__init__(creds, self.config.base_url, self.config.timeout, self.config.max_retries)

        self.session.headers.update({
            "Accept": f"application/vnd.uploadcare-{self.config.api_version}+json",
            "X-UC-User-Agent": f"{USER_AGENT_PREFIX}/{__version__}/{creds.pub_key}",
        })
        self.session.auth = SignatureAuth(creds) if self.config.sign_based_auth else SimpleAuth(creds)

    def call(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
    ) -> Any:
        """
        Make a request against a path relative to the API root.

        Args:
            method: HTTP method
            path: Endpoint path such as ``/files/``
            params: Query parameters
            json: JSON-serializable request body

        Returns:
            Decoded JSON body, or None for an empty response
        """
        return self.call_url(method, f"{self.base_url}{path}", params=params, json=json)

    def call_url(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
    ) -> Any:
        """Make a request against an absolute URL, such as a pagination link."""
        headers = {
            "Date": http_date(),
            "Content-Type": JSON_CONTENT_TYPE,
        }
        response = self._send(method, url, params=params, json=json, headers=headers)
        return self._decode(response)

    def _error_message(self, response: requests.Response) -> str:
        try:
            detail = response.json().get("detail")
        except (ValueError, AttributeError):
            detail = None
        return detail or super()._error_message(response)

    @property
    def files(self):
        from .files import FileService
        return FileService(self)

    @property
    def groups(self):
        from .groups import GroupService
        return GroupService(self)

    @property
    def project(self):
        from .projects import ProjectService
        return ProjectService(self)

    @property
    def webhooks(self):
        from .webhooks import WebhookService
        return WebhookService(self)

    @property
    def conversions(self):
        from .conversions import ConversionService
        return ConversionService(self)


class UploadClient(BaseClient):
    """
    Client for the Uploadcare Upload API.

    Authentication travels in form fields, see ``UploadAuth``.
    """

    default_retry_after = UPLOAD_RETRY_AFTER

    def __init__(self, creds: ApiCreds, config: Optional[UploadConfig] = None):
        self.config = config or UploadConfig()
        super().__init__(creds, self.config.base_url, self.config.timeout, self.config.max_retries)

        self.auth = UploadAuth(
            creds,
            sign_based=self.config.sign_based_upload,
            ttl=self.config.signature_ttl,
        )

    def call(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        data: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make a request against a path relative to the Upload API root.

        Args:
            method: HTTP method
            path: Endpoint path such as ``/base/``
            params: Query parameters
            data: Form fields
            files: Multipart file fields

        Returns:
            Decoded JSON body, or None for an empty response
        """
        return self.call_url(method, f"{self.base_url}{path}", params=params, data=data, files=files)

    def call_url(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, str]] = None,
        data: Any = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        response = self._send(method, url, params=params, data=data, files=files)
        return self._decode(response)

    def put_raw(self, url: str, payload: bytes, content_type: str = "application/octet-stream") -> Any:
        """PUT raw bytes to an absolute URL, such as a presigned part URL."""
        response = self._send("PUT", url, data=payload, headers={"Content-Type": content_type})
        return self._decode(response)

    @property
    def uploads(self):
        from .uploads import UploadService
        return UploadService(self)
