"""
Credentials and client configuration for the Uploadcare SDK.

Credentials are per project and can be found on the Uploadcare dashboard.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import ConfigurationError

SECRET_KEY_ENV = "UCARE_SECRET_KEY"
PUBLIC_KEY_ENV = "UCARE_PUBLIC_KEY"

REST_API_URL = "https://api.uploadcare.com"
UPLOAD_API_URL = "https://upload.uploadcare.com"


class ApiVersion(Enum):
    """REST API versions the client can request."""
    V05 = "v0.5"
    V06 = "v0.6"

    def __str__(self):
        return self.value


@dataclass
class ApiCreds:
    """Per project API credentials."""

    secret_key: str
    pub_key: str

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "ApiCreds":
        """Read credentials from ``UCARE_SECRET_KEY`` and ``UCARE_PUBLIC_KEY``."""
        environ = os.environ if environ is None else environ

        secret_key = environ.get(SECRET_KEY_ENV)
        pub_key = environ.get(PUBLIC_KEY_ENV)

        if not secret_key:
            raise ConfigurationError(f"{SECRET_KEY_ENV} is not set", config_key=SECRET_KEY_ENV)
        if not pub_key:
            raise ConfigurationError(f"{PUBLIC_KEY_ENV} is not set", config_key=PUBLIC_KEY_ENV)

        return cls(secret_key=secret_key, pub_key=pub_key)

    def validate(self):
        if not self.secret_key or not self.pub_key:
            raise ConfigurationError("invalid api credentials provided")

    def __repr__(self):
        return f"ApiCreds(pub_key={self.pub_key!r}, secret_key='***')"


@dataclass
class RestConfig:
    """
    Configuration for the REST API client.

    Attributes:
        sign_based_auth: Sign every request instead of sending the secret key
        api_version: REST API version sent in the ``Accept`` header
        base_url: REST API root
        timeout: Per request timeout in seconds
        max_retries: Retries handed to the HTTP adapter, none by default
    """

    sign_based_auth: bool = True
    api_version: ApiVersion = ApiVersion.V05
    base_url: str = REST_API_URL
    timeout: float = 30
    max_retries: int = 0


@dataclass
class UploadConfig:
    """
    Configuration for the Upload API client.

    Attributes:
        sign_based_upload: Attach ``signature`` and ``expire`` to every upload
        base_url: Upload API root
        timeout: Per request timeout in seconds
        max_retries: Retries handed to the HTTP adapter, none by default
        signature_ttl: Lifetime of an upload signature in seconds
    """

    sign_based_upload: bool = False
    base_url: str = UPLOAD_API_URL
    timeout: float = 60
    max_retries: int = 0
    signature_ttl: int = 60
