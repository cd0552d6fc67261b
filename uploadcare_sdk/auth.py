"""
Authentication for the Uploadcare REST and Upload APIs.

The REST API accepts either the secret key in plain form or an HMAC-SHA1
signature of the request. The Upload API authenticates by form fields: the
public key, and for signed uploads an expiring HMAC-SHA256 signature.
"""

import hashlib
import hmac
import logging
import time
from typing import Dict, Optional, Union

from requests.auth import AuthBase
from requests.models import PreparedRequest

from .config import ApiCreds
from .utils import mask_secret

logger = logging.getLogger(__name__)

AUTH_HEADER = "Authorization"
SIMPLE_AUTH_SCHEME = "Uploadcare.Simple"
SIGN_BASED_AUTH_SCHEME = "Uploadcare"


class SimpleAuth(AuthBase):
    """Sends ``Uploadcare.Simple <pub_key>:<secret_key>``."""

    def __init__(self, creds: ApiCreds):
        self.creds = creds

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        logger.debug(
            "preparing simple auth param: %s %s:%s",
            SIMPLE_AUTH_SCHEME, self.creds.pub_key, mask_secret(self.creds.secret_key),
        )
        request.headers[AUTH_HEADER] = f"{SIMPLE_AUTH_SCHEME} {self.creds.pub_key}:{self.creds.secret_key}"
        return request


class SignatureAuth(AuthBase):
    """
    Signs REST requests with HMAC-SHA1.

    The request must already carry ``Date`` and ``Content-Type`` headers,
    both of which are part of the signed string.
    """

    def __init__(self, creds: ApiCreds):
        self.creds = creds

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        signature = rest_signature(
            self.creds.secret_key,
            method=request.method,
            body=request.body,
            content_type=request.headers.get("Content-Type", ""),
            date=request.headers.get("Date", ""),
            path=request.path_url,
        )
        auth = f"{SIGN_BASED_AUTH_SCHEME} {self.creds.pub_key}:{signature}"

        logger.debug("preparing sign based auth param: %s", auth)

        request.headers[AUTH_HEADER] = auth
        return request


def rest_signature(
    secret_key: str,
    method: str,
    body: Optional[Union[bytes, str]],
    content_type: str,
    date: str,
    path: str,
) -> str:
    """
    Compute the REST API request signature.

    Args:
        secret_key: Project secret key
        method: HTTP method
        body: Raw request body, None for bodyless requests
        content_type: Value of the ``Content-Type`` header
        date: Value of the ``Date`` header
        path: Request path including the query string

    Returns:
        Hex-encoded HMAC-SHA1 digest
    """
    if body is None:
        body = b""
    elif isinstance(body, str):
        body = body.encode("utf-8")

    body_hash = hashlib.md5(body).hexdigest()
    sign_string = "\n".join([method.upper(), body_hash, content_type, date, path])

    return hmac.new(
        secret_key.encode("utf-8"),
        sign_string.encode("utf-8"),
        hashlib.sha1,
    ).hexdigest()


def upload_signature(secret_key: str, expire: int) -> str:
    """Hex-encoded HMAC-SHA256 of the expiration timestamp."""
    return hmac.new(
        secret_key.encode("utf-8"),
        str(expire).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


class UploadAuth:
    """
    Produces the authentication form fields for Upload API calls.

    Args:
        creds: Project credentials
        sign_based: Whether uploads are signed
        ttl: Signature lifetime in seconds
    """

    def __init__(self, creds: ApiCreds, sign_based: bool = False, ttl: int = 60):
        self.creds = creds
        self.sign_based = sign_based
        self.ttl = ttl

    @property
    def pub_key(self) -> str:
        return self.creds.pub_key

    def fields(self, now: Optional[float] = None) -> Dict[str, str]:
        """Form fields to merge into every upload request."""
        fields = {
            "UPLOADCARE_PUB_KEY": self.creds.pub_key,
            "pub_key": self.creds.pub_key,
        }

        if self.sign_based:
            if now is None:
                now = time.time()
            expire = int(now) + self.ttl
            fields["signature"] = upload_signature(self.creds.secret_key, expire)
            fields["expire"] = str(expire)

        return fields
