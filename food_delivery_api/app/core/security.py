"""
Identity tokens and ownership checks.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC-SHA256 signatures and base64url encoding.  The token
subject (``sub``) is the caller identity: it is recorded as ``owner``
on clients and items when they are created, and every later mutation
on an owned record compares the caller identity against that owner.

Tokens are minted with ``create_access_token`` (see the
``create_token.py`` script at the repository root) and sent as
``Authorization: Bearer <token>``.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .errors import Unauthorized

logger = logging.getLogger(__name__)


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(identity: str, expires_delta: Optional[int] = None) -> str:
    """Create a signed token whose subject is ``identity``.

    Parameters
    ----------
    identity : str
        Caller identity to embed as the ``sub`` claim.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    if not identity:
        raise ValueError("identity must be a non-empty string")
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    claims = {"sub": identity, "exp": int(time.time()) + exp_seconds}
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, object]]:
    """Verify and decode a token.

    Returns the claims if the signature is valid and the token has not
    expired, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        # binascii.Error and JSONDecodeError are both ValueError
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, int) or exp < int(time.time()):
        return None
    if not isinstance(data.get("sub"), str) or not data["sub"]:
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Dependency returning the caller identity from the bearer token."""
    if credentials is None:
        raise Unauthorized("Not authenticated", authenticated=False)
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise Unauthorized("Invalid or expired token", authenticated=False)
    return payload["sub"]


def ensure_owner(owner: str, identity: str, msg: str) -> None:
    """Raise ``Unauthorized`` unless ``identity`` is ``owner``."""
    if not hmac.compare_digest(owner.encode("utf-8"), identity.encode("utf-8")):
        logger.warning("Rejected caller %s: %s", identity, msg)
        raise Unauthorized(msg)
