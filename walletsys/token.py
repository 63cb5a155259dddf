"""RS256 signed tokens carrying a JSON encoded payload."""

from __future__ import annotations

import dataclasses
import json
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

_RSA_ALGORITHMS = ["RS256", "RS384", "RS512"]
_BEARER = "Bearer "


class TokenError(Exception):
    """A token could not be created or validated."""


def _as_bytes(value: bytes | str) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def _encode_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def _load_private_key(pem: bytes) -> rsa.RSAPrivateKey:
    try:
        key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise TokenError(f"invalid private key: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise TokenError("key is not a valid RSA private key")
    return key


def _load_public_key(pem: bytes) -> rsa.RSAPublicKey:
    try:
        key = serialization.load_pem_public_key(pem)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise TokenError(f"invalid public key: {exc}") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise TokenError("key is not a valid RSA public key")
    return key


class TokenService:
    """Creates and validates tokens with an RSA key pair in PEM form."""

    def __init__(self, private_key: bytes | str, public_key: bytes | str) -> None:
        self._private_key = _as_bytes(private_key)
        self._public_key = _as_bytes(public_key)

    @classmethod
    def from_env(cls) -> "TokenService":
        """Read the key files named by ``PRIVATE_KEY`` and ``PUBLIC_KEY``."""
        private_pem = Path(os.environ.get("PRIVATE_KEY", "")).read_bytes()
        public_pem = Path(os.environ.get("PUBLIC_KEY", "")).read_bytes()
        return cls(private_pem, public_pem)

    def create(self, ttl: timedelta, content: Any) -> str:
        """Sign ``content`` (as a JSON string claim) valid for ``ttl``."""
        key = _load_private_key(self._private_key)
        now = datetime.now(timezone.utc)
        try:
            data = json.dumps(content, separators=(",", ":"), default=_encode_default)
        except (TypeError, ValueError) as exc:
            raise TokenError(str(exc)) from exc

        issued = int(now.timestamp())
        claims = {
            "dat": data,
            "exp": int((now + ttl).timestamp()),
            "iat": issued,
            "nbf": issued,
        }
        try:
            return jwt.encode(claims, key, algorithm="RS256")
        except (jwt.PyJWTError, ValueError, TypeError) as exc:
            raise TokenError(str(exc)) from exc

    def validate(self, token: str) -> Any:
        """Check signature and time claims; return the ``dat`` claim."""
        key = _load_public_key(self._public_key)
        if token.startswith(_BEARER):
            token = token.split(_BEARER)[1]
        try:
            claims = jwt.decode(token, key, algorithms=_RSA_ALGORITHMS)
        except jwt.PyJWTError as exc:
            raise TokenError(str(exc)) from exc
        return claims.get("dat")