"""Bearer tokens and password digests.

Tokens are stateless HS256 JWTs carrying the subject id and email. Nothing is
persisted, so a token stays valid until it expires. Verification collapses
every failure (bad signature, malformed, expired) into ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import structlog
from jose import JWTError, jwt

from modelfit.config import settings

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "
# bcrypt ignores everything past 72 bytes
BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class TokenPayload:
    """Claims recovered from a verified token."""

    subject_id: str
    subject_email: str | None
    issued_at: datetime
    expires_at: datetime


def issue_token(
    subject_id: str,
    subject_email: str | None,
    expires_delta: timedelta | None = None,
    now: datetime | None = None,
) -> str:
    """Sign a token for the given subject, valid for ``jwt_expire_minutes`` by default."""
    issued_at = now or datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expire_minutes)
    claims = {
        "sub": subject_id,
        "email": subject_email,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + expires_delta).timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> TokenPayload | None:
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug("token_rejected", reason=type(e).__name__)
        return None

    subject_id = claims.get("sub")
    issued_at = claims.get("iat")
    expires_at = claims.get("exp")
    if not isinstance(subject_id, str) or not subject_id:
        return None
    if not isinstance(issued_at, int) or not isinstance(expires_at, int):
        return None

    return TokenPayload(
        subject_id=subject_id,
        subject_email=claims.get("email"),
        issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
    )


def extract_bearer(header_value: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` value, else None."""
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX):].strip()
    return token or None


def hash_password(plaintext: str) -> str:
    """Salted bcrypt digest using the configured work factor."""
    password_bytes = plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]
    digest = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    return digest.decode("utf-8")


def verify_password(plaintext: str, digest: str) -> bool:
    password_bytes = plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(password_bytes, digest.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt digest
        return False
