import base64
import hashlib
import hmac
import os
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import BaseModel, ValidationError

from qualifications.core.config import get_settings


PBKDF2_ITERATIONS = 120_000


class TokenClaims(BaseModel):
    """Claims carried by an access token: the owner id and the login it was issued to."""

    sub: str
    login: str
    exp: datetime


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return "pbkdf2_sha256${iterations}${salt}${digest}".format(
        iterations=PBKDF2_ITERATIONS,
        salt=base64.urlsafe_b64encode(salt).decode("ascii"),
        digest=base64.urlsafe_b64encode(digest).decode("ascii"),
    )


def verify_password(password: str, password_hash: str) -> bool:
    try:
        algo, iterations, salt_b64, digest_b64 = password_hash.split("$", 3)
    except ValueError:
        return False

    if algo != "pbkdf2_sha256":
        return False

    salt = base64.urlsafe_b64decode(salt_b64.encode("ascii"))
    expected = base64.urlsafe_b64decode(digest_b64.encode("ascii"))
    actual = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, int(iterations))
    return hmac.compare_digest(actual, expected)


def issue_access_token(user_id: str, login: str, expires_minutes: int | None = None) -> tuple[str, datetime]:
    """Return a signed token for the user together with its expiry time."""
    settings = get_settings()
    issued_at = datetime.now(UTC).replace(microsecond=0)
    expires_at = issued_at + timedelta(minutes=expires_minutes or settings.jwt_expire_minutes)
    token = jwt.encode(
        {
            "sub": user_id,
            "login": login,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    return token, expires_at


def read_access_token(token: str) -> TokenClaims:
    """Verify a token and return its claims.

    Raises ``jwt.InvalidTokenError`` for a bad signature, an expired token or
    a token missing the owner claims.
    """
    settings = get_settings()
    payload = jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )
    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as exc:
        raise jwt.InvalidTokenError("Token does not carry the owner claims") from exc
