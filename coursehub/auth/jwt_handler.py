"""Signed session tokens handed out on register and login."""

from datetime import datetime, timedelta, timezone

import jwt

from coursehub.core import config
from coursehub.core.errors import AuthError


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    if expires_minutes is None:
        expires_minutes = config.JWT_EXPIRES_MINUTES
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token``.

    Expired, tampered and malformed tokens all raise ``AuthError``.
    """
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthError("Token has expired") from exc
    except jwt.PyJWTError as exc:
        raise AuthError("Invalid token") from exc

    subject = payload["sub"]
    if not isinstance(subject, str) or not subject.isascii() or not subject.isdigit():
        raise AuthError("Invalid token subject")
    return int(subject)
