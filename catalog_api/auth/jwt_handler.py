from datetime import datetime, timedelta, timezone

import jwt

from catalog_api.core.config import Settings


def create_access_token(subject: str, role: str, settings: Settings, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes or settings.jwt_expires_minutes
    now = datetime.now(timezone.utc)
    payload = {"sub": subject, "rol": role, "iat": now, "exp": now + timedelta(minutes=expire_minutes)}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict:
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
