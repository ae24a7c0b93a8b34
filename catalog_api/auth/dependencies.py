import logging

import jwt
from fastapi import Header, Request

from catalog_api.auth import jwt_handler
from catalog_api.core.config import Settings, get_settings
from catalog_api.core.errors import ApiError, ErrorKind

logger = logging.getLogger(__name__)


def get_request_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def _extract_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() == "bearer":
        return credentials.strip() or None
    return authorization.strip()


def verify_token(request: Request, authorization: str | None = Header(default=None)) -> dict:
    """Protect a route with the token issued at login.

    Attach with ``dependencies=[Depends(verify_token)]``; the decoded claims are
    left on ``request.state.usuario``. No router registers it yet.
    """
    token = _extract_token(authorization)
    if token is None:
        raise ApiError(ErrorKind.UNAUTHENTICATED, "Acceso denegado")

    try:
        claims = jwt_handler.decode_access_token(token, get_request_settings(request))
    except jwt.PyJWTError as exc:
        logger.debug("Rejected token: %s", exc)
        raise ApiError(ErrorKind.INVALID_TOKEN, "Token inválido") from exc

    request.state.usuario = claims
    return claims
