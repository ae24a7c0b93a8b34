import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from catalog_api.auth import jwt_handler
from catalog_api.auth.dependencies import get_request_settings
from catalog_api.auth.security import verify_password
from catalog_api.core.config import Settings
from catalog_api.core.errors import ApiError, ErrorKind, StoreError
from catalog_api.database import DocumentCollection, get_users
from catalog_api.models.fields import missing_fields
from catalog_api.models.user import DEFAULT_ROLE, public_user

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


class LoginRequest(BaseModel):
    correo: str | None = None
    password: str | None = None


@router.post('/login')
def login(
    data: LoginRequest,
    users: DocumentCollection = Depends(get_users),
    settings: Settings = Depends(get_request_settings),
):
    if missing_fields(data.model_dump(), ('correo', 'password')):
        raise ApiError(ErrorKind.VALIDATION_ERROR, 'Faltan datos para iniciar sesión')

    try:
        usuario = users.find_one_by(correo=data.correo)
    except StoreError as exc:
        logger.exception('Login lookup failed')
        raise ApiError(ErrorKind.STORE_ERROR, 'Error en el servidor') from exc

    if usuario is None:
        raise ApiError(ErrorKind.AUTH_FAILED, 'Usuario no encontrado')

    if not verify_password(data.password, usuario.get('password')):
        raise ApiError(ErrorKind.AUTH_FAILED, 'Contraseña incorrecta')

    token = jwt_handler.create_access_token(
        subject=usuario['_id'],
        role=usuario.get('rol') or DEFAULT_ROLE,
        settings=settings,
    )
    return {
        'mensaje': 'Inicio de sesión exitoso',
        'usuario': public_user(usuario, settings.expose_password_hash),
        'token': token,
    }
