import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from catalog_api.auth.dependencies import get_request_settings
from catalog_api.core.config import Settings
from catalog_api.core.errors import ApiError, ErrorKind, StoreError
from catalog_api.database import DocumentCollection, get_users
from catalog_api.models.fields import missing_fields
from catalog_api.models.user import (
    USER_REQUIRED_FIELDS,
    build_user_document,
    public_user,
    user_changes,
)

router = APIRouter(tags=['usuarios'])

logger = logging.getLogger(__name__)


class CreateUserRequest(BaseModel):
    nombre: str | None = None
    correo: str | None = None
    password: str | None = None
    rol: str | None = None


class UpdateUserRequest(BaseModel):
    nombre: str | None = None
    correo: str | None = None


def user_not_found() -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, 'Usuario no encontrado')


@router.get('')
def list_users(
    users: DocumentCollection = Depends(get_users),
    settings: Settings = Depends(get_request_settings),
):
    try:
        usuarios = users.list_all()
    except StoreError as exc:
        logger.exception('Listing users failed')
        raise ApiError(ErrorKind.STORE_ERROR, 'Error al obtener los usuarios') from exc

    return {
        'mensaje': 'Usuarios obtenidos',
        'usuarios': [public_user(usuario, settings.expose_password_hash) for usuario in usuarios],
    }


@router.post('', status_code=status.HTTP_201_CREATED)
def create_user(
    data: CreateUserRequest,
    users: DocumentCollection = Depends(get_users),
    settings: Settings = Depends(get_request_settings),
):
    values = data.model_dump()
    if missing_fields(values, USER_REQUIRED_FIELDS):
        raise ApiError(ErrorKind.VALIDATION_ERROR, 'Faltan datos para crear el usuario')

    try:
        usuario = users.insert(build_user_document(values))
    except StoreError as exc:
        logger.exception('Creating user failed')
        raise ApiError(ErrorKind.STORE_ERROR, 'Error al crear el usuario') from exc

    return {
        'mensaje': 'Usuario creado exitosamente',
        'usuario': public_user(usuario, settings.expose_password_hash),
    }


@router.put('/{user_id}')
def update_user(
    user_id: str,
    data: UpdateUserRequest,
    users: DocumentCollection = Depends(get_users),
    settings: Settings = Depends(get_request_settings),
):
    try:
        usuario = users.replace_by_id(user_id, user_changes(data.model_dump()))
    except StoreError as exc:
        logger.exception('Updating user %s failed', user_id)
        raise ApiError(ErrorKind.STORE_ERROR, 'Error al actualizar el usuario') from exc

    if usuario is None:
        raise user_not_found()

    return {
        'mensaje': 'Usuario actualizado',
        'usuario': public_user(usuario, settings.expose_password_hash),
    }


@router.delete('/{user_id}')
def delete_user(user_id: str, users: DocumentCollection = Depends(get_users)):
    try:
        usuario = users.delete_by_id(user_id)
    except StoreError as exc:
        logger.exception('Deleting user %s failed', user_id)
        raise ApiError(ErrorKind.STORE_ERROR, 'Error al eliminar el usuario') from exc

    if usuario is None:
        raise user_not_found()

    return {'mensaje': 'Usuario eliminado con éxito'}
