import pytest

from catalog_api.auth import jwt_handler
from catalog_api.core.config import Settings
from catalog_api.core.errors import ApiError, ErrorKind
from catalog_api.routes.auth_routes import LoginRequest, login
from catalog_api.routes.user_routes import CreateUserRequest, create_user


@pytest.fixture
def stored_user(users, settings) -> dict:
    return create_user(
        data=CreateUserRequest(nombre='Ana', correo='ana@example.com', password='secret123', rol='admin'),
        users=users,
        settings=settings,
    )['usuario']


def test_login_returns_stored_user_and_token(users, settings, stored_user) -> None:
    response = login(data=LoginRequest(correo='ana@example.com', password='secret123'), users=users, settings=settings)

    assert response['mensaje'] == 'Inicio de sesión exitoso'
    assert response['usuario'] == stored_user

    claims = jwt_handler.decode_access_token(response['token'], settings)
    assert claims['sub'] == stored_user['_id']
    assert claims['rol'] == 'admin'


def test_login_rejects_wrong_password(users, settings, stored_user) -> None:
    with pytest.raises(ApiError) as exception_info:
        login(data=LoginRequest(correo='ana@example.com', password='wrong'), users=users, settings=settings)

    assert exception_info.value.status_code == 401
    assert exception_info.value.kind is ErrorKind.AUTH_FAILED
    assert exception_info.value.detail == 'Contraseña incorrecta'


def test_login_rejects_unknown_email(users, settings, stored_user) -> None:
    with pytest.raises(ApiError) as exception_info:
        login(data=LoginRequest(correo='otro@example.com', password='secret123'), users=users, settings=settings)

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'Usuario no encontrado'


def test_login_requires_email_and_password(users, settings) -> None:
    with pytest.raises(ApiError) as exception_info:
        login(data=LoginRequest(correo='ana@example.com'), users=users, settings=settings)

    assert exception_info.value.status_code == 400


def test_login_returns_500_when_store_fails(broken_users, settings) -> None:
    with pytest.raises(ApiError) as exception_info:
        login(data=LoginRequest(correo='ana@example.com', password='secret123'), users=broken_users, settings=settings)

    assert exception_info.value.status_code == 500
    assert exception_info.value.detail == 'Error en el servidor'


def test_login_hides_hash_when_exposure_disabled(users, settings, stored_user) -> None:
    response = login(
        data=LoginRequest(correo='ana@example.com', password='secret123'),
        users=users,
        settings=Settings(jwt_secret_key='test-secret', expose_password_hash=False),
    )

    assert 'password' not in response['usuario']
