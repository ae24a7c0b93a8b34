"""User document definitions."""

from typing import Any

from catalog_api.auth.security import hash_password
from catalog_api.models.fields import provided_fields

ADMIN_ROLE = 'admin'
DEFAULT_ROLE = 'Usuario'
ROLES = (ADMIN_ROLE, DEFAULT_ROLE)

USER_REQUIRED_FIELDS = ('nombre', 'correo', 'password')
USER_UPDATABLE_FIELDS = ('nombre', 'correo')


def normalize_role(role: Any) -> str:
    # Unknown or absent roles fall back to the non-privileged one.
    return role if role in ROLES else DEFAULT_ROLE


def build_user_document(values: dict[str, Any]) -> dict[str, Any]:
    """Represents an application user; only the password hash is ever stored."""
    return {
        'nombre': values['nombre'],
        'correo': values['correo'],
        'password': hash_password(values['password']),
        'rol': normalize_role(values.get('rol')),
    }


def user_changes(values: dict[str, Any]) -> dict[str, Any]:
    return provided_fields(values, USER_UPDATABLE_FIELDS)


def public_user(document: dict[str, Any], expose_password_hash: bool) -> dict[str, Any]:
    if expose_password_hash:
        return dict(document)
    visible = dict(document)
    visible.pop('password', None)
    return visible
