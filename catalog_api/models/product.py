"""Product document definitions."""

from typing import Any

from catalog_api.models.fields import provided_fields

PRODUCT_FIELDS = ('nombre', 'precio', 'descripcion')


def build_product_document(values: dict[str, Any]) -> dict[str, Any]:
    """Shape validated request values into the stored product document."""
    return {name: values[name] for name in PRODUCT_FIELDS}


def product_changes(values: dict[str, Any]) -> dict[str, Any]:
    return provided_fields(values, PRODUCT_FIELDS)
