import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from catalog_api.core.errors import ApiError, ErrorKind, StoreError
from catalog_api.database import DocumentCollection, get_products
from catalog_api.models.fields import missing_fields
from catalog_api.models.product import PRODUCT_FIELDS, build_product_document, product_changes

router = APIRouter(tags=['productos'])

logger = logging.getLogger(__name__)


class ProductRequest(BaseModel):
    nombre: str | None = None
    precio: float | None = None
    descripcion: str | None = None


def product_not_found() -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, 'Producto no encontrado')


@router.post('', status_code=status.HTTP_201_CREATED)
def create_product(data: ProductRequest, products: DocumentCollection = Depends(get_products)):
    values = data.model_dump()
    if missing_fields(values, PRODUCT_FIELDS):
        raise ApiError(ErrorKind.VALIDATION_ERROR, 'Faltan datos del producto')

    try:
        product = products.insert(build_product_document(values))
    except StoreError as exc:
        logger.exception('Creating product failed')
        raise ApiError(ErrorKind.STORE_ERROR, 'Error al agregar el producto') from exc

    return {'mensaje': 'Producto agregado exitosamente', 'producto': product}


@router.put('/{product_id}')
def update_product(
    product_id: str,
    data: ProductRequest,
    products: DocumentCollection = Depends(get_products),
):
    try:
        product = products.replace_by_id(product_id, product_changes(data.model_dump()))
    except StoreError as exc:
        logger.exception('Updating product %s failed', product_id)
        raise ApiError(ErrorKind.STORE_ERROR, 'Error al actualizar el producto') from exc

    if product is None:
        raise product_not_found()

    return {'mensaje': 'Producto actualizado', 'producto': product}


@router.get('')
def list_products(products: DocumentCollection = Depends(get_products)):
    try:
        productos = products.list_all()
    except StoreError as exc:
        logger.exception('Listing products failed')
        raise ApiError(ErrorKind.STORE_ERROR, 'Error al obtener los productos') from exc

    return {'mensaje': 'Productos obtenidos', 'productos': productos}


@router.delete('/{product_id}')
def delete_product(product_id: str, products: DocumentCollection = Depends(get_products)):
    try:
        product = products.delete_by_id(product_id)
    except StoreError as exc:
        logger.exception('Deleting product %s failed', product_id)
        raise ApiError(ErrorKind.STORE_ERROR, 'Error al eliminar el producto') from exc

    if product is None:
        raise product_not_found()

    return {'mensaje': 'Producto eliminado', 'producto': product}
