import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api import database
from catalog_api.core.config import get_settings
from catalog_api.core.errors import ApiError, ErrorKind, StoreError
from catalog_api.routes import auth_routes, product_routes, user_routes

settings = get_settings()

app = FastAPI()
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allow_origins),
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def connect_database() -> None:
    database.connect(app.state.settings)


@app.on_event('shutdown')
def close_database() -> None:
    database.close()


@app.exception_handler(ApiError)
async def handle_api_error(_request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ApiError(ErrorKind.VALIDATION_ERROR, 'Datos de la solicitud inválidos')
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


@app.exception_handler(StoreError)
async def handle_store_error(_request: Request, exc: StoreError) -> JSONResponse:
    logger.error('Unhandled store failure: %s', exc)
    error = ApiError(ErrorKind.STORE_ERROR, 'Error en el servidor')
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'mensaje': exc.detail}, headers=exc.headers)


@app.get('/')
def root():
    return {'mensaje': 'API en ejecución'}


app.include_router(product_routes.router, prefix='/productos')
app.include_router(user_routes.router, prefix='/usuarios')
app.include_router(auth_routes.router)
