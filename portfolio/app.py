"""Portfolio site: static pages plus the contact form API"""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .endpoints import API_ROUTERS, STATIC_ROUTER
from .exceptions.api_exception import APIException
from .exceptions.contact import InvalidRequestBodyError
from .logger import get_logger
from .services.mail import MailService
from .settings import settings


logger = get_logger(__name__)

SECURITY_HEADERS = {
    "Content-Security-Policy": "; ".join(
        [
            "default-src 'self'",
            "script-src 'self'",
            "style-src 'self' 'unsafe-inline'",
            "img-src 'self' data:",
            "connect-src 'self'",
            "font-src 'self' data:",
        ]
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


if settings.sentry_dsn:
    logger.debug("initializing sentry")
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        attach_stacktrace=True,
        release=f"portfolio@{__version__}",
        environment=settings.sentry_environment,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(f"Starting portfolio v{__version__}, serving {settings.static_dir}")
    await app.state.mail.startup()
    yield


app = FastAPI(
    title="Portfolio",
    description=__doc__,
    version=__version__,
    root_path=settings.root_path,
    openapi_tags=[{"name": name, "description": doc} for name, (_, doc) in API_ROUTERS.items()],
    lifespan=lifespan,
)
app.state.mail = MailService(settings)

for router, _ in API_ROUTERS.values():
    app.include_router(router, prefix="/api")
app.include_router(STATIC_ROUTER)


@app.middleware("http")
async def security_headers(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    response = await call_next(request)
    response.headers.update(SECURITY_HEADERS)
    return response


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException) -> Response:
    return JSONResponse(exc.content, exc.status_code, exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    logger.debug(f"Invalid request body for {request.url.path}: {exc.errors()}")
    return await api_exception_handler(request, InvalidRequestBodyError())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    return JSONResponse({"ok": False, "message": exc.detail}, exc.status_code, exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        {"ok": False, "message": "Internal server error."},
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers=SECURITY_HEADERS,
    )
