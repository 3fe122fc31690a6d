import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Erro interno do servidor"
SEARCH_ERROR = "Erro na consulta ao banco de dados"
FILTERS_ERROR = "Erro ao carregar filtros"
TIMEOUT_ERROR = "O banco de dados demorou para responder"
RATE_LIMITED = "Muitas solicitações. Tente novamente em um minuto."
INVALID_REQUEST = "Requisição inválida"

HTTP_MESSAGES = {
    404: "Endpoint não encontrado",
    405: "Method not allowed",
}


class DirectoryError(Exception):
    status_code = 500
    message = INTERNAL_ERROR

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRequest(DirectoryError):
    status_code = 400
    message = INVALID_REQUEST


class DatastoreError(DirectoryError):
    message = SEARCH_ERROR


class DatastoreTimeout(DatastoreError):
    status_code = 504
    message = TIMEOUT_ERROR


def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def directory_error_handler(request: Request, exc: DirectoryError):
    if exc.status_code < 500:
        return _error(exc.status_code, exc.message)
    # full detail (and the chained driver error) stays server-side
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return _error(exc.status_code, exc.message)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.info("rate limit hit on %s (%s)", request.url.path, exc.detail)
    return _error(429, RATE_LIMITED)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return _error(400, INVALID_REQUEST)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = HTTP_MESSAGES.get(exc.status_code, str(exc.detail))
    return _error(exc.status_code, message, headers=getattr(exc, "headers", None))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(500, INTERNAL_ERROR)


async def catch_unhandled_errors(request: Request, call_next):
    # runs inside the CORS layer, so even these 500s carry CORS headers
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_error_handler(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DirectoryError, directory_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
