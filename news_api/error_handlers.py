"""
FastAPI exception handlers.

Every error response has the body ``{"msg": "..."}``.  Application errors
carry their own status; request validation failures are client errors and
always become 400; storage failures that escape a service are classified
here the same way ``db_error_handler`` classifies them.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from news_api.error_classifier import classify_db_error
from news_api.exceptions import ApiError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def _error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.info("%s for %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Request validation failed for %s %s: %s", request.method, request.url.path, exc.errors())
    return _error_response(ValidationError())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        content = {"msg": "Sorry, that is not found"}
    else:
        content = {"msg": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def storage_error_handler(request: Request, exc: DBAPIError) -> JSONResponse:
    return _error_response(classify_db_error(exc))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return _error_response(InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(DBAPIError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
