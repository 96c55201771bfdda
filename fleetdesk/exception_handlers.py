"""
Exception handlers: render every error as a JSON body with a `message` field.

AppError subclasses carry their own status; schema failures become 400
"invalid data" with per-field errors; anything unexpected is logged and
becomes a 500 whose detail is only shown in dev.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fleetdesk.core.config import settings
from fleetdesk.core.errors import AppError

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds in front of the field path.
_LOCATION_ROOTS = ("body", "query", "path", "header")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Application error", extra={"path": request.url.path, "error_message": exc.message})
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOCATION_ROOTS]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "invalid value")})
    return JSONResponse(status_code=400, content={"message": "invalid data", "errors": errors})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path, "method": request.method})
    content = {"message": "internal server error"}
    if settings.APP_ENV == "dev":
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
