"""Exception handlers — render every failure as ``{"message": ...}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from passphrase_auth.exceptions import PassphraseAuthError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> FastAPI:

    @app.exception_handler(PassphraseAuthError)
    async def passphrase_auth_error_handler(request: Request, exc: PassphraseAuthError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": str(exc)})

    return app
