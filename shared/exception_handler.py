import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from shared.core.exceptions import LeasingError
from shared.helpers.json_response_helper import failure_body
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(LeasingError)
    async def leasing_exception_handler(request: Request, exc: LeasingError):
        if exc.http_status >= 500:
            logger.error("Leasing operation failed on %s: %s",
                         request.url.path, exc.message)
        return JSONResponse(content=failure_body(exc.message, exc.status_code),
                            status_code=exc.http_status)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # error_response() already packs the envelope into detail
        if isinstance(exc.detail, dict) and "status_code" in exc.detail:
            return JSONResponse(content=exc.detail, status_code=exc.status_code)

        return JSONResponse(
            content=failure_body(str(exc.detail), AppStatusCode.OPERATION_FAILED),
            status_code=exc.status_code or 400)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            content=failure_body(str(exc), AppStatusCode.INVALID_INPUT),
            status_code=422)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s", request.url.path)
        return JSONResponse(
            content=failure_body("An unexpected error occurred"),
            status_code=500)
