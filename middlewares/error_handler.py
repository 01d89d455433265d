import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.gradebook.errors import DataFetchError, InvalidWeightConfiguration, RecordNotFound

logger = logging.getLogger(__name__)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message), latency_ms=0)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def add_error_handlers(app: FastAPI):
    @app.exception_handler(InvalidWeightConfiguration)
    async def invalid_weights_handler(request: Request, exc: InvalidWeightConfiguration):
        logger.info(f"{request.url.path}: {exc}")
        return _error(422, exc.code, str(exc))

    @app.exception_handler(RecordNotFound)
    async def not_found_handler(request: Request, exc: RecordNotFound):
        return _error(404, exc.code, str(exc))

    @app.exception_handler(DataFetchError)
    async def data_fetch_handler(request: Request, exc: DataFetchError):
        # already logged with traceback at the store boundary
        return _error(503, exc.code, str(exc))

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return _error(422, "INVALID_ARGUMENT", str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"unhandled error on {request.method} {request.url.path}")
        return _error(500, "INTERNAL_ERROR", str(exc))
