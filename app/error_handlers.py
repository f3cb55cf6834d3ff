from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from domain.errors import CVServiceError, ExtractionFailed, InvalidRequest

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def attach_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CVServiceError)
    async def _service_error(request: Request, exc: CVServiceError):
        if isinstance(exc, InvalidRequest):
            logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        elif isinstance(exc, ExtractionFailed):
            logger.error("Extraction failed for %s: %s", exc.filename, exc.__cause__ or exc.message)
        else:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message,
                         exc_info=exc.__cause__)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        )
        return _error(400, f"Invalid request: {problems}")

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled: %s", exc)
        return _error(500, "Internal Server Error")
