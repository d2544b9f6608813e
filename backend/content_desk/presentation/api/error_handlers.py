"""Exception handlers rendering failures as ``{code, name, description}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from content_desk.application.schemas import ErrorResponse
from content_desk.domain.exceptions import DomainError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[str, int] = {
    "InvalidInput": 400,
    "Forbidden": 403,
    "NotFound": 404,
    "Conflict": 409,
    "Dependency": 422,
}


def _render(code: int, name: str, description: str) -> JSONResponse:
    body = ErrorResponse(code=code, name=name, description=description)
    return JSONResponse(status_code=code, content=body.model_dump())


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = STATUS_BY_KIND.get(exc.kind, 500)
    if code >= 500:
        logger.error("Unmapped domain error on %s %s: %s", request.method, request.url.path, exc)
    return _render(code, exc.name, exc.description)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request shapes are InvalidInput like any other field error."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ())]
    name = loc[1] if len(loc) > 1 else (loc[0] if loc else "request")
    description = first.get("msg", "Invalid request")
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, errors)
    return _render(400, name, description)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _render(
        500,
        "internal-error",
        "An internal error occurred; report it if it persists",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
