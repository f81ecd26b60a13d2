"""HTTP plumbing shared by the application and its API tests.

Requests are wrapped in the domain context their URL prefix belongs to, and
domain errors are turned into JSON bodies of the form
``{"error", "kind", "message", "details"}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from shared.exceptions import ShoppingError

logger = structlog.get_logger(__name__)

_STATUS_BY_KIND = {
    "not_found": 404,
    "validation": 400,
    "state_conflict": 409,
    "upstream": 502,
}


def route_to_domains(app: FastAPI, route_domain_map: dict) -> None:
    """Push the Protean domain owning each request's URL prefix."""

    def _resolve_domain(path: str):
        for prefix, domain in route_domain_map.items():
            if path.startswith(prefix):
                return domain
        return None

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match: pass through
        return await call_next(request)


def _error_response(request: Request, status_code: int, code: str, kind: str, message: str, details) -> JSONResponse:
    logger.info("request_failed", path=request.url.path, code=code, status_code=status_code)
    return JSONResponse(
        status_code=status_code,
        content={"error": code, "kind": kind, "message": message, "details": details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ShoppingError)
    async def shopping_error_handler(request: Request, exc: ShoppingError) -> JSONResponse:
        return _error_response(
            request, _STATUS_BY_KIND.get(exc.kind, 500), exc.code, exc.kind, exc.message, exc.messages
        )

    # Raised by Protean itself, e.g. a command field failing its own validation
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error_response(request, 400, "ValidationError", "validation", "Invalid input", exc.messages)

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return _error_response(request, 404, "ObjectNotFoundError", "not_found", "Not found", exc.messages)

    @app.exception_handler(InvalidOperationError)
    async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:
        return _error_response(request, 409, "InvalidOperationError", "state_conflict", "Invalid operation", exc.messages)
