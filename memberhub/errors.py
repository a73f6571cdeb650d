from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class ServiceError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

class NotFoundError(ServiceError):
    status_code = 404

class ForbiddenError(ServiceError):
    status_code = 403

class ConflictError(ServiceError):
    status_code = 409

class PartialInviteFailure(ServiceError):
    """Some invitees of a batch were already invited or members.

    Memberships created for the other invitees of the same batch are kept.
    """

    status_code = 400

    def __init__(self, errors: list[dict[str, str]]):
        super().__init__("some users are already members or invited")
        self.errors = errors

async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    body: dict = {"detail": exc.detail}
    if isinstance(exc, PartialInviteFailure):
        body["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=body)

async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "internal server error"})

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
