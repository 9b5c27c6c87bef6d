"""Tradução de exceções de agenda para respostas HTTP.

Corpo padrão: `{"error_code": "...", "message": "..."}`.

- validação / dia inválido / serviço desativado -> 422
- não encontrado -> 404
- conflito (slot ocupado, transição inválida) -> 409
- infraestrutura (storage, lock, Redis) -> 503
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.routes.scheduling.schemas import ErrorResponse
from utils.errors import (
    ConflictError,
    InfrastructureError,
    InvalidDayError,
    NotFoundError,
    SchedulingError,
    ServiceDisabledError,
    ValidationError,
)

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

HTTP_422_UNPROCESSABLE = 422

_STATUS_BY_ERROR: tuple[tuple[type[SchedulingError], int], ...] = (
    (ValidationError, HTTP_422_UNPROCESSABLE),
    (InvalidDayError, HTTP_422_UNPROCESSABLE),
    (ServiceDisabledError, HTTP_422_UNPROCESSABLE),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def status_for(exc: SchedulingError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _error_response(status_code: int, error_code: str, message: str, **extra: object) -> JSONResponse:
    body = ErrorResponse(error_code=error_code, message=message).model_dump()
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


async def _handle_scheduling_error(request: Request, exc: SchedulingError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "request_rejected",
        extra={"path": request.url.path, "error_code": exc.code, "status_code": status_code},
    )
    return _error_response(status_code, exc.code, exc.message)


async def _handle_infrastructure_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "infrastructure_unavailable",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "INFRASTRUCTURE_UNAVAILABLE",
        "Serviço temporariamente indisponível",
    )


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return _error_response(
        HTTP_422_UNPROCESSABLE,
        ValidationError.code,
        "Requisição inválida",
        details=details,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SchedulingError, _handle_scheduling_error)
    app.add_exception_handler(InfrastructureError, _handle_infrastructure_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
