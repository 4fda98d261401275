"""
Domain exceptions and their FastAPI handlers
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger


class NewsAggregatorError(Exception):
    """Base class for all aggregator errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(NewsAggregatorError):
    """Sources configuration is missing, unreadable or invalid."""


class ItemParseError(NewsAggregatorError):
    """A single listing element could not be turned into a news item."""


class SourceFetchError(NewsAggregatorError):
    """A whole source could not be fetched."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source


class AggregateHardFailure(NewsAggregatorError):
    """Every source failed and there is no cached result to fall back to."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class ServiceUnavailableError(NewsAggregatorError):
    """The news service has not been initialized yet."""


class ValidationError(NewsAggregatorError):
    """Invalid request parameter."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def _error_body(error: str, message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": error, "message": message}
    body.update(extra)
    return body


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Invalid request parameter {exc.field or ''} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("invalid_parameter", exc.message),
    )


async def hard_failure_handler(request: Request, exc: AggregateHardFailure) -> JSONResponse:
    logger.error(f"Aggregation failed on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body("aggregation_failed", exc.message, errors=exc.errors),
    )


async def service_unavailable_handler(request: Request, exc: ServiceUnavailableError) -> JSONResponse:
    logger.warning(f"Service unavailable on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body("service_unavailable", exc.message),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("server_error", str(exc)),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers translating domain errors into JSON responses."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(AggregateHardFailure, hard_failure_handler)
    app.add_exception_handler(ServiceUnavailableError, service_unavailable_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
