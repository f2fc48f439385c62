"""
Global exception handlers.

- RequestValidationError -> 400, listing every failed rule
- psycopg2.Error (driver, constraint, pool exhaustion) -> 500 with the driver message

Not-found outcomes are raised by the routes as HTTPException(404) and rendered
by FastAPI's default handler.
"""
import logging
from typing import Any, Dict, List

import psycopg2
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def _field_name(loc) -> str:
    # ("body", "CUST_NAME") -> "CUST_NAME"; ("path", "id") -> "id"
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in ("body", "path", "query"):
        parts = parts[1:]
    return ".".join(parts)


# PUBLIC_INTERFACE
def validation_details(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into {field, message, type, location} entries."""
    return [
        {
            "field": _field_name(err.get("loc", ())),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
            "location": str(err["loc"][0]) if err.get("loc") else "",
        }
        for err in exc.errors()
    ]


def _database_message(exc: psycopg2.Error) -> str:
    message = (getattr(exc, "pgerror", None) or str(exc)).strip()
    return message or type(exc).__name__


# PUBLIC_INTERFACE
def register_error_handlers(app: FastAPI) -> None:
    """Attach the validation and database error handlers to the app."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = validation_details(exc)
        logger.warning("Validation failed on %s %s: %s", request.method, request.url.path, details)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": details})

    @app.exception_handler(psycopg2.Error)
    async def database_error_handler(request: Request, exc: psycopg2.Error) -> JSONResponse:
        message = _database_message(exc)
        logger.error("Database error on %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": message})
