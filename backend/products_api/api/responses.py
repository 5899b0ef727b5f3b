# backend/products_api/api/responses.py

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

INVALID_PAYLOAD = "Invalid payload"


class APIError(HTTPException):
    """An HTTPException rendered as ``{"error": message}``."""

    def __init__(self, status_code: int, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(status_code=status_code, detail=message, headers=headers)


def respond_with_json(status_code: int, payload: Any, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


def respond_with_error(status_code: int, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return respond_with_json(status_code, {"error": message}, headers=headers)


def respond_with_message(status_code: int, message: str) -> JSONResponse:
    return respond_with_json(status_code, {"message": message})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return respond_with_error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return respond_with_error(400, INVALID_PAYLOAD)


def register_exception_handlers(app: FastAPI) -> None:
    # dispatch 404/405 and every APIError end up in the same envelope
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
