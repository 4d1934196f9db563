import uuid
import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

log = logging.getLogger("uvicorn")


# Generate a clean request id for every response
def _rid():
    """Generates a unique request ID for tracing."""
    return uuid.uuid4().hex


# ----------- Exception Handlers (called by FastAPI) -----------

def http_exception_handler(request: Request, exc: HTTPException):
    """Handles exceptions raised by HTTPException (e.g., 404, 400)."""
    body = {
        "success": False,
        "error": {
            "code": "http_error",
            "message": exc.detail,
        },
        "request_id": _rid(),
    }
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handles request validation errors. Reported as 400 like every other bad input."""
    body = {
        "success": False,
        "error": {
            "code": "validation_error",
            "message": "Invalid input data",
            "details": jsonable_encoder(exc.errors()),
        },
        "request_id": _rid(),
    }
    return JSONResponse(status_code=400, content=body)


def generic_exception_handler(request: Request, exc: Exception):
    """Handles all unhandled exceptions (500 Internal Server Error)."""
    log.error(f"Unhandled exception on path: {request.url.path}", exc_info=exc)

    body = {
        "success": False,
        "error": {
            "code": "server_error",
            "message": "Internal Server Error",
        },
        "request_id": _rid(),
    }
    return JSONResponse(status_code=500, content=body)


# ----------- Registration Function -----------

def setup_exception_handlers(app: FastAPI):
    """Registers all custom exception handlers with the FastAPI application."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    return app
