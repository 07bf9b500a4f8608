"""
Error taxonomy shared by all controllers.

Every error the client can see is an AppError rendered as {"message": ...}.
Anything else raised inside a controller is logged with its traceback and
turned into a generic 500 by safe_call.
"""

import inspect
import logging
from functools import wraps

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class Conflict(AppError):
    # Duplicate registrations answer 400, not 409
    status_code = 400
    default_message = "Resource already exists"


class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(AppError):
    status_code = 403
    default_message = "Forbidden: Access denied"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class UpstreamError(AppError):
    status_code = 500
    default_message = "Internal server error"


def safe_call(default_message="Internal server error"):
    """Turn unexpected handler failures into a logged 500.

    Plain `def` handlers stay plain so FastAPI keeps running them, and their
    blocking store calls, in its threadpool.
    """
    def decorator(func):
        def _fail(e):
            logger.exception("Error in %s: %s", func.__name__, e)
            return UpstreamError(default_message)

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except (AppError, StarletteHTTPException):
                    raise
                except Exception as e:
                    raise _fail(e) from e
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (AppError, StarletteHTTPException):
                raise
            except Exception as e:
                raise _fail(e) from e
        return wrapper
    return decorator


def _describe_validation_errors(errors) -> str:
    missing, invalid = [], []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        if error.get("type") == "missing":
            missing.append(field)
        else:
            invalid.append(field)
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    return "Invalid value for field(s): " + ", ".join(invalid)


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": _describe_validation_errors(exc.errors())})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
