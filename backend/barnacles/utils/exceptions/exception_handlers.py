"""
Global Exception Handlers

Render every API error through the unified BaseResponse envelope.
"""

import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError, HTTPException
from starlette.exceptions import HTTPException as StarletteHTTPException

from barnacles.config import ServerConfig
from barnacles.utils.model.response_model import BaseResponse
from barnacles.utils.model.response_code import ResponseCode
from barnacles.utils.exceptions.base_exceptions import BusinessException, DatabaseException

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request parameter validation errors

    Args:
        request: Request object
        exc: Validation exception

    Returns:
        Unified format error response
    """
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    messages = []
    details = []
    for error in exc.errors():
        ctx = error.get("ctx")
        if isinstance(ctx, dict) and "error" in ctx:
            messages.append(str(ctx["error"]))
        else:
            messages.append(error["msg"])

        detail = {
            "loc": list(error["loc"]),
            "msg": error["msg"],
            "type": error["type"],
        }
        if "input" in error:
            detail["input"] = str(error["input"])
        details.append(detail)

    response = BaseResponse.validation_error(
        data={"details": details},
        message="; ".join(messages)
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=response.model_dump()
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTP exceptions

    Args:
        request: Request object
        exc: HTTP exception

    Returns:
        Unified format error response
    """
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    if exc.status_code == status.HTTP_404_NOT_FOUND:
        response = BaseResponse.not_found(message=exc.detail)
    elif exc.status_code == status.HTTP_400_BAD_REQUEST:
        response = BaseResponse.bad_request(message=exc.detail)
    else:
        response = BaseResponse.error(
            message=exc.detail,
            code=exc.status_code
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=response.model_dump()
    )


async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle Starlette HTTP exceptions, e.g. unknown routes"""
    return await http_exception_handler(request, HTTPException(status_code=exc.status_code, detail=exc.detail))


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """
    Handle business logic exceptions

    The exception code is used both as the envelope code and the HTTP
    status, so NotFoundError becomes a 404.

    Args:
        request: Request object
        exc: Business exception

    Returns:
        Unified format error response
    """
    logger.warning(f"Business error on {request.url}: {exc.message}")

    http_status = exc.code if 400 <= exc.code < 600 else status.HTTP_400_BAD_REQUEST
    response = BaseResponse.error(
        message=exc.message,
        data=exc.data,
        code=exc.code
    )

    return JSONResponse(
        status_code=http_status,
        content=response.model_dump()
    )


async def database_exception_handler(request: Request, exc: DatabaseException) -> JSONResponse:
    """Handle database exceptions"""
    logger.error(f"Database error on {request.url} ({exc.operation}): {exc.message}")

    response = BaseResponse.error(
        message=exc.message,
        data={"operation": exc.operation} if exc.operation else None,
        code=ResponseCode.INTERNAL_SERVER_ERROR
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump()
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all uncaught exceptions

    Args:
        request: Request object
        exc: Exception

    Returns:
        Unified format error response
    """
    logger.error(f"Unhandled exception on {request.url}: {exc}", exc_info=True)

    if ServerConfig.DEBUG:
        message = f"Internal server error: {str(exc)}"
        data = {
            "error_type": type(exc).__name__,
            "error_message": str(exc)
        }
    else:
        message = "Internal server error, please try again later"
        data = None

    response = BaseResponse.error(
        message=message,
        data=data,
        code=ResponseCode.INTERNAL_SERVER_ERROR
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump()
    )


def register_exception_handlers(app):
    """
    Register all exception handlers

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_exception_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(DatabaseException, database_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")
