"""
Utilities Module

Common utilities, exceptions, and response models.
"""

from .exceptions import (
    BusinessException,
    DatabaseException,
    NotFoundError,
    ScanError,
    register_exception_handlers,
)
from .model import (
    ResponseCode,
    BaseResponse,
    ListResponse,
)

__all__ = [
    # Exceptions
    "BusinessException",
    "DatabaseException",
    "NotFoundError",
    "ScanError",
    "register_exception_handlers",
    # Response models
    "ResponseCode",
    "BaseResponse",
    "ListResponse",
]
