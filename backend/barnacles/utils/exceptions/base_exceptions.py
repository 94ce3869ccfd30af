"""
Business Exception Classes - Base Exception Definitions

Contains all business logic related exception types.
"""

from typing import Optional, Any


class BusinessException(Exception):
    """
    Business Logic Exception

    Used to handle exceptions in business logic. ``code`` doubles as the
    HTTP status of the error response.
    """

    def __init__(self, message: str, code: int = 400, data: Any = None):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(self.message)


class DatabaseException(Exception):
    """
    Database Exception

    Used to handle database operation related exceptions.
    """

    def __init__(self, message: str, code: int = 500, operation: Optional[str] = None):
        self.message = message
        self.code = code
        self.operation = operation
        super().__init__(self.message)


class NotFoundError(BusinessException):
    """
    Resource Not Found Exception

    Used when a requested resource is not found.
    """

    def __init__(self, message: str = "Resource not found", resource_type: Optional[str] = None, resource_id: Optional[Any] = None):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message=message, code=404)


class ScanError(BusinessException):
    """
    Scan Exception

    Raised when a path handed to the scanner is not a readable directory.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message=message, code=400, data={"path": path} if path else None)
