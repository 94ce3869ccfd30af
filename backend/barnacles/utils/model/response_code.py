"""
Response Status Codes

Defines standard response status codes for the API.
"""


class ResponseCode:
    """Standard response status codes"""

    # Success codes (2xx)
    SUCCESS = 200

    # Client error codes (4xx)
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422

    # Server error codes (5xx)
    INTERNAL_SERVER_ERROR = 500

    # Custom business codes (1xxx)
    BUSINESS_ERROR = 1000
    VALIDATION_ERROR = 1001

    @classmethod
    def get_message(cls, code: int) -> str:
        """Get default message for status code"""
        messages = {
            cls.SUCCESS: "Success",

            cls.BAD_REQUEST: "Bad request",
            cls.NOT_FOUND: "Resource not found",
            cls.CONFLICT: "Resource conflict",
            cls.UNPROCESSABLE_ENTITY: "Validation failed",

            cls.INTERNAL_SERVER_ERROR: "Internal server error",

            cls.BUSINESS_ERROR: "Business logic error",
            cls.VALIDATION_ERROR: "Validation error",
        }
        return messages.get(code, "Unknown error")
