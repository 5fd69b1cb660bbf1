# File: common/exceptions/base_exception.py

from fastapi import HTTPException, status


class AppHTTPException(HTTPException):
    error_code: str = "APP_ERROR"

    def __init__(self, status_code: int, detail: str, error_code: str = None):
        super().__init__(status_code=status_code, detail=detail)
        if error_code:
            self.error_code = error_code

# Specific custom exceptions using AppHTTPException
class BadRequestException(AppHTTPException):
    error_code = "BAD_REQUEST"

    def __init__(self, detail: str = "Invalid request parameters."):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)

class InvalidIdentifierException(BadRequestException):
    error_code = "INVALID_IDENTIFIER"

    def __init__(self, detail: str = "Invalid identifier."):
        super().__init__(detail)

class InvalidPaginationException(BadRequestException):
    error_code = "INVALID_PAGINATION"

    def __init__(self, detail: str = "Page and limit must be positive integers."):
        super().__init__(detail)

class InvalidSortException(BadRequestException):
    error_code = "INVALID_SORT"

    def __init__(self, detail: str = "Unsupported sort parameters."):
        super().__init__(detail)

class ForbiddenException(AppHTTPException):
    error_code = "PERMISSION_DENIED"

    def __init__(self, detail: str = "You do not have permission to access this resource."):
        super().__init__(status.HTTP_403_FORBIDDEN, detail)

class NotFoundException(AppHTTPException):
    error_code = "NOT_FOUND"

    def __init__(self, detail: str = "Resource not found."):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)

class ConflictException(AppHTTPException):
    error_code = "CONFLICT"

    def __init__(self, detail: str = "Resource conflict detected."):
        super().__init__(status.HTTP_409_CONFLICT, detail)

class DuplicateEdgeException(ConflictException):
    error_code = "DUPLICATE_EDGE"

    def __init__(self, detail: str = "Relationship already exists."):
        super().__init__(detail)

class InternalServerErrorException(AppHTTPException):
    error_code = "INTERNAL_ERROR"

    def __init__(self, detail: str = "Internal server error occurred."):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail)

class AggregationFailureException(AppHTTPException):
    error_code = "AGGREGATION_FAILURE"

    def __init__(self, detail: str = "Failed to compute aggregation."):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail)

class MediaUploadException(AppHTTPException):
    error_code = "MEDIA_UPLOAD_FAILED"

    def __init__(self, detail: str = "Media upload failed."):
        super().__init__(status.HTTP_502_BAD_GATEWAY, detail)

class ServiceUnavailableException(AppHTTPException):
    error_code = "STORAGE_UNAVAILABLE"

    def __init__(self, detail: str = "Service temporarily unavailable. Please try again later."):
        super().__init__(status.HTTP_503_SERVICE_UNAVAILABLE, detail)

class OperationCancelledException(AppHTTPException):
    error_code = "CANCELLED"

    def __init__(self, detail: str = "Operation cancelled before completion."):
        super().__init__(status.HTTP_504_GATEWAY_TIMEOUT, detail)

# Optional: Group all custom exceptions for future use or auto-registration
CUSTOM_HTTP_EXCEPTIONS = [
    BadRequestException,
    InvalidIdentifierException,
    InvalidPaginationException,
    InvalidSortException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    DuplicateEdgeException,
    InternalServerErrorException,
    AggregationFailureException,
    MediaUploadException,
    ServiceUnavailableException,
    OperationCancelledException,
]
