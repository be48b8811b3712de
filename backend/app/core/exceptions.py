"""Custom exception classes for the application."""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
        )


class InvalidScenarioError(ValidationError):
    """A prediction scenario parameter is out of range (never clamped)."""

    def __init__(self, field: str, detail: str):
        self.field = field
        super().__init__(detail=detail)


class UpstreamFetchError(HTTPException):
    """The transaction store could not be read.

    The detail is generic; the underlying error is logged where
    it is caught.
    """

    def __init__(self, detail: str = "Could not retrieve financial data"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
        )
