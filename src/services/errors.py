"""Service-level exceptions mapped to HTTP responses by the app's error handler."""

from fastapi import status


class AppError(Exception):
    """Base exception for failures raised by the service layer.

    ``status_code`` defaults per subclass; a caller may override it when one
    route reports the same failure with a different status.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal Server Error"

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        self.detail = detail or self.default_detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)


class NotFound(AppError):
    """An id or email did not resolve to a stored record."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InvalidCredential(AppError):
    """A password did not match the stored hash."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Incorrect password"


class Conflict(AppError):
    """A record with the same identifying value already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Duplicate record"


class Mismatch(AppError):
    """Two fields that must agree (e.g. password confirmation) do not."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Fields do not match"


class StoreFailure(AppError):
    """The database or the object store failed."""

    default_detail = "Internal Server Error"


class DeliveryFailed(AppError):
    """The transactional-email API rejected or did not accept a message."""

    default_detail = "Email not sent"
