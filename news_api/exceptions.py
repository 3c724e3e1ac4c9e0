"""
Application error taxonomy.

Every failure that reaches the HTTP boundary is one of the four classes
below.  Each carries a client-safe ``message`` and the HTTP status it maps
to; the exception handlers in ``news_api.error_handlers`` render them as
``{"msg": message}``.
"""


class ApiError(Exception):
    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    """Malformed, missing or out-of-range input."""

    status_code = 400
    default_message = "Bad Request"


class NotFoundError(ApiError):
    """A referenced entity is absent, or pagination overshot the last page."""

    status_code = 404
    default_message = "Sorry, that is not found"


class ConflictError(ApiError):
    """Unique constraint violated on create."""

    status_code = 409
    default_message = "Sorry, that already exists"


class InternalError(ApiError):
    status_code = 500
    default_message = "Internal Server Error"
