# promptshare/core/errors.py


class AppError(Exception):
    """Base class for errors the API reports to the caller."""

    default_message = "Application error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    default_message = "Not Found"


class ForbiddenError(AppError):
    default_message = "Forbidden"


class BadRequestError(AppError):
    default_message = "Bad Request"


class ConflictError(AppError):
    default_message = "Conflict"
