"""
Error taxonomy.

Every failure the service reports to a caller is one of these. The FastAPI
handlers in app.main render them as {"error": message} with the matching
status code.
"""


class AppError(Exception):
    """Base error carrying an HTTP-equivalent status code."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Missing or malformed input."""
    status_code = 400


class AuthenticationError(AppError):
    """Missing or invalid credential."""
    status_code = 401


class AuthorizationError(AppError):
    """Authenticated but not permitted."""
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Duplicate enrollment, invite code collision."""
    status_code = 400


class DependencyError(AppError):
    """Document store I/O failure."""
    status_code = 500
