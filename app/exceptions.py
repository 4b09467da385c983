"""
Domain error taxonomy shared by services and routes.

Services raise these; ``app.errors`` turns them into the JSON error envelope.
"""


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message="An unexpected error occurred", errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class ConflictError(AppError):
    status_code = 400
    code = "CONFLICT"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class AuthorizationError(AppError):
    status_code = 403
    code = "FORBIDDEN"


class AuthenticationError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"


class InternalError(AppError):
    status_code = 500
    code = "INTERNAL_ERROR"
