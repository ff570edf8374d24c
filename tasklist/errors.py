"""Error taxonomy shared by the services and the HTTP layer.

Every error carries a user-safe message; the exception handler in
``tasklist.main`` renders it as ``{"error": message}`` with ``status_code``.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request body"


class Forbidden(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = 404
    default_message = "Task not found"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"
