from __future__ import annotations


class AppError(Exception):
    """Base application error.

    ``code`` is the machine-readable name sent in WebSocket error frames,
    ``status_code`` the HTTP status used by the API exception handler.
    """

    code = "app_error"
    status_code = 400

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    code = "not_found"
    status_code = 404


class ForbiddenError(AppError):
    code = "forbidden"
    status_code = 403


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422
