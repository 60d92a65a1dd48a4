"""
Domain errors for FireGuard.

Every failure the service reports to a caller is one of these kinds.
The API layer renders them as ``{"error": kind, "message": text}``.
"""


class FireGuardError(Exception):
    """FireGuard 도메인 오류의 기반 클래스"""

    kind = "FireGuardError"
    status_code = 500
    default_message = "Unexpected error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidStatus(FireGuardError):
    kind = "InvalidStatus"
    status_code = 400
    default_message = "Status must be either FIRE or SAFE."


class MissingLocation(FireGuardError):
    kind = "MissingLocation"
    status_code = 400
    default_message = "Latitude and longitude are required."


class Unauthenticated(FireGuardError):
    kind = "Unauthenticated"
    status_code = 401
    default_message = "Authentication required."


class Forbidden(FireGuardError):
    kind = "Forbidden"
    status_code = 403
    default_message = "You are not allowed to perform this action."


class NotFound(FireGuardError):
    kind = "NotFound"
    status_code = 404
    default_message = "Resource not found."


class AlreadyExists(FireGuardError):
    kind = "AlreadyExists"
    status_code = 400
    default_message = "Resource already exists."


class SelfDeleteForbidden(FireGuardError):
    kind = "SelfDeleteForbidden"
    status_code = 400
    default_message = "You cannot delete your own account."


class StorageFailure(FireGuardError):
    # 내부 원인은 로그에만 남기고 호출자에게는 일반 메시지만 전달
    kind = "StorageFailure"
    status_code = 500
    default_message = "Server error while accessing storage."


class InvalidInput(FireGuardError):
    kind = "ValidationError"
    status_code = 400
    default_message = "Invalid request data."
