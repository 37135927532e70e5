"""Error types raised by the User API.

Every error that can reach a client carries its HTTP status code and a
human readable message. The handlers in ``user_api.middleware`` turn them
into ``{"message": ...}`` responses.
"""


class UserApiError(Exception):
    """Base exception for the User API."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UserNotFoundError(UserApiError):
    """Raised when no user document exists for the requested ID."""

    def __init__(self, user_id: str) -> None:
        super().__init__("User not found", status_code=404)
        self.user_id = user_id


class StoreConnectionError(UserApiError):
    """Raised when the document store cannot be reached at startup."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Database connection error: {reason}", status_code=503)
        self.reason = reason
