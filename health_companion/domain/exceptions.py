from __future__ import annotations


class CallerInputError(Exception):
    """Raised when a required request field is missing or empty."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAuthenticatedError(Exception):
    """Raised when a protected route is called without a known session token."""

    def __init__(self, message: str = "未登录或登录已过期"):
        super().__init__(message)
        self.message = message
