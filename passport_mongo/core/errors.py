"""
Exceptions raised by the driver itself.

Backing-store failures (pymongo errors) are never wrapped; they reach the
caller unchanged.
"""


class DriverError(Exception):
    """Base class for driver errors."""


class InitializationError(DriverError, RuntimeError):
    """The driver failed to resolve its collections and will never be ready."""


class UserNotFoundError(DriverError, LookupError):
    """A mutating operation targeted a user id that does not exist."""

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class ImmutableFieldError(DriverError, ValueError):
    """An update tried to change a field that is fixed once assigned."""

    def __init__(self, field: str):
        super().__init__(f"Field '{field}' cannot be changed once assigned")
        self.field = field
