"""
Core primitives - readiness gate and error taxonomy.
"""
from passport_mongo.core.errors import (
    DriverError,
    ImmutableFieldError,
    InitializationError,
    UserNotFoundError,
)
from passport_mongo.core.readiness import GateState, ReadinessGate

__all__ = [
    "DriverError",
    "ImmutableFieldError",
    "InitializationError",
    "UserNotFoundError",
    "GateState",
    "ReadinessGate",
]
