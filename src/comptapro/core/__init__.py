"""Core utilities and shared functionality."""

from comptapro.core.timezone import (
    local_tz,
    now_local,
    today_local,
)
from comptapro.core.money import ZERO, round_money, to_decimal
from comptapro.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    AuthenticationError,
    PermissionDeniedError,
    UnbalancedEntryError,
    ClosedExerciseError,
    OverlappingExerciseError,
    DuplicateAccountError,
    AccountInUseError,
    InsufficientStockError,
)

__all__ = [
    "local_tz",
    "now_local",
    "today_local",
    "ZERO",
    "round_money",
    "to_decimal",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "AuthenticationError",
    "PermissionDeniedError",
    "UnbalancedEntryError",
    "ClosedExerciseError",
    "OverlappingExerciseError",
    "DuplicateAccountError",
    "AccountInUseError",
    "InsufficientStockError",
]
