"""
Result values for operations that recover from their own failures.

Storage reads and writes never raise across the engine boundary. They
return a Result instead, so callers can still tell what went wrong.

Usage:
    outcome = save_manager.persist(record)
    if not outcome.ok:
        logger.warning(outcome.reason)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a recoverable operation.

    Attributes:
        ok: Whether the operation succeeded
        value: Payload on success (may be None for side-effect-only calls)
        reason: Human readable failure reason
    """
    ok: bool
    value: Optional[T] = None
    reason: str = ""

    @classmethod
    def success(cls, value: Optional[T] = None) -> Result[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str) -> Result[T]:
        return cls(ok=False, reason=reason)

    def value_or(self, default: T) -> T:
        """Return the payload, or default when the operation failed."""
        if self.ok and self.value is not None:
            return self.value
        return default
