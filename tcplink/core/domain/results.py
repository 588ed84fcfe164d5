"""
Result values returned by client boundary operations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..exceptions import ErrorCode


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a client operation.

    A result is truthy iff the operation succeeded, so callers that only care
    about success can write ``if client.connect(): ...``.
    """

    success: bool
    """Whether the operation succeeded."""

    error: Optional[ErrorCode] = None
    """Error code when the operation failed."""

    message: str = ""
    """Human readable diagnostic."""

    details: Dict[str, Any] = field(default_factory=dict)
    """Additional structured context (attempt counts, byte counts...)."""

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("Successful result cannot carry an error code")
        if not self.success and self.error is None:
            raise ValueError("Failed result requires an error code")

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, message: str = "", **details: Any) -> 'OperationResult':
        """Create a successful result."""
        return cls(success=True, message=message, details=details)

    @classmethod
    def fail(cls, error: ErrorCode, message: str, **details: Any) -> 'OperationResult':
        """Create a failed result."""
        return cls(success=False, error=error, message=message, details=details)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        return {
            'success': self.success,
            'error': self.error.value if self.error else None,
            'message': self.message,
            'details': dict(self.details),
        }
