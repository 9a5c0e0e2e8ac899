"""
Dungeon Generator - Custom Error Types
Structured exceptions for generation failures with recovery hints.
"""
from typing import Dict, Any, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the generation pipeline."""
    # General errors
    UNKNOWN = "UNKNOWN"

    # Configuration errors
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"

    # Placement errors
    PLACEMENT_EXHAUSTED = "PLACEMENT_EXHAUSTED"

    # Grid errors
    GRID_OUT_OF_BOUNDS = "GRID_OUT_OF_BOUNDS"
    GRID_FROZEN = "GRID_FROZEN"


class DungeonGenError(Exception):
    """
    Base exception for all generation errors.

    Provides structured error information with:
    - Error code for programmatic handling
    - Human-readable message
    - Additional context details
    - Recovery hints for the caller
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.UNKNOWN,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON output."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
                "recoverable": self.recoverable,
                "recovery_hint": self.recovery_hint
            }
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# =============================================================================
# Configuration Errors
# =============================================================================

class InvalidConfigurationError(DungeonGenError):
    """Raised when generation options are rejected before generation starts."""

    def __init__(self, field: str, message: str, value: Any = None):
        details = {"field": field}
        if value is not None:
            details["value"] = str(value)
        super().__init__(
            code=ErrorCode.INVALID_CONFIGURATION,
            message=message,
            details=details,
            recovery_hint=f"Check the value for '{field}'"
        )
        self.field = field


# =============================================================================
# Placement Errors
# =============================================================================

class PlacementExhaustedError(DungeonGenError):
    """
    Raised when the carver or stair placer runs out of attempts.

    The details carry the diagnostic counts of the failed phase
    (attempts made, floor cells available, items placed so far).
    """

    def __init__(self, phase: str, message: str, **diagnostics: Any):
        details: Dict[str, Any] = {"phase": phase}
        details.update(diagnostics)
        super().__init__(
            code=ErrorCode.PLACEMENT_EXHAUSTED,
            message=message,
            details=details,
            recovery_hint="Retry with a different seed, a larger size or fewer stairs"
        )
        self.phase = phase


# =============================================================================
# Grid Errors
# =============================================================================

class OutOfBoundsError(DungeonGenError, IndexError):
    """Raised on any grid access outside [0, width) x [0, height)."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            code=ErrorCode.GRID_OUT_OF_BOUNDS,
            message=f"Cell ({x}, {y}) is outside the {width}x{height} grid",
            details={"x": x, "y": y, "width": width, "height": height},
            recoverable=False,
        )


class GridFrozenError(DungeonGenError):
    """Raised when a finished grid is written to."""

    def __init__(self, x: int, y: int):
        super().__init__(
            code=ErrorCode.GRID_FROZEN,
            message=f"Grid is read-only, cannot write cell ({x}, {y})",
            details={"x": x, "y": y},
            recoverable=False,
            recovery_hint="Copy the grid before modifying it"
        )
