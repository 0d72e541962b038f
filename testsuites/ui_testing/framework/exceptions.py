"""
================================================================================
UI Framework Exceptions
================================================================================

Error taxonomy shared by page objects and scenarios.

    StackDemoError
    ├── WaitTimeoutError     wait condition never satisfied
    ├── InteractionError     action on an unready or absent element
    └── InvalidFixtureError  unrecognised symbolic value (user, brand, browser)

Probes (`is_displayed`, `read_text`) never raise; actions do.

================================================================================
"""

from __future__ import annotations

from typing import Optional


class StackDemoError(Exception):
    """Base class for all UI framework errors."""
    pass


class WaitTimeoutError(StackDemoError, TimeoutError):
    """Raised when a wait condition does not hold within its bound."""

    def __init__(self, target: str, timeout: float, condition: str = "visible"):
        self.target = target
        self.timeout = timeout
        self.condition = condition
        super().__init__(
            f"Timed out after {timeout:g}s waiting for '{target}' to be {condition}"
        )


class InteractionError(StackDemoError):
    """Raised when a click/type/navigation cannot be performed."""

    def __init__(self, action: str, target: str, reason: Optional[str] = None):
        self.action = action
        self.target = target
        message = f"Failed to {action} '{target}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidFixtureError(StackDemoError, ValueError):
    """Raised when a caller passes an unrecognised symbolic value."""

    def __init__(self, kind: str, value: object, allowed=()):
        self.kind = kind
        self.value = value
        message = f"Invalid {kind}: {value!r}"
        if allowed:
            message += f" (expected one of: {', '.join(allowed)})"
        super().__init__(message)


__all__ = [
    "StackDemoError",
    "WaitTimeoutError",
    "InteractionError",
    "InvalidFixtureError",
]
