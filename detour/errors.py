"""
Error types for the detour router.

None of these derive from ValueError: pydantic wraps ValueError raised inside
validators into a ValidationError, and geometry errors must reach the caller
unchanged.
"""
from typing import Optional


class DetourError(Exception):
    """Base class for all detour router errors."""


class InvalidGeometryInput(DetourError):
    """Malformed coordinate, distance or bearing given to the geometry layer."""


class InvalidLegIndex(DetourError):
    """Leg index outside the legs of the route being annotated."""

    def __init__(self, leg_index: int, leg_count: int):
        self.leg_index = leg_index
        self.leg_count = leg_count
        super().__init__(
            f"Leg index {leg_index} out of range for route with {leg_count} legs"
        )


class BackendError(DetourError):
    """Any failure talking to the routing backend."""


class BackendRequestFailed(BackendError):
    """Network error, timeout or non-2xx status from the routing backend."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class MalformedBackendResponse(BackendError):
    """Backend answered, but the payload is not a usable route response."""
