"""
Domain errors raised by the service layer.

Endpoints translate these into HTTP responses; services never raise
HTTPException themselves.
"""


class WalkGuardError(Exception):
    """Base class for all domain errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WalkGuardError, ValueError):
    """Malformed or out-of-range input, detected before any write"""


class NotFoundError(WalkGuardError, LookupError):
    """Referenced record is absent, not owned by the caller, or not active"""


class ForbiddenError(WalkGuardError, PermissionError):
    """Caller is authenticated but not allowed to see the record"""
