# curacadet/core/exceptions.py


class CuracadetError(Exception):
    """Base exception for errors reported back to the caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CuracadetError):
    """Raised when required input is missing or invalid."""

    status_code = 400


class AuthError(CuracadetError):
    """Raised when a credential is missing, invalid or expired."""

    status_code = 401


class PermissionDeniedError(CuracadetError):
    """Raised when the user's role is not allowed to perform an action."""

    status_code = 403


class NotFoundError(CuracadetError):
    status_code = 404


class ConflictError(CuracadetError):
    status_code = 409


class ExecutionError(CuracadetError):
    """Raised when the database engine rejects a statement."""

    status_code = 500

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.detail = detail or "SQL Execution Failed"


def describe_engine_error(exc: Exception):
    """First line of the driver's message, plus any detail the engine gave."""
    orig = getattr(exc, "orig", None) or exc
    lines = [line for line in str(orig).strip().splitlines() if line.strip()]
    message = lines[0] if lines else exc.__class__.__name__

    diag = getattr(orig, "diag", None)
    detail = getattr(diag, "message_detail", None) if diag is not None else None
    if not detail and len(lines) > 1:
        detail = "\n".join(lines[1:])
    return message, detail
