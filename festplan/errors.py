"""Error types shared by the repository, services and shell."""

from typing import Any, Dict


class FestplanError(Exception):
    """Base class for Festplan errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Dict[str, Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(FestplanError):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            code="NOT_FOUND",
            message=f"{resource} not found: {identifier}",
            details={"resource": resource, "identifier": identifier}
        )


class ConflictError(FestplanError):
    """Resource conflict (already exists)."""

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(
            code="CONFLICT",
            message=message,
            details=details or {}
        )


class ValidationError(FestplanError):
    """Invalid user input: not a number, out of range, empty."""

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            details=details or {}
        )


class ConfigError(FestplanError):
    """Missing or invalid configuration. Fatal at startup."""

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(
            code="CONFIG_ERROR",
            message=message,
            details=details or {}
        )


class EndOfInput(FestplanError):
    """Input stream closed while a prompt was waiting."""

    def __init__(self):
        super().__init__(code="END_OF_INPUT", message="end of input")
