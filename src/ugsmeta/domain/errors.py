"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


# ============================================================================
#                           Input errors
# ============================================================================


class InvalidProjectPath(DomainError, ValueError):
    """Raised when a project path is not of the form ``//domain/stream/project``."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid project path {path!r}: {reason}.")
        self.path = path
        self.reason = reason


class InvalidSubmission(DomainError, ValueError):
    """Raised when a badge or user-event submission carries invalid fields."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid value for {field}: {reason}.")
        self.field = field
        self.reason = reason


class UnknownCodeError(DomainError, ValueError):
    """Raised when an integer does not map to a member of a wire-stable enum."""

    def __init__(self, enum_name: str, code: object) -> None:
        super().__init__(f"{code!r} is not a valid {enum_name} code.")
        self.enum_name = enum_name
        self.code = code
