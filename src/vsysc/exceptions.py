"""vsysc Exceptions

Custom exceptions for the vsysc interpreter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vsysc.models import ErrorKind

if TYPE_CHECKING:
    from vsysc.models import ErrorValue


class VsyscError(Exception):
    """Base exception for all vsysc errors."""

    pass


class ConfigError(VsyscError):
    """Raised when a vsysc.yaml file cannot be loaded."""

    pass


class InvalidArgumentError(VsyscError):
    """Raised when a keyword registration is malformed."""

    pass


# =============================================================================
# Staged errors - raised when the engine reaches an error record
# =============================================================================


class ExecutionError(VsyscError):
    """Raised when execution reaches an error record."""

    kind: ErrorKind | None = None

    def __init__(self, record: ErrorValue):
        self.record = record
        self.line = record.line
        super().__init__(f"Execution error: {record.value}")


class InvalidSyntaxError(ExecutionError):
    kind = ErrorKind.SYNTAX


class UnknownVariableError(ExecutionError):
    kind = ErrorKind.UNKNOWN_VARIABLE


class UnknownKeywordError(ExecutionError):
    kind = ErrorKind.UNKNOWN_KEYWORD


class ArrayNotFoundError(ExecutionError):
    kind = ErrorKind.ARRAY_NOT_FOUND


class NotANumberError(ExecutionError):
    kind = ErrorKind.NOT_A_NUMBER


class KeywordNotImplementedError(ExecutionError):
    kind = ErrorKind.NOT_IMPLEMENTED


class DuplicateIdentifierError(ExecutionError):
    kind = ErrorKind.DUPLICATE_IDENTIFIER


_STAGED_ERRORS: dict[ErrorKind, type[ExecutionError]] = {
    cls.kind: cls
    for cls in (
        InvalidSyntaxError,
        UnknownVariableError,
        UnknownKeywordError,
        ArrayNotFoundError,
        NotANumberError,
        KeywordNotImplementedError,
        DuplicateIdentifierError,
    )
}


def error_for(record: ErrorValue) -> ExecutionError:
    """Build the exception matching an error record's kind."""
    return _STAGED_ERRORS.get(record.kind, ExecutionError)(record)


# =============================================================================
# Execution-time errors
# =============================================================================


class DuplicateExportError(VsyscError):
    """Raised when an export name is already taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"File '{name}' already exists")


class ImportNotFoundError(VsyscError):
    """Raised when an import references an unknown export."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Import not found: {name}")


class ImportCycleError(VsyscError):
    """Raised when an export imports itself, directly or transitively."""

    def __init__(self, stack: list[str]):
        self.stack = list(stack)
        super().__init__(f"Import cycle: {' -> '.join(self.stack)}")


class HandlerRejectionError(VsyscError):
    """Raised when a custom keyword handler fails."""

    def __init__(self, keyword: str, reason: object):
        self.keyword = keyword
        self.reason = reason
        super().__init__(f"Keyword '{keyword}' failed: {reason}")


class HandlerTimeoutError(HandlerRejectionError):
    """Raised when a custom keyword handler does not settle in time."""

    def __init__(self, keyword: str, timeout: float):
        self.timeout = timeout
        super().__init__(keyword, f"timed out after {timeout}s")


class ReentrantExecutionError(VsyscError):
    """Raised when a handler executes source on the context that is running it."""

    def __init__(self) -> None:
        super().__init__("A handler cannot execute source on the context that is running it")
