"""Exceptions related to playground."""

from enum import StrEnum

__all__ = [
    "PlaygroundException",
    "InputException",
    "CommandException",
    "KubectlException",
    "InitializationError",
    "ErrorKind",
    "ObjectClientError",
    "TrackerError",
    "DeadlineExceededError",
    "ConflictError",
]


class PlaygroundException(Exception):
    """Generic base exception used for this library."""


class InputException(PlaygroundException):
    """Raised when arguments or documents are not formatted as expected."""


class CommandException(PlaygroundException):
    """Raised when there is a failure running a subcommand."""

    def __init__(
        self, message: str, returncode: int | None = None, stderr: str = ""
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class KubectlException(CommandException):
    """Raised when there is a failure running a kubectl command."""


class InitializationError(PlaygroundException):
    """Raised when a client for the cluster cannot be set up."""


class ErrorKind(StrEnum):
    """Classification of a failure reported by an object client."""

    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    CONFLICT = "Conflict"
    TRANSIENT = "Transient"
    PERMANENT = "Permanent"
    OTHER = "Other"


class ObjectClientError(PlaygroundException):
    """Raised by an object client when a request against the cluster fails."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message


class TrackerError(PlaygroundException):
    """Raised when an installer tracker operation fails."""

    def __init__(
        self,
        operation: str,
        plugin_name: str | None,
        message: str,
    ) -> None:
        target = f" for plugin '{plugin_name}'" if plugin_name else ""
        super().__init__(f"Failed to {operation}{target}: {message}")
        self.operation = operation
        self.plugin_name = plugin_name


class DeadlineExceededError(TrackerError):
    """Raised when an installer tracker operation does not finish in time."""


class ConflictError(TrackerError):
    """Raised when concurrent writers kept invalidating an update."""
