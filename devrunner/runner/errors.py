"""
Error types raised by the command runner.

Each failure cause has its own exception class and an `ErrorKind` tag, so
callers can branch on the kind instead of inspecting messages.
"""

from enum import Enum


class ErrorKind(Enum):
    DUPLICATE_TASK = "duplicate_task"
    EMPTY_COMMAND = "empty_command"
    EXECUTABLE_NOT_FOUND = "executable_not_found"
    SPAWN_FAILURE = "spawn_failure"
    DISCOVERY_TIMEOUT = "discovery_timeout"


class RunnerError(Exception):
    """Base class for failures reported by `CommandRunner`."""
    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DuplicateTaskError(RunnerError):
    kind = ErrorKind.DUPLICATE_TASK

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"subgraph with name '{name}' already has a running process")


class EmptyCommandError(RunnerError):
    kind = ErrorKind.EMPTY_COMMAND

    def __init__(self) -> None:
        super().__init__("the command you passed is empty")


class ExecutableNotFoundError(RunnerError):
    kind = ErrorKind.EXECUTABLE_NOT_FOUND

    def __init__(self, binary: str) -> None:
        self.binary = binary
        super().__init__(f"{binary} is not installed on this machine")


class SpawnFailureError(RunnerError):
    kind = ErrorKind.SPAWN_FAILURE

    def __init__(self, argv, reason: str) -> None:
        self.argv = list(argv)
        super().__init__(f"could not spawn child process `{' '.join(self.argv)}`: {reason}")


class DiscoveryTimeoutError(RunnerError):
    kind = ErrorKind.DISCOVERY_TIMEOUT

    def __init__(self, name: str, timeout: float) -> None:
        self.name = name
        self.timeout = timeout
        super().__init__(f"could not find GraphQL endpoint for '{name}' after {timeout:g} seconds")


class ChooserAborted(Exception):
    """Raised by an interactive chooser when no selection could be made."""


class NotificationError(Exception):
    """Raised when a notice could not be delivered to the notification channel."""
