"""Error taxonomy for command translation and execution.

Every failure a handler can report is a ``ShellError``. The engine turns
them into a displayable ``Error:`` reply, so nothing here ever escapes the
``submit`` boundary.
"""

from __future__ import annotations

from typing import Optional


class ShellError(Exception):
    """Base error for a command that could not be carried out."""

    def __init__(self, message: str, output: Optional[str] = None):
        super().__init__(message)
        self.message = message
        # Combined output of the native tool, shown verbatim to the user
        self.output = output

    def __str__(self) -> str:
        if self.output and self.output.strip():
            return f"{self.message}\nSystem message: {self.output.strip()}"
        return self.message


class MissingArgumentError(ShellError):
    """A required argument was not supplied."""
    pass


class TooManyArgumentsError(ShellError):
    """More arguments than the command accepts."""
    pass


class InvalidArgumentError(ShellError):
    """An argument was present but could not be interpreted."""
    pass


class InvalidPathError(ShellError):
    """A path does not resolve to something usable."""
    pass


class SourceNotFoundError(InvalidPathError):
    pass


class MissingFileError(InvalidPathError):
    pass


class UnsupportedOperationError(ShellError):
    """The host platform has no way to perform the request."""
    pass


class UnknownCommandError(ShellError):
    pass


class PermissionDeniedError(ShellError):
    """The native tool refused for lack of privilege."""
    pass


class CommandFailedError(ShellError):
    """The native tool exited non-zero for a reason we don't recognize."""
    pass


class CommandTimeoutError(CommandFailedError):
    pass
