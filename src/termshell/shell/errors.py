"""
Error types for the termshell core.

The REPL loop is the single error boundary: everything raised below it is
logged and summarized to the user as one line, then the loop re-prompts.
"""


class ShellError(Exception):
    """Base class for errors raised by the shell core."""

    pass


class CommandNotFoundError(ShellError):
    """Raised when dispatching a command name that is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Command Not Found: {name}")


class CommandAlreadyRegistered(UserWarning):
    """
    Warning text for re-registering a command name.

    Logged by the registry, never raised: the newer handler replaces the
    previous one.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Command Already Registered: {name}")


class ContextDestroyedError(ShellError):
    """Raised when a command context is used after its command finished."""

    def __init__(self) -> None:
        super().__init__("Terminal destroyed")


class InputBusyError(ShellError):
    """Raised when raw terminal input is already borrowed by another stream."""

    def __init__(self) -> None:
        super().__init__("Terminal input is already claimed by a raw input stream")


class CommandParseError(ShellError):
    """Raised when a command line cannot be tokenized (e.g., unclosed quotes)."""

    pass


class ReadAbortedError(ShellError):
    """Raised by a pending line or character read cancelled with abort_read()."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        super().__init__(reason or "Read aborted")
