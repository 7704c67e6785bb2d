"""Errors raised by the CPI execution engine.

Every error is terminal: the engine never retries and never substitutes a
default value. Callers map them to their own failure surface (the HTTP layer
turns them into 400/500 responses).
"""


class CpiError(Exception):
    """Base class for all CPI engine failures."""


class ConfigNotFound(CpiError):
    """CPI configuration file is missing or unreadable."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"CPI configuration not found: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ConfigParseError(CpiError):
    """CPI configuration is not valid JSON or does not match the expected layout."""


class ActionNotDefined(CpiError):
    """No action is configured for the requested command tag."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Command type not found for '{tag}'")


class ProcessSpawnError(CpiError):
    """The shell or command interpreter could not be launched."""


class NonZeroExit(CpiError):
    """The main command ran but exited with a failure status."""

    def __init__(self, stderr: str, exit_status: int = 1):
        self.stderr = stderr
        self.exit_status = exit_status
        super().__init__(stderr)


class PostExecFailure(CpiError):
    """A post-exec command failed after the main command succeeded."""

    def __init__(self, index: int, stderr: str, exit_status: int = 1):
        self.index = index
        self.stderr = stderr
        self.exit_status = exit_status
        super().__init__(f"post-exec step {index} failed: {stderr}")


class OutputDecodeError(CpiError):
    """Subprocess output was not valid UTF-8 text."""
