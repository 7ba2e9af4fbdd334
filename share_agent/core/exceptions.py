# share_agent/core/exceptions.py


class ShareError(Exception):
    """Base class for errors raised by the share subsystem."""

    code = "share-error"

    def __init__(self, detail: str = ""):
        self.detail = detail
        message = f"[{self.code}]"
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class OperationNotAllowedError(ShareError):
    """Raised when the file system does not permit sharing a path."""

    code = "operation-not-allowed"


class ShareAlreadyExistsError(ShareError):
    """Raised when a share for the path is already registered."""

    code = "share-already-exists"


class ShareNameGenerationError(ShareError):
    """Raised when no unique display name could be allocated."""

    code = "share-name-generation-failed"


class PathTranslationError(ShareError):
    """Raised when a virtual or system path cannot be translated."""

    code = "path-translation-failed"


class CommandExecutionError(Exception):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command '{command}' failed with exit code {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class UnsupportedPlatformError(Exception):
    """Raised when platform is not supported for network mounting."""


class InvalidMountOptionError(ValueError):
    """Raised when a value would change the mount option string it is placed in."""
