"""Exception hierarchy for takeout alignment."""

import errno
from pathlib import Path


class AlignError(Exception):
    """Base exception for all alignment errors."""


class ConfigError(AlignError):
    """Invalid or missing configuration."""


class PathOutsideRootError(AlignError):
    """A path that should live under a root does not."""

    def __init__(self, path: Path, root: Path) -> None:
        super().__init__(f"path {str(path)!r} not found in root {str(root)!r}")
        self.path = path
        self.root = root


class FileOperationError(AlignError):
    """A filesystem call (open, stat, scan, rename) failed."""

    def __init__(self, path: Path, operation: str, reason: str) -> None:
        super().__init__(f"{operation} failed for {path}: {reason}")
        self.path = path
        self.operation = operation
        self.reason = reason


class CrossDeviceMoveError(FileOperationError):
    """Source and destination are on different filesystems."""


class MetadataParseError(AlignError):
    """A sidecar or JSON metadata file could not be decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot parse {path}: {reason}")
        self.path = path
        self.reason = reason


def wrap_os_error(path: Path, operation: str, exc: OSError) -> FileOperationError:
    """Map an OSError to the matching FileOperationError subclass."""
    reason = exc.strerror or str(exc)
    if exc.errno == errno.EXDEV:
        return CrossDeviceMoveError(path, operation, reason)
    return FileOperationError(path, operation, reason)
