"""Custom exceptions for stlimport."""

from pathlib import Path
from typing import Any, Optional


class StlImportError(Exception):
    """Base exception for stlimport."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(StlImportError):
    """Raised when configuration is invalid."""

    pass


class TooShortError(StlImportError):
    """Raised when a buffer is below the minimum size for a checkpoint."""

    def __init__(self, size: int, required: Optional[int] = None):
        if required is None:
            message = f"file too short, got only {size} bytes"
        else:
            message = f"file too short, expected at least {required} bytes but got {size}"
        super().__init__(message, {"size": size, "required": required})
        self.size = size
        self.required = required


class UnsupportedVariantError(StlImportError):
    """Raised when the buffer carries the ASCII STL signature."""

    def __init__(self) -> None:
        super().__init__("ASCII STL files are not supported")


class SizeMismatchError(StlImportError):
    """Raised when the declared triangle count disagrees with the buffer size."""

    def __init__(self, expected: int, actual: int, triangle_count: int):
        super().__init__(
            f"file size doesn't match triangle count, expected {expected} "
            f"but got {actual} for {triangle_count} triangles",
            {"expected": expected, "actual": actual, "triangle_count": triangle_count},
        )
        self.expected = expected
        self.actual = actual
        self.triangle_count = triangle_count


class StlNotFoundError(StlImportError):
    """Raised when an STL path does not point to an existing file."""

    def __init__(self, path: Path):
        super().__init__(f"cannot open file '{path}'", {"path": str(path)})
        self.path = path


class StlUnreadableError(StlImportError):
    """Raised when an STL file exists but cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"cannot read file '{path}': {reason}",
            {"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class NotOpenedError(StlImportError):
    """Raised when mesh data is requested from a closed importer."""

    def __init__(self) -> None:
        super().__init__("no file opened")


class MeshIndexError(StlImportError, IndexError):
    """Raised when a mesh index is out of range."""

    def __init__(self, index: int, count: int):
        super().__init__(
            f"index {index} out of range for {count} meshes",
            {"index": index, "count": count},
        )
        self.index = index
        self.count = count
