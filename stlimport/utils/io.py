"""File access for the importer: turns a path into bytes."""

from pathlib import Path
from typing import Union

from stlimport.core.exceptions import StlNotFoundError, StlUnreadableError

# Maximum file size in bytes (1GB)
DEFAULT_MAX_FILE_SIZE = 1_000_000_000


def read_file(
    file_path: Union[str, Path],
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
) -> bytes:
    """Read a whole file into memory.

    Args:
        file_path: Path to read
        max_file_size: Files larger than this are refused

    Returns:
        File contents

    Raises:
        StlNotFoundError: If the path doesn't exist or isn't a file
        StlUnreadableError: If the file is too large or reading fails
    """
    file_path = Path(file_path)

    if not file_path.exists() or not file_path.is_file():
        raise StlNotFoundError(file_path)

    try:
        file_size = file_path.stat().st_size
        if file_size > max_file_size:
            raise StlUnreadableError(
                file_path,
                f"file too large ({file_size} bytes > {max_file_size} byte limit)",
            )
        return file_path.read_bytes()
    except OSError as e:
        raise StlUnreadableError(file_path, e.strerror or str(e)) from e
