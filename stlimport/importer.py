"""Binary STL importer."""

import time
from enum import Flag, auto
from pathlib import Path
from typing import Optional, Union

from stlimport.core.config import ImporterConfig
from stlimport.core.exceptions import MeshIndexError, NotOpenedError, StlImportError
from stlimport.core.mesh import MeshData
from stlimport.processing import (
    StridedRecordView,
    assemble_mesh,
    deinterleave,
    normalize_vertex_data,
    validate_stl_data,
)
from stlimport.utils.io import read_file
from stlimport.utils.logging import get_logger, log_performance

logger = get_logger(__name__)


class ImporterFeature(Flag):
    """Optional capabilities of an importer."""
    OPEN_DATA = auto()


class StlImporter:
    """Opens binary STL files and decodes them into a single mesh.

    The importer holds a private copy of the validated file between
    ``open_*()`` and ``close()``. Decoding does not touch the held buffer,
    so ``mesh()`` can be called any number of times with the same result.
    An instance is not safe to share between threads.
    """

    def __init__(self, config: Optional[ImporterConfig] = None):
        """Initialize importer.

        Args:
            config: Importer configuration
        """
        self.config = config or ImporterConfig()
        self._data: Optional[bytes] = None
        self._triangle_count = 0

    @property
    def features(self) -> ImporterFeature:
        return ImporterFeature.OPEN_DATA

    @property
    def is_opened(self) -> bool:
        return self._data is not None

    def open_file(self, file_path: Union[str, Path]) -> None:
        """Open an STL file from disk.

        Args:
            file_path: Path to STL file

        Raises:
            StlNotFoundError: If the file does not exist
            StlUnreadableError: If the file cannot be read
            StlImportError: If the contents are not a valid binary STL
        """
        self.close()
        try:
            data = read_file(file_path, max_file_size=self.config.max_file_size)
        except StlImportError as e:
            logger.warning(
                "stl_rejected", error_type=type(e).__name__, **e.details
            )
            raise
        self.open_data(data)

    def open_data(self, data: Union[bytes, bytearray, memoryview]) -> None:
        """Open STL contents from memory.

        Any previously opened file is closed first. The data is copied, so
        the caller may reuse its buffer afterwards. On failure the importer
        is left closed.

        Args:
            data: Complete binary STL file contents

        Raises:
            TooShortError: If the data is too short
            UnsupportedVariantError: If the data is an ASCII STL
            SizeMismatchError: If the size doesn't match the triangle count
        """
        self.close()
        data = bytes(data)

        try:
            triangle_count = validate_stl_data(data)
        except StlImportError as e:
            logger.warning("stl_rejected", error_type=type(e).__name__, **e.details)
            raise

        self._data = data
        self._triangle_count = triangle_count
        logger.debug("stl_opened", triangle_count=triangle_count, size=len(data))

    def close(self) -> None:
        """Release the held file. Does nothing if nothing is open."""
        self._data = None
        self._triangle_count = 0

    @property
    def triangle_count(self) -> int:
        """Triangle count of the opened file, 0 when closed."""
        return self._triangle_count

    @property
    def mesh_count(self) -> int:
        return 1 if self.is_opened else 0

    def mesh(self, index: int = 0) -> MeshData:
        """Decode the mesh of the opened file.

        Args:
            index: Mesh index, only 0 is valid

        Returns:
            Newly decoded mesh owning its vertex buffer

        Raises:
            NotOpenedError: If no file is open
            MeshIndexError: If index is out of range
        """
        if self._data is None:
            raise NotOpenedError()
        if index != 0:
            raise MeshIndexError(index, self.mesh_count)

        start = time.perf_counter()
        view = StridedRecordView(self._data, self._triangle_count)
        vertex_data = deinterleave(view)
        normalize_vertex_data(vertex_data)
        mesh = assemble_mesh(vertex_data, self._triangle_count)
        log_performance(
            logger,
            "decode",
            time.perf_counter() - start,
            triangle_count=self._triangle_count,
        )
        return mesh

    def __enter__(self) -> "StlImporter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def load_stl(
    file_path: Union[str, Path],
    config: Optional[ImporterConfig] = None,
) -> MeshData:
    """Convenience function to decode an STL file.

    Args:
        file_path: Path to STL file
        config: Optional importer configuration

    Returns:
        Decoded mesh

    Raises:
        StlImportError: If the file cannot be opened or is not a valid binary STL
    """
    with StlImporter(config) as importer:
        importer.open_file(file_path)
        return importer.mesh()


def load_stl_data(data: Union[bytes, bytearray, memoryview]) -> MeshData:
    """Convenience function to decode binary STL contents from memory."""
    with StlImporter() as importer:
        importer.open_data(data)
        return importer.mesh()
