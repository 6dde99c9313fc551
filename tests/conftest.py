"""Shared test fixtures and configuration."""

import shutil
import struct
import tempfile
from pathlib import Path
from typing import Callable, Generator, Optional

import numpy as np
import pytest
import trimesh


def stl_record_dtype(byteorder: str = "<") -> np.dtype:
    """Packed 50-byte binary STL triangle record."""
    return np.dtype([
        ("normal", f"{byteorder}f4", (3,)),
        ("vertices", f"{byteorder}f4", (3, 3)),
        ("attributes", f"{byteorder}u2"),
    ])


def build_stl(
    normals,
    triangles,
    header: bytes = b"",
    byteorder: str = "<",
    attributes=None,
    triangle_count: Optional[int] = None,
) -> bytes:
    """Build binary STL contents.

    Args:
        normals: (n, 3) face normals
        triangles: (n, 3, 3) vertex positions
        header: Up to 80 bytes of header text, zero padded
        byteorder: Byte order of the float fields
        attributes: Optional (n,) values for the 2 trailing bytes
        triangle_count: Count to declare instead of the real one
    """
    triangles = np.asarray(triangles, dtype=np.float64).reshape((-1, 3, 3))
    normals = np.asarray(normals, dtype=np.float64).reshape((-1, 3))

    records = np.zeros(len(triangles), dtype=stl_record_dtype(byteorder))
    records["normal"] = normals
    records["vertices"] = triangles
    if attributes is not None:
        records["attributes"] = attributes

    if triangle_count is None:
        triangle_count = len(triangles)
    return header.ljust(80, b"\0")[:80] + struct.pack("<I", triangle_count) + records.tobytes()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def record_dtype() -> Callable[..., np.dtype]:
    """Binary STL record dtype factory."""
    return stl_record_dtype


@pytest.fixture
def make_stl() -> Callable[..., bytes]:
    """Binary STL builder."""
    return build_stl


@pytest.fixture
def single_triangle_stl() -> bytes:
    """One triangle in the XY plane facing +Z."""
    return build_stl(
        normals=[[0, 0, 1]],
        triangles=[[[0, 0, 0], [1, 0, 0], [0, 1, 0]]],
    )


@pytest.fixture
def two_triangle_stl() -> bytes:
    """Two triangles with distinct normals and positions."""
    return build_stl(
        normals=[[0, 0, 1], [1, 0, 0]],
        triangles=[
            [[0, 0, 0], [1, 0, 0], [0, 1, 0]],
            [[2.5, -1, 3], [2.5, 4, 3], [2.5, 4, -0.25]],
        ],
        header=b"two triangles",
        attributes=[0xFFFF, 0x1234],
    )


@pytest.fixture
def simple_box_mesh() -> trimesh.Trimesh:
    """Create a simple box mesh for testing."""
    return trimesh.creation.box(extents=[1, 1, 1])


@pytest.fixture
def box_stl(simple_box_mesh: trimesh.Trimesh) -> bytes:
    """Binary STL contents of the unit box."""
    return build_stl(simple_box_mesh.face_normals, simple_box_mesh.triangles)


@pytest.fixture
def sample_stl_path(temp_dir: Path, box_stl: bytes) -> Path:
    """Create a sample STL file."""
    stl_path = temp_dir / "test_box.stl"
    stl_path.write_bytes(box_stl)
    return stl_path


# Markers for different test categories
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test multiple components"
    )
