"""Unit tests for the STL importer."""

from pathlib import Path

import numpy as np
import pytest

from stlimport import ImporterFeature, StlImporter, load_stl, load_stl_data
from stlimport.core.config import ImporterConfig
from stlimport.core.exceptions import (
    MeshIndexError,
    NotOpenedError,
    SizeMismatchError,
    StlNotFoundError,
    StlUnreadableError,
    TooShortError,
    UnsupportedVariantError,
)
from stlimport.core.mesh import MeshAttribute, MeshPrimitive


class TestImporterState:
    """Test open/close transitions."""

    def test_initially_closed(self):
        """Test a fresh importer."""
        importer = StlImporter()

        assert not importer.is_opened
        assert importer.mesh_count == 0
        assert importer.features == ImporterFeature.OPEN_DATA

    def test_open_and_close(self, single_triangle_stl: bytes):
        """Test opening data and closing again."""
        importer = StlImporter()
        importer.open_data(single_triangle_stl)

        assert importer.is_opened
        assert importer.mesh_count == 1
        assert importer.triangle_count == 1

        importer.close()
        assert not importer.is_opened
        assert importer.mesh_count == 0
        assert importer.triangle_count == 0

    def test_close_when_closed(self):
        """Test that closing twice is harmless."""
        importer = StlImporter()
        importer.close()
        importer.close()

        assert not importer.is_opened

    def test_mesh_when_closed(self):
        """Test decoding without an open file."""
        with pytest.raises(NotOpenedError):
            StlImporter().mesh()

    @pytest.mark.parametrize("index", [1, -1, 7])
    def test_mesh_index_out_of_range(self, single_triangle_stl: bytes, index: int):
        """Test that only mesh 0 exists."""
        importer = StlImporter()
        importer.open_data(single_triangle_stl)

        with pytest.raises(MeshIndexError) as exc_info:
            importer.mesh(index)

        assert isinstance(exc_info.value, IndexError)
        assert exc_info.value.count == 1

    @pytest.mark.parametrize(
        "data, error",
        [
            (b"abc", TooShortError),
            (b"\0" * 83, TooShortError),
            (b"solid" + b"\0" * 129, UnsupportedVariantError),
            (b"\0" * 85, SizeMismatchError),
        ],
    )
    def test_failed_open_leaves_importer_closed(self, single_triangle_stl: bytes, data: bytes, error):
        """Test that a failed open releases the previous file and keeps no state."""
        importer = StlImporter()
        importer.open_data(single_triangle_stl)

        with pytest.raises(error):
            importer.open_data(data)

        assert not importer.is_opened
        assert importer.mesh_count == 0

    def test_reopen_replaces_data(self, single_triangle_stl: bytes, two_triangle_stl: bytes):
        """Test that opening again swaps the held file."""
        importer = StlImporter()
        importer.open_data(single_triangle_stl)
        importer.open_data(two_triangle_stl)

        assert importer.mesh().vertex_count == 6

    def test_context_manager(self, single_triangle_stl: bytes):
        """Test that leaving the with block closes the importer."""
        with StlImporter() as importer:
            importer.open_data(single_triangle_stl)
            assert importer.is_opened

        assert not importer.is_opened

    def test_data_is_copied(self, single_triangle_stl: bytes):
        """Test that changing the caller's buffer after open has no effect."""
        data = bytearray(single_triangle_stl)
        importer = StlImporter()
        importer.open_data(data)

        data[84 + 12:84 + 48] = b"\xff" * 36
        mesh = importer.mesh()

        np.testing.assert_array_equal(mesh.positions, [[0, 0, 0], [1, 0, 0], [0, 1, 0]])

    def test_open_memoryview(self, single_triangle_stl: bytes):
        """Test opening from a buffer view."""
        importer = StlImporter()
        importer.open_data(memoryview(single_triangle_stl))

        assert importer.mesh().vertex_count == 3


class TestImporterDecode:
    """Test decoded mesh contents."""

    def test_empty_mesh(self):
        """Test a header-only file with zero triangles."""
        importer = StlImporter()
        importer.open_data(b"\0" * 84)
        mesh = importer.mesh()

        assert mesh.primitive == MeshPrimitive.TRIANGLES
        assert mesh.vertex_count == 0
        assert len(mesh.vertex_data) == 0
        assert [a.count for a in mesh.attributes] == [0, 0]

    def test_single_triangle(self, single_triangle_stl: bytes):
        """Test one triangle facing +Z."""
        mesh = load_stl_data(single_triangle_stl)

        assert mesh.vertex_count == 3
        assert len(mesh.vertex_data) == 72
        np.testing.assert_array_equal(mesh.positions, [[0, 0, 0], [1, 0, 0], [0, 1, 0]])
        np.testing.assert_array_equal(mesh.normals, [[0, 0, 1]] * 3)

    def test_attribute_layout(self, single_triangle_stl: bytes):
        """Test the position and normal descriptors."""
        mesh = load_stl_data(single_triangle_stl)
        position = mesh.attribute_data(MeshAttribute.POSITION)
        normal = mesh.attribute_data(MeshAttribute.NORMAL)

        assert (position.offset, position.stride, position.count) == (0, 24, 3)
        assert (normal.offset, normal.stride, normal.count) == (12, 24, 3)

    def test_winding_order(self, box_stl: bytes, simple_box_mesh):
        """Test that vertex 3t+v is vertex v of triangle t."""
        mesh = load_stl_data(box_stl)
        triangles = simple_box_mesh.triangles.astype(np.float32)
        face_normals = simple_box_mesh.face_normals.astype(np.float32)

        assert mesh.vertex_count == 3 * len(triangles)
        positions = mesh.positions.reshape((-1, 3, 3))
        normals = mesh.normals.reshape((-1, 3, 3))
        assert positions.tobytes() == np.ascontiguousarray(triangles).tobytes()
        for t in range(len(triangles)):
            for v in range(3):
                assert normals[t, v].tobytes() == face_normals[t].tobytes()

    def test_decode_is_idempotent(self, two_triangle_stl: bytes):
        """Test that decoding twice gives identical buffers."""
        importer = StlImporter()
        importer.open_data(two_triangle_stl)
        first = importer.mesh()
        second = importer.mesh()

        assert first.vertex_data == second.vertex_data
        assert first.vertex_data is not second.vertex_data

    def test_mesh_owns_buffer(self, two_triangle_stl: bytes):
        """Test that modifying one decoded mesh doesn't affect the next."""
        importer = StlImporter()
        importer.open_data(two_triangle_stl)
        first = importer.mesh()
        first.positions[...] = 0

        assert importer.mesh().positions[3].tolist() == [2.5, -1, 3]

    def test_attribute_bytes_ignored(self, make_stl):
        """Test that the two trailing record bytes don't affect the result."""
        triangle = [[[0, 0, 0], [1, 0, 0], [0, 1, 0]]]
        plain = load_stl_data(make_stl([[0, 0, 1]], triangle))
        colored = load_stl_data(make_stl([[0, 0, 1]], triangle, attributes=[0x7C1F]))

        assert plain.vertex_data == colored.vertex_data

    def test_big_endian_fixture_decodes_identically(self, make_stl, record_dtype):
        """Test that byte-swapping a big-endian fixture decodes to the same floats."""
        normals = [[0, 0, 1], [0.6, -0.8, 0]]
        triangles = [
            [[0, 0, 0], [1, 0, 0], [0, 1, 0]],
            [[-1.5, 2.25, 1e10], [3, -7e-3, 0.5], [1e-30, 4, -8]],
        ]
        little = make_stl(normals, triangles)
        big = make_stl(normals, triangles, byteorder=">")
        assert big[84:] != little[84:]

        records = np.frombuffer(big, dtype=record_dtype(">"), offset=84)
        swapped = big[:84] + records.astype(record_dtype("<")).tobytes()

        expected = load_stl_data(little)
        decoded = load_stl_data(swapped)
        assert decoded.vertex_data == expected.vertex_data
        np.testing.assert_array_equal(
            decoded.positions.reshape((-1, 3, 3)),
            np.array(triangles, dtype=np.float32),
        )
        np.testing.assert_array_equal(
            decoded.normals.reshape((-1, 3, 3))[:, 0],
            np.array(normals, dtype=np.float32),
        )

    def test_normals_not_recomputed(self, make_stl):
        """Test that stored normals are passed through even if wrong."""
        mesh = load_stl_data(make_stl([[3, -4, 0]], [[[0, 0, 0], [1, 0, 0], [0, 1, 0]]]))

        np.testing.assert_array_equal(mesh.normals, [[3, -4, 0]] * 3)


class TestImporterFiles:
    """Test opening files through the I/O layer."""

    def test_open_file(self, sample_stl_path: Path):
        """Test opening an STL file from disk."""
        importer = StlImporter()
        importer.open_file(sample_stl_path)

        assert importer.is_opened
        assert importer.mesh().vertex_count == 36

    def test_open_file_str(self, sample_stl_path: Path):
        """Test opening with a string path."""
        mesh = load_stl(str(sample_stl_path))

        assert mesh.vertex_count == 36

    def test_open_missing_file(self, temp_dir: Path, single_triangle_stl: bytes):
        """Test opening a path that doesn't exist."""
        importer = StlImporter()
        importer.open_data(single_triangle_stl)

        with pytest.raises(StlNotFoundError) as exc_info:
            importer.open_file(temp_dir / "missing.stl")

        assert "cannot open file" in str(exc_info.value)
        assert not importer.is_opened

    def test_open_file_too_large(self, sample_stl_path: Path):
        """Test the configured file size limit."""
        importer = StlImporter(ImporterConfig(max_file_size=100))

        with pytest.raises(StlUnreadableError) as exc_info:
            importer.open_file(sample_stl_path)

        assert "too large" in str(exc_info.value)

    def test_open_invalid_file(self, temp_dir: Path):
        """Test opening an ASCII STL file."""
        ascii_stl = temp_dir / "ascii.stl"
        ascii_stl.write_text("solid cube\nendsolid cube\n")

        with pytest.raises(UnsupportedVariantError):
            load_stl(ascii_stl)
