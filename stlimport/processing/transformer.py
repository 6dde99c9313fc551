"""Triangle-major to vertex-major layout conversion and byte order fixup."""

import numpy as np

from stlimport.core.mesh import VECTOR3_SIZE
from stlimport.processing.views import (
    LITTLE_ENDIAN_FLOAT,
    StridedRecordView,
    strided_floats,
)

# Position followed by normal, three floats each
OUTPUT_VERTEX_STRIDE = 2 * VECTOR3_SIZE
POSITION_OFFSET = 0
NORMAL_OFFSET = VECTOR3_SIZE


def deinterleave(view: StridedRecordView) -> bytearray:
    """Copy triangle records into a fresh per-vertex interleaved buffer.

    Vertex v of triangle t lands at output vertex 3*t + v with the
    triangle's normal next to its position. Values are copied bit for bit,
    still little-endian.

    Args:
        view: Record view over a validated buffer

    Returns:
        Newly allocated vertex buffer
    """
    triangle_count = view.triangle_count
    vertex_data = bytearray(3 * OUTPUT_VERTEX_STRIDE * triangle_count)

    shape = (triangle_count, 3, 3)
    strides = (3 * OUTPUT_VERTEX_STRIDE, OUTPUT_VERTEX_STRIDE, 4)
    output_positions = strided_floats(vertex_data, POSITION_OFFSET, shape, strides)
    output_normals = strided_floats(vertex_data, NORMAL_OFFSET, shape, strides)

    output_positions[...] = view.positions
    output_normals[...] = view.normals
    return vertex_data


def little_endian_in_place(components: np.ndarray) -> None:
    """Rewrite float components as host-native floats in the same memory.

    The array's dtype states how the bytes are currently stored. Running
    this on a little-endian host with little-endian input is a no-op, and it
    is still run there so the same path is exercised everywhere.

    Args:
        components: Writeable float32 array with an explicit byte order
    """
    native = components.astype(np.float32)
    components.view(np.float32)[...] = native


def normalize_vertex_data(vertex_data: bytearray) -> None:
    """Convert every float of a vertex buffer from little-endian to native."""
    components = strided_floats(
        vertex_data,
        0,
        (len(vertex_data) // 4,),
        (4,),
        dtype=LITTLE_ENDIAN_FLOAT,
    )
    little_endian_in_place(components)
