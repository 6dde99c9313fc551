"""Zero-copy strided views over binary STL triangle records."""

from typing import Tuple, Union

import numpy as np

from stlimport.core.mesh import VECTOR3_SIZE
from stlimport.processing.validator import HEADER_SIZE, TRIANGLE_STRIDE

# Source floats are always little-endian on disk
LITTLE_ENDIAN_FLOAT = np.dtype("<f4")

Buffer = Union[bytes, bytearray, memoryview]


def strided_floats(
    buffer: Buffer,
    offset: int,
    shape: Tuple[int, ...],
    strides: Tuple[int, ...],
    dtype: np.dtype = LITTLE_ENDIAN_FLOAT,
) -> np.ndarray:
    """Reinterpret a byte buffer as a strided float array without copying.

    The view is writeable only if the buffer is. numpy rejects an offset
    past the end of the buffer even for empty shapes, so those get a
    standalone empty array instead.

    Args:
        buffer: Underlying bytes
        offset: Byte offset of the first element
        shape: Array shape
        strides: Byte stride per axis
        dtype: Element type, including byte order

    Returns:
        Array aliasing buffer
    """
    if 0 in shape:
        return np.empty(shape, dtype=dtype)
    return np.ndarray(
        shape=shape, dtype=dtype, buffer=buffer, offset=offset, strides=strides
    )


class StridedRecordView:
    """Read-only view of the triangle records of a validated STL buffer.

    Both views are shaped (triangle_count, 3 vertices, 3 components). A
    record stores a single normal, so the normals view repeats it over the
    vertex axis with a zero stride.
    """

    def __init__(self, data: bytes, triangle_count: int):
        """Initialize the view.

        Args:
            data: Buffer already accepted by validate_stl_data
            triangle_count: Count returned by validate_stl_data
        """
        self.data = data
        self.triangle_count = triangle_count

    @property
    def normals(self) -> np.ndarray:
        return strided_floats(
            self.data,
            HEADER_SIZE,
            (self.triangle_count, 3, 3),
            (TRIANGLE_STRIDE, 0, 4),
        )

    @property
    def positions(self) -> np.ndarray:
        return strided_floats(
            self.data,
            HEADER_SIZE + VECTOR3_SIZE,
            (self.triangle_count, 3, 3),
            (TRIANGLE_STRIDE, VECTOR3_SIZE, 4),
        )

    def __len__(self) -> int:
        return self.triangle_count
