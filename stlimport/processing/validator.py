"""Binary STL sniffing and structural validation."""

import struct

from stlimport.core.exceptions import (
    SizeMismatchError,
    TooShortError,
    UnsupportedVariantError,
)

# 80 bytes of free-form header text followed by a uint32 triangle count
HEADER_SIZE = 84
TRIANGLE_COUNT_OFFSET = 80

# Normal and three positions as 12 floats, plus 2 opaque attribute bytes
TRIANGLE_STRIDE = 12 * 4 + 2

ASCII_SIGNATURE = b"solid"


def expected_size(triangle_count: int) -> int:
    """Size in bytes of a binary STL file holding triangle_count triangles."""
    return HEADER_SIZE + TRIANGLE_STRIDE * triangle_count


def validate_stl_data(data: bytes) -> int:
    """Validate a binary STL buffer.

    Checks run in order and stop at the first failure.

    Args:
        data: Complete file contents

    Returns:
        Declared triangle count

    Raises:
        TooShortError: If the buffer is shorter than 5 or 84 bytes
        UnsupportedVariantError: If the buffer starts with ``solid``
        SizeMismatchError: If the size disagrees with the triangle count
    """
    size = len(data)

    # Can't even tell ASCII from binary yet
    if size < len(ASCII_SIGNATURE):
        raise TooShortError(size)

    if bytes(data[:len(ASCII_SIGNATURE)]) == ASCII_SIGNATURE:
        raise UnsupportedVariantError()

    if size < HEADER_SIZE:
        raise TooShortError(size, HEADER_SIZE)

    (triangle_count,) = struct.unpack_from("<I", data, TRIANGLE_COUNT_OFFSET)
    expected = expected_size(triangle_count)
    if size != expected:
        raise SizeMismatchError(expected, size, triangle_count)

    return triangle_count
