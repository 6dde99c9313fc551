"""Binary STL decoding pipeline."""

from stlimport.processing.assembler import assemble_mesh
from stlimport.processing.transformer import (
    deinterleave,
    little_endian_in_place,
    normalize_vertex_data,
)
from stlimport.processing.validator import expected_size, validate_stl_data
from stlimport.processing.views import StridedRecordView, strided_floats

__all__ = [
    "validate_stl_data",
    "expected_size",
    "StridedRecordView",
    "strided_floats",
    "deinterleave",
    "little_endian_in_place",
    "normalize_vertex_data",
    "assemble_mesh",
]
