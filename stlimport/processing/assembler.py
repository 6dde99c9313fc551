"""Wraps a decoded vertex buffer into a MeshData value."""

from stlimport.core.mesh import (
    MeshAttribute,
    MeshAttributeData,
    MeshData,
    MeshPrimitive,
)
from stlimport.processing.transformer import (
    NORMAL_OFFSET,
    OUTPUT_VERTEX_STRIDE,
    POSITION_OFFSET,
)


def assemble_mesh(vertex_data: bytearray, triangle_count: int) -> MeshData:
    """Build a triangle mesh over a normalized vertex buffer.

    Args:
        vertex_data: Output of deinterleave after normalize_vertex_data
        triangle_count: Number of source triangles

    Returns:
        Mesh owning vertex_data
    """
    vertex_count = 3 * triangle_count
    return MeshData(
        primitive=MeshPrimitive.TRIANGLES,
        vertex_data=vertex_data,
        attributes=[
            MeshAttributeData(
                MeshAttribute.POSITION, POSITION_OFFSET, OUTPUT_VERTEX_STRIDE, vertex_count
            ),
            MeshAttributeData(
                MeshAttribute.NORMAL, NORMAL_OFFSET, OUTPUT_VERTEX_STRIDE, vertex_count
            ),
        ],
    )
