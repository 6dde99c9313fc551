"""Mesh value types produced by the importer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

import numpy as np
import trimesh


class MeshPrimitive(str, Enum):
    """Primitive topology of a mesh."""
    TRIANGLES = "triangles"


class MeshAttribute(str, Enum):
    """Per-vertex attribute kinds."""
    POSITION = "position"
    NORMAL = "normal"


class VertexFormat(str, Enum):
    """Component layout of a single attribute element."""
    VECTOR3 = "vector3"


# Bytes per VECTOR3 element, three 32-bit floats
VECTOR3_SIZE = 12


@dataclass(frozen=True)
class MeshAttributeData:
    """Describes where one attribute lives inside a shared vertex buffer."""

    attribute: MeshAttribute
    offset: int
    stride: int
    count: int
    format: VertexFormat = VertexFormat.VECTOR3


@dataclass
class MeshData:
    """A decoded mesh: primitive, owned vertex buffer and attribute layout."""

    primitive: MeshPrimitive
    vertex_data: bytearray
    attributes: List[MeshAttributeData] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        """Number of vertices, taken from the first attribute."""
        if not self.attributes:
            return 0
        return self.attributes[0].count

    @property
    def attribute_count(self) -> int:
        return len(self.attributes)

    def has_attribute(self, kind: MeshAttribute) -> bool:
        return any(a.attribute == kind for a in self.attributes)

    def attribute_data(self, kind: MeshAttribute) -> MeshAttributeData:
        """Get the descriptor for an attribute kind.

        Raises:
            KeyError: If the mesh has no such attribute
        """
        for attribute in self.attributes:
            if attribute.attribute == kind:
                return attribute
        raise KeyError(f"mesh has no {kind.value} attribute")

    def attribute(self, kind: MeshAttribute) -> np.ndarray:
        """Get a zero-copy (count, 3) float32 view of an attribute.

        Args:
            kind: Attribute to view

        Returns:
            Array sharing memory with vertex_data
        """
        desc = self.attribute_data(kind)
        if desc.count == 0:
            return np.empty((0, 3), dtype=np.float32)
        return np.ndarray(
            shape=(desc.count, 3),
            dtype=np.float32,
            buffer=self.vertex_data,
            offset=desc.offset,
            strides=(desc.stride, 4),
        )

    @property
    def positions(self) -> np.ndarray:
        return self.attribute(MeshAttribute.POSITION)

    @property
    def normals(self) -> np.ndarray:
        return self.attribute(MeshAttribute.NORMAL)

    def to_trimesh(self) -> trimesh.Trimesh:
        """Convert to a trimesh object.

        Every triangle keeps its own three vertices and its winding order;
        no vertices are merged.
        """
        vertices = np.array(self.positions, dtype=np.float64)
        faces = np.arange(len(vertices), dtype=np.int64).reshape((-1, 3))
        # trimesh can't take an empty normals array
        vertex_normals = None
        if self.vertex_count:
            vertex_normals = np.array(self.normals, dtype=np.float64)
        return trimesh.Trimesh(
            vertices=vertices,
            faces=faces,
            vertex_normals=vertex_normals,
            process=False,
        )
