"""stlimport - Decode binary STL files into interleaved vertex buffers."""

from stlimport.core import (
    MeshAttribute,
    MeshAttributeData,
    MeshData,
    MeshPrimitive,
    StlImportError,
)
from stlimport.importer import ImporterFeature, StlImporter, load_stl, load_stl_data

__version__ = "0.1.0"

__all__ = [
    "StlImporter",
    "ImporterFeature",
    "load_stl",
    "load_stl_data",
    "MeshData",
    "MeshAttribute",
    "MeshAttributeData",
    "MeshPrimitive",
    "StlImportError",
]
