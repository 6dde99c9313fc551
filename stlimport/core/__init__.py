"""Core types for stlimport: configuration, errors and mesh values."""

from stlimport.core.config import (
    Config,
    ImporterConfig,
    LoggingConfig,
    get_default_config,
    load_config,
)
from stlimport.core.exceptions import (
    ConfigurationError,
    MeshIndexError,
    NotOpenedError,
    SizeMismatchError,
    StlImportError,
    StlNotFoundError,
    StlUnreadableError,
    TooShortError,
    UnsupportedVariantError,
)
from stlimport.core.mesh import (
    MeshAttribute,
    MeshAttributeData,
    MeshData,
    MeshPrimitive,
    VertexFormat,
)

__all__ = [
    # Config classes
    "Config",
    "ImporterConfig",
    "LoggingConfig",
    # Config functions
    "get_default_config",
    "load_config",
    # Mesh values
    "MeshAttribute",
    "MeshAttributeData",
    "MeshData",
    "MeshPrimitive",
    "VertexFormat",
    # Exceptions
    "StlImportError",
    "ConfigurationError",
    "TooShortError",
    "UnsupportedVariantError",
    "SizeMismatchError",
    "StlNotFoundError",
    "StlUnreadableError",
    "NotOpenedError",
    "MeshIndexError",
]
