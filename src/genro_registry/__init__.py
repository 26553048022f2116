# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-Registry - Path-addressable hierarchical key-value store.

A lightweight, zero-dependency library providing a nested configuration and
data container for the Genro ecosystem, addressed by dotted paths and
serialized to JSON.
"""

__version__ = "0.1.0"

from .exceptions import (
    ParseError,
    PathConflictError,
    RegistryError,
)
from .node import NodeKind, RegistryNode, is_absent_value
from .paths import DEFAULT_SEPARATOR, split_path
from .serialization import RegistryEncoder, parse, serialize
from .store import Registry

__all__ = [
    # Core classes
    "Registry",
    "RegistryNode",
    "NodeKind",
    # Helpers
    "is_absent_value",
    "split_path",
    "DEFAULT_SEPARATOR",
    # Interchange
    "RegistryEncoder",
    "parse",
    "serialize",
    # Exceptions
    "RegistryError",
    "ParseError",
    "PathConflictError",
]
