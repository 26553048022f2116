# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registry store package.

The package is organized into:
- core: Main Registry class with path access, merge, flatten and loading
- loading: The bind algorithm overlaying dicts, objects and nodes onto a tree

Example:
    >>> from genro_registry import Registry
    >>> registry = Registry()
    >>> registry.set('config.name', 'MyApp')
    >>> registry['config.name']
    'MyApp'
"""

from .core import Registry
from .loading import bind

__all__ = ["Registry", "bind"]
