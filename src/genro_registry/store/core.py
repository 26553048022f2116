# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registry - A path-addressable hierarchical key-value store.

This module provides the Registry class, an in-memory tree of scalar,
mapping and sequence nodes addressed by separator-joined paths. It is meant
as an embeddable configuration/data container.

Key Features:
    - **Path navigation**: Dotted paths ('a.b.c'), custom separators,
      numeric segments index into sequences ('servers.0.host')
    - **Autocreate**: set() and append() create missing intermediate mappings
    - **Absent values**: None and '' read as "not set" in get/exists/setdefault
    - **Merge**: shallow or recursive, skipping absent values
    - **Flatten**: one-dimensional {path: leaf} view of the tree
    - **JSON interchange**: load_string() / to_string()

Example:
    Basic usage::

        registry = Registry()
        registry.set('database.host', 'localhost')
        registry.set('database.port', 5432)

        print(registry['database.host'])  # 'localhost'
        print(registry.flatten())  # {'database.host': 'localhost', 'database.port': 5432}

    Loading and merging::

        registry = Registry('{"field": {"keyA": "A", "keyB": "B"}}')
        registry.merge(Registry({'field': {'keyB': 'new'}}), recursive=True)
        print(registry.to_string())  # {"field": {"keyA": "A", "keyB": "new"}}
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from ..exceptions import ParseError
from ..node import RegistryNode, is_absent_value
from ..paths import DEFAULT_SEPARATOR, resolve, split_path
from ..paths import walk as traverse
from ..serialization import parse, serialize
from .loading import bind

logger = logging.getLogger(__name__)


class Registry:
    """A hierarchical key-value store addressed by paths.

    Registry provides:
    - get(path, default) / registry[path]: Read values
    - set(path, value) / registry[path] = value: Write with autocreate
    - exists(path) / path in registry: Presence test
    - remove(path) / del registry[path]: Delete
    - setdefault(path, default): Read, writing the default when unset
    - append(path, value): Grow a sequence at path
    - merge(source, recursive): Overlay another Registry
    - flatten(separator): {path: leaf} view

    Attributes:
        separator: Path separator used when none is given per call.

    Example:
        >>> registry = Registry({'app': {'name': 'MyApp'}})
        >>> registry['app.name']
        'MyApp'
        >>> registry.setdefault('app.debug', False)
        False
    """

    __slots__ = ('_root', '_initialized', 'separator')

    def __init__(
        self,
        data: Any = None,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        """Initialize a Registry.

        Args:
            data: Optional initial data. Can be:
                - Registry: merged into the new registry
                - str: JSON text, loaded with load_string() (ignored if empty)
                - dict, list, tuple, RegistryNode or plain object: bound
                  recursively
            separator: Default path separator.

        Raises:
            TypeError: If data is of an unsupported type.
            ParseError: If data is a string holding invalid JSON.

        Example:
            >>> registry = Registry({'a': 1, 'b': {'c': 2}})
            >>> registry = Registry('{"a": 1}')
            >>> clone = Registry(registry)  # copy
            >>> slashed = Registry(separator='/')
        """
        self._root = RegistryNode.mapping()
        self._initialized = False
        self.separator = separator

        if data is None:
            return
        if isinstance(data, Registry):
            self.merge(data)
        elif isinstance(data, str):
            if data:
                self.load_string(data)
        else:
            self._bind(data)

    def _bind(
        self, data: Any, recursive: bool = True, allow_null: bool = True
    ) -> None:
        self._initialized = True
        bind(self._root, data, recursive, allow_null)

    def _split(self, path: str, separator: str | None = None) -> list[str]:
        return split_path(path, separator or self.separator)

    def _lookup(self, path: str) -> RegistryNode | None:
        """Find the node at path, using a direct root lookup when possible."""
        if not path:
            return None
        if self.separator not in path:
            return self._root.get_child(path)
        return resolve(self._root, self._split(path))

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing top-level keys."""
        return f"Registry({self.keys()})"

    def __str__(self) -> str:
        """Return the registry as JSON text."""
        return self.to_string()

    def __len__(self) -> int:
        """Return the number of top-level keys."""
        return len(self._root)

    def __iter__(self) -> Iterator[tuple[str | int, Any]]:
        """Iterate over top-level (key, value) pairs in order."""
        return self.iter_items()

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def __getitem__(self, path: str) -> Any:
        """Get value at path, None if missing.

        Example:
            >>> registry['database.host']
            'localhost'
        """
        return self.get(path)

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        self.remove(path)

    def __copy__(self) -> Registry:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Registry:
        return self.copy()

    @property
    def initialized(self) -> bool:
        """True once data has been loaded or bound into this registry."""
        return self._initialized

    # ==================== Core API ====================

    def exists(self, path: str) -> bool:
        """Check whether path holds a value.

        Every segment must be present, and the final value must not be
        None or ''.

        Args:
            path: Registry path.

        Returns:
            True if the path exists, False otherwise.
        """
        if not path:
            return False
        node = resolve(self._root, self._split(path))
        return node is not None and not is_absent_value(node)

    def get(self, path: str, default: Any = None) -> Any:
        """Get the value at path.

        Mappings and sequences are returned as plain dict / list copies;
        modifying them does not change the registry.

        Args:
            path: Registry path.
            default: Returned if the path is missing or holds None or ''.

        Returns:
            The stored value, or default.

        Example:
            >>> registry.get('database.host')
            'localhost'
            >>> registry.get('database.user', 'root')
            'root'
        """
        node = self._lookup(path)
        if node is None or is_absent_value(node):
            return default
        return node.to_python()

    def setdefault(self, path: str, default: Any = '') -> Any:
        """Return the value at path, storing default there first if unset.

        Args:
            path: Registry path.
            default: Value stored when the path is missing or absent.

        Returns:
            The value now stored at path.
        """
        value = self.get(path, default)
        self.set(path, value)
        return value

    def set(self, path: str, value: Any, separator: str | None = None) -> None:
        """Set value at path, creating intermediate mappings as needed.

        Dicts, lists and objects are copied into the tree. Numeric segments
        address existing sequence items; the index one past the end
        appends.

        Args:
            path: Registry path.
            value: Value to store.
            separator: Separator for this call, defaults to self.separator.

        Raises:
            PathConflictError: If an intermediate segment holds a scalar.

        Example:
            >>> registry.set('config.database.host', 'localhost')
            >>> registry.set('config/database/port', 5432, separator='/')
        """
        segments = self._split(path, separator)
        if not segments:
            return
        parent = traverse(
            self._root, segments, create_missing=True,
            separator=separator or self.separator,
        )
        parent.set_child(segments[-1], RegistryNode.from_python(value))

    def remove(self, path: str) -> None:
        """Remove the value at path. Missing paths are ignored.

        Removing a sequence item shifts the following items down.
        """
        if self.separator not in path:
            if path:
                self._root.remove_child(path)
            return

        segments = self._split(path)
        if not segments:
            return
        parent = traverse(self._root, segments)
        if parent is not None:
            parent.remove_child(segments[-1])

    def append(self, path: str, value: Any) -> None:
        """Append value to the sequence at path.

        A missing or absent (None or '') target becomes a new one-item
        sequence. A mapping target receives value under its next integer key.

        Raises:
            PathConflictError: If the target or an intermediate segment
                holds a scalar.

        Example:
            >>> registry.append('servers', 'alpha')
            >>> registry.append('servers', 'beta')
            >>> registry['servers']
            ['alpha', 'beta']
        """
        segments = self._split(path)
        if not segments:
            return
        parent = traverse(
            self._root, segments, create_missing=True, separator=self.separator
        )
        target = parent.get_child(segments[-1])
        if target is None or is_absent_value(target):
            target = parent.set_child(segments[-1], RegistryNode.sequence())
        target.append(RegistryNode.from_python(value))

    def clear(self) -> None:
        """Remove all top-level keys."""
        self._root = RegistryNode.mapping()

    # ==================== Iteration ====================

    def iter_keys(self) -> Iterator[str | int]:
        """Yield top-level keys in order."""
        for key, _ in self._root.iter_children():
            yield key

    def iter_values(self) -> Iterator[Any]:
        """Yield top-level values in order."""
        for _, node in self._root.iter_children():
            yield node.to_python()

    def iter_items(self) -> Iterator[tuple[str | int, Any]]:
        """Yield top-level (key, value) pairs in order."""
        for key, node in self._root.iter_children():
            yield key, node.to_python()

    def keys(self) -> list[str | int]:
        """Return list of top-level keys in order."""
        return list(self.iter_keys())

    def values(self) -> list[Any]:
        """Return list of top-level values in order."""
        return list(self.iter_values())

    def items(self) -> list[tuple[str | int, Any]]:
        """Return list of top-level (key, value) pairs in order."""
        return list(self.iter_items())

    # ==================== Walk ====================

    def walk(self, separator: str | None = None) -> Iterator[tuple[str, RegistryNode]]:
        """Walk the tree depth-first, yielding (path, node) for every node.

        Containers are yielded before their children. Sequence indices
        appear as decimal segments.

        Example:
            >>> for path, node in registry.walk():
            ...     print(path, node.kind)
        """
        separator = separator or self.separator

        def _walk_gen(node: RegistryNode, prefix: str) -> Iterator[tuple[str, RegistryNode]]:
            for key, child in node.iter_children():
                path = f"{prefix}{separator}{key}" if prefix else str(key)
                yield path, child
                if child.is_container:
                    yield from _walk_gen(child, path)

        return _walk_gen(self._root, '')

    def flatten(self, separator: str | None = None) -> dict[str, Any]:
        """Return a one-dimensional {path: value} dict of all scalar leaves.

        Args:
            separator: Key separator, defaults to self.separator.

        Example:
            >>> Registry({'a': {'b': 1, 'c': [2, 3]}}).flatten()
            {'a.b': 1, 'a.c.0': 2, 'a.c.1': 3}
        """
        return {
            path: node.value
            for path, node in self.walk(separator)
            if node.is_scalar
        }

    # ==================== Merge ====================

    def merge(self, source: Registry, recursive: bool = False) -> Registry:
        """Merge another Registry into this one.

        None and '' values in source are skipped. Without recursion each
        top-level key of source replaces the whole key here; with recursion
        nested mappings are merged key by key.

        Args:
            source: Registry to merge from. It is not modified and shares
                nothing with this registry afterwards.
            recursive: Merge nested mappings instead of replacing them.

        Returns:
            self, for chaining.

        Raises:
            TypeError: If source is not a Registry.

        Example:
            >>> base = Registry({'field': {'keyA': 'A', 'keyB': 'B'}})
            >>> _ = base.merge(Registry({'field': {'keyB': 'new'}}), recursive=True)
            >>> base.as_dict()
            {'field': {'keyA': 'A', 'keyB': 'new'}}
        """
        if not isinstance(source, Registry):
            raise TypeError(
                f"source must be Registry, not {type(source).__name__}"
            )
        logger.debug("Merging %d keys (recursive=%s)", len(source), recursive)
        self._bind(source.as_node().clone(), recursive=recursive, allow_null=False)
        return self

    def extract(self, path: str) -> Registry:
        """Return a new Registry holding a copy of the subtree at path.

        A missing, absent or scalar target gives an empty Registry.
        """
        extracted = Registry(separator=self.separator)
        node = self._lookup(path)
        if node is not None and node.is_container:
            extracted._root = node.clone()
            extracted._initialized = True
        logger.debug("Extracted %r: %d keys", path, len(extracted))
        return extracted

    def copy(self) -> Registry:
        """Return a deep copy sharing no nodes with this registry."""
        clone = Registry(separator=self.separator)
        clone._root = self._root.clone()
        clone._initialized = self._initialized
        return clone

    # ==================== Loading ====================

    def load_string(self, text: str) -> Registry:
        """Load JSON text.

        The first load into a registry that was never initialized replaces
        the whole tree. Later loads are merged recursively.

        Args:
            text: JSON document whose top level is an object or array.

        Returns:
            self, for chaining.

        Raises:
            ParseError: If text is invalid JSON or its top level is a
                scalar. The registry is left unchanged.
        """
        node = parse(text)
        if node.is_scalar:
            raise ParseError(
                f"Registry text must hold an object or array, not {type(node.value).__name__}"
            )

        if not self._initialized:
            logger.debug("Loaded registry text as new root")
            self._root = node
            self._initialized = True
            return self

        logger.debug("Merging registry text into existing root")
        self._bind(node)
        return self

    def load_dict(
        self,
        data: Any,
        flattened: bool = False,
        separator: str | None = None,
    ) -> Registry:
        """Load a mapping.

        Args:
            data: Mapping of values (or of paths to values if flattened).
            flattened: Keys are full paths, each routed through set().
            separator: Separator of flattened keys, defaults to
                self.separator.

        Returns:
            self, for chaining.

        Example:
            >>> Registry().load_dict({'db.host': 'x', 'db.port': 1}, flattened=True)['db.port']
            1
        """
        if not flattened:
            self._bind(data)
            return self

        for path, value in data.items():
            self.set(path, value, separator)
        return self

    def load_object(self, obj: Any) -> Registry:
        """Load the public attributes of obj recursively.

        Returns:
            self, for chaining.
        """
        self._bind(obj)
        return self

    # ==================== Conversion ====================

    def to_string(self, **options: Any) -> str:
        """Return the tree as JSON text.

        Args:
            **options: Forwarded to json.dumps (indent, sort_keys...).
        """
        return serialize(self._root, **options)

    def as_dict(self) -> dict[str, Any]:
        """Convert to a plain nested dict (recursive copy).

        A sequence root is keyed by stringified indices.
        """
        return {str(key): node.to_python() for key, node in self._root.iter_children()}

    def as_node(self) -> RegistryNode:
        """Return the live root node of the tree."""
        return self._root
