# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Binding host data onto registry nodes.

bind() overlays the pairs of a source (node, dict, list or plain object)
onto an existing node, either shallowly or recursively. It backs the
Registry constructor, load_dict(), load_object(), later load_string() calls
and merge().
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator

from ..node import RegistryNode, is_absent_value, is_object_like, public_attrs


def _unwrap(data: Any) -> Any:
    from .core import Registry
    if isinstance(data, Registry):
        return data.as_node()
    return data


def iter_bindable(data: Any) -> Iterator[tuple[str, Any]]:
    """Yield (key, value) pairs of data with string keys.

    Args:
        data: A container RegistryNode or Registry, a Mapping, a list or
            tuple (keyed by index), or an object (its public attributes).

    Raises:
        TypeError: If data has no pairs to bind.
    """
    data = _unwrap(data)
    if isinstance(data, RegistryNode):
        if data.is_scalar:
            raise TypeError(f"Cannot bind scalar node {data!r}")
        for key, child in data.iter_children():
            yield str(key), child
    elif isinstance(data, Mapping):
        for key, value in data.items():
            yield str(key), value
    elif isinstance(data, (list, tuple)):
        for index, value in enumerate(data):
            yield str(index), value
    elif is_object_like(data):
        yield from public_attrs(data).items()
    else:
        raise TypeError(
            f"data must be dict, list, object or RegistryNode, not {type(data).__name__}"
        )


def is_mapping_shaped(value: Any) -> bool:
    """True if value should be bound key by key when binding recursively."""
    value = _unwrap(value)
    if isinstance(value, RegistryNode):
        return value.is_mapping
    if isinstance(value, Mapping):
        return True
    if isinstance(value, (list, tuple)):
        return False
    return is_object_like(value)


def bind(
    parent: RegistryNode,
    data: Any,
    recursive: bool = True,
    allow_null: bool = True,
) -> None:
    """Overlay the pairs of data onto parent.

    For each (key, value) of data, in order:
    - if allow_null is False and value is None or '', skip it
    - if recursive and value is mapping-shaped, bind it into the mapping
      child of parent at key (created, or replacing a non-mapping child)
    - otherwise replace parent's child at key with a copy of value

    Args:
        parent: Node receiving the data. A sequence parent is converted to
            a mapping if a key is not a valid index for it.
        data: Source pairs, see iter_bindable().
        recursive: Merge nested mappings key by key instead of replacing
            them wholesale.
        allow_null: If False, absent values neither create nor overwrite.

    Example:
        >>> root = RegistryNode.from_python({'field': {'a': 'A', 'b': 'B'}})
        >>> bind(root, {'field': {'b': 'new'}})
        >>> root.to_python()
        {'field': {'a': 'A', 'b': 'new'}}
    """
    for key, value in iter_bindable(data):
        if not allow_null and is_absent_value(value):
            continue

        if recursive and is_mapping_shaped(value):
            child = parent.get_child(key)
            if child is None or not child.is_mapping:
                child = parent.set_child(key, RegistryNode.mapping())
            bind(child, value, recursive, allow_null)
            continue

        parent.set_child(key, RegistryNode.from_python(value))
