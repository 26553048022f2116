# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registry node model.

A RegistryNode is a tagged union: a SCALAR holding a plain value, a MAPPING
holding an ordered dict of child nodes, or a SEQUENCE holding a list of
child nodes. Nodes carry no parent reference; every node is owned by
exactly one container.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterator

from .exceptions import PathConflictError


class NodeKind(Enum):
    """Shape of a RegistryNode."""

    SCALAR = 'scalar'
    MAPPING = 'mapping'
    SEQUENCE = 'sequence'


def is_absent_value(value: Any) -> bool:
    """True if value counts as "not set" for reads.

    None and the empty string are treated as absent. A scalar RegistryNode
    wrapping one of them is absent too. Empty mappings and sequences are
    not.
    """
    if isinstance(value, RegistryNode):
        if not value.is_scalar:
            return False
        value = value.value
    return value is None or (isinstance(value, str) and value == '')


def is_object_like(value: Any) -> bool:
    """True for instances whose public attributes should bind as a mapping."""
    if isinstance(value, (type, Enum)) or callable(value):
        return False
    return hasattr(value, '__dict__')


def public_attrs(obj: Any) -> dict[str, Any]:
    """Return the public instance attributes of obj, in definition order."""
    return {k: v for k, v in vars(obj).items() if not k.startswith('_')}


def is_index_key(segment: str) -> bool:
    """True if segment is a canonical sequence index ('0', '7', '12', not '01')."""
    return (
        segment.isascii()
        and segment.isdigit()
        and (segment == '0' or not segment.startswith('0'))
    )


def _parse_index(segment: str | int) -> int | None:
    if isinstance(segment, int):
        return segment
    if is_index_key(segment):
        return int(segment)
    return None


class RegistryNode:
    """A node in a Registry tree.

    Each node has:
    - kind: NodeKind.SCALAR, NodeKind.MAPPING or NodeKind.SEQUENCE
    - value: the scalar value, a dict of child nodes, or a list of child nodes

    Example:
        >>> node = RegistryNode.mapping()
        >>> _ = node.set_child('name', RegistryNode.scalar('Alice'))
        >>> node.get_child('name').value
        'Alice'
    """

    __slots__ = ('kind', 'value')

    def __init__(self, kind: NodeKind = NodeKind.SCALAR, value: Any = None) -> None:
        """Initialize a RegistryNode.

        Prefer the scalar(), mapping() and sequence() constructors.

        Args:
            kind: The node shape.
            value: Scalar value, dict of children, or list of children.
        """
        self.kind = kind
        self.value = value

    @classmethod
    def scalar(cls, value: Any = None) -> RegistryNode:
        return cls(NodeKind.SCALAR, value)

    @classmethod
    def mapping(cls, children: dict[str, RegistryNode] | None = None) -> RegistryNode:
        return cls(NodeKind.MAPPING, children if children is not None else {})

    @classmethod
    def sequence(cls, items: list[RegistryNode] | None = None) -> RegistryNode:
        return cls(NodeKind.SEQUENCE, items if items is not None else [])

    @classmethod
    def from_python(cls, value: Any) -> RegistryNode:
        """Convert host data into a new node tree.

        Args:
            value: A RegistryNode or Registry (cloned), a Mapping, a list or
                tuple, an object with public attributes, or a scalar.

        Returns:
            A node tree sharing no containers with value.
        """
        from .store import Registry
        if isinstance(value, Registry):
            value = value.as_node()
        if isinstance(value, RegistryNode):
            return value.clone()
        if isinstance(value, Mapping):
            return cls.mapping({str(k): cls.from_python(v) for k, v in value.items()})
        if isinstance(value, (list, tuple)):
            return cls.sequence([cls.from_python(v) for v in value])
        if is_object_like(value):
            return cls.from_python(public_attrs(value))
        return cls.scalar(value)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        if self.kind is NodeKind.SCALAR:
            return f"RegistryNode.scalar({self.value!r})"
        if self.kind is NodeKind.MAPPING:
            return f"RegistryNode.mapping({list(self.value.keys())})"
        return f"RegistryNode.sequence({len(self.value)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegistryNode):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __len__(self) -> int:
        """Return the number of children (0 for scalars)."""
        if self.kind is NodeKind.SCALAR:
            return 0
        return len(self.value)

    # ==================== Shape ====================

    @property
    def is_scalar(self) -> bool:
        """True if this node holds a plain value."""
        return self.kind is NodeKind.SCALAR

    @property
    def is_mapping(self) -> bool:
        """True if this node holds keyed children."""
        return self.kind is NodeKind.MAPPING

    @property
    def is_sequence(self) -> bool:
        """True if this node holds positional children."""
        return self.kind is NodeKind.SEQUENCE

    @property
    def is_container(self) -> bool:
        """True for mappings and sequences."""
        return self.kind is not NodeKind.SCALAR

    def as_mapping(self) -> dict[str, RegistryNode]:
        """Return the children as a dict, converting a sequence in place.

        A SEQUENCE node becomes a MAPPING keyed by its stringified indices.
        The conversion is visible to every later traversal.

        Raises:
            PathConflictError: If the node is a scalar.
        """
        if self.kind is NodeKind.MAPPING:
            return self.value
        if self.kind is NodeKind.SEQUENCE:
            self.value = {str(i): child for i, child in enumerate(self.value)}
            self.kind = NodeKind.MAPPING
            return self.value
        raise PathConflictError(f"Scalar value {self.value!r} has no children")

    # ==================== Children ====================

    def get_child(self, segment: str | int) -> RegistryNode | None:
        """Return the child addressed by segment, or None if missing.

        Args:
            segment: A mapping key, or a decimal index for sequences.
        """
        if self.kind is NodeKind.MAPPING:
            return self.value.get(str(segment))
        if self.kind is NodeKind.SEQUENCE:
            index = _parse_index(segment)
            if index is not None and 0 <= index < len(self.value):
                return self.value[index]
        return None

    def set_child(self, segment: str | int, child: RegistryNode) -> RegistryNode:
        """Store child under segment and return it.

        On a sequence, an in-range index overwrites and the index equal to
        the length appends. Any other segment converts the sequence into a
        mapping first.

        Raises:
            PathConflictError: If the node is a scalar.
        """
        if self.kind is NodeKind.SEQUENCE:
            index = _parse_index(segment)
            if index is not None and 0 <= index < len(self.value):
                self.value[index] = child
                return child
            if index is not None and index == len(self.value):
                self.value.append(child)
                return child
        self.as_mapping()[str(segment)] = child
        return child

    def remove_child(self, segment: str | int) -> RegistryNode | None:
        """Remove and return the child under segment, or None if missing."""
        if self.kind is NodeKind.MAPPING:
            return self.value.pop(str(segment), None)
        if self.kind is NodeKind.SEQUENCE:
            index = _parse_index(segment)
            if index is not None and 0 <= index < len(self.value):
                return self.value.pop(index)
        return None

    def append(self, child: RegistryNode) -> RegistryNode:
        """Append child as the new highest-index entry.

        A mapping receives the child under the key one above its largest
        integer-like key ('0' when there is none).

        Raises:
            PathConflictError: If the node is a scalar.
        """
        if self.kind is NodeKind.SEQUENCE:
            self.value.append(child)
            return child
        children = self.as_mapping()
        indices = [int(k) for k in children if is_index_key(k)]
        children[str(max(indices) + 1 if indices else 0)] = child
        return child

    def iter_children(self) -> Iterator[tuple[str | int, RegistryNode]]:
        """Yield (key, child) pairs in order; sequence keys are ints."""
        if self.kind is NodeKind.MAPPING:
            yield from self.value.items()
        elif self.kind is NodeKind.SEQUENCE:
            yield from enumerate(self.value)

    # ==================== Conversion ====================

    def clone(self) -> RegistryNode:
        """Return a structural deep copy sharing no nodes with self."""
        if self.kind is NodeKind.MAPPING:
            return RegistryNode.mapping({k: c.clone() for k, c in self.value.items()})
        if self.kind is NodeKind.SEQUENCE:
            return RegistryNode.sequence([c.clone() for c in self.value])
        return RegistryNode.scalar(self.value)

    def to_python(self) -> Any:
        """Convert to plain nested dict / list / scalar values."""
        if self.kind is NodeKind.MAPPING:
            return {k: c.to_python() for k, c in self.value.items()}
        if self.kind is NodeKind.SEQUENCE:
            return [c.to_python() for c in self.value]
        return self.value
