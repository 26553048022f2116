# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for RegistryNode and path traversal."""

from dataclasses import dataclass
from enum import Enum
from types import SimpleNamespace

import pytest

from genro_registry import (
    NodeKind,
    PathConflictError,
    RegistryNode,
    is_absent_value,
    split_path,
)
from genro_registry.node import is_index_key
from genro_registry.paths import resolve, walk


class Color(Enum):
    RED = 'red'


@dataclass
class Point:
    x: int
    y: int


class TestRegistryNode:
    """Tests for RegistryNode shapes and children."""

    def test_default_node_is_null_scalar(self):
        """Test a bare node is a scalar holding None."""
        node = RegistryNode()
        assert node.kind is NodeKind.SCALAR
        assert node.value is None

    def test_shape_properties(self):
        """Test is_scalar / is_mapping / is_sequence."""
        assert RegistryNode.scalar(1).is_scalar
        assert RegistryNode.mapping().is_mapping
        assert RegistryNode.sequence().is_sequence
        assert RegistryNode.mapping().is_container
        assert not RegistryNode.scalar('x').is_container

    def test_repr(self):
        """Test string representation mentions kind and content."""
        assert 'Alice' in repr(RegistryNode.scalar('Alice'))
        assert "'a'" in repr(RegistryNode.from_python({'a': 1}))
        assert 'sequence' in repr(RegistryNode.sequence())

    def test_len(self):
        """Test len counts children."""
        assert len(RegistryNode.scalar('abc')) == 0
        assert len(RegistryNode.from_python({'a': 1, 'b': 2})) == 2
        assert len(RegistryNode.from_python([1, 2, 3])) == 3

    def test_equality_is_structural(self):
        """Test nodes compare by kind and content."""
        assert RegistryNode.from_python({'a': [1]}) == RegistryNode.from_python({'a': [1]})
        assert RegistryNode.from_python({'0': 1}) != RegistryNode.from_python([1])

    def test_get_child_mapping(self):
        """Test mapping lookup by key."""
        node = RegistryNode.from_python({'a': 1})
        assert node.get_child('a').value == 1
        assert node.get_child('b') is None

    def test_get_child_sequence(self):
        """Test sequence lookup by decimal index in range."""
        node = RegistryNode.from_python(['x', 'y'])
        assert node.get_child('1').value == 'y'
        assert node.get_child(0).value == 'x'
        assert node.get_child('2') is None
        assert node.get_child('-1') is None
        assert node.get_child('name') is None

    def test_get_child_sequence_rejects_non_canonical_index(self):
        """Test leading zeros and non-ASCII digits are not indices."""
        node = RegistryNode.from_python(['x', 'y', 'z', 'w'])
        assert node.get_child('01') is None
        assert node.get_child('٣') is None
        assert node.get_child('3').value == 'w'

    def test_is_index_key(self):
        """Test canonical index detection."""
        assert is_index_key('0')
        assert is_index_key('12')
        assert not is_index_key('01')
        assert not is_index_key('00')
        assert not is_index_key('٣')
        assert not is_index_key('²')
        assert not is_index_key('-1')
        assert not is_index_key('')

    def test_get_child_scalar(self):
        """Test scalars have no children."""
        assert RegistryNode.scalar('abc').get_child('0') is None

    def test_set_child_sequence_overwrite_and_append(self):
        """Test in-range index overwrites, index len appends."""
        node = RegistryNode.from_python(['a', 'b'])
        node.set_child('0', RegistryNode.scalar('A'))
        node.set_child('2', RegistryNode.scalar('c'))
        assert node.is_sequence
        assert node.to_python() == ['A', 'b', 'c']

    def test_set_child_sequence_with_key_converts(self):
        """Test a non-index key converts the sequence to a mapping."""
        node = RegistryNode.from_python(['a', 'b'])
        node.set_child('name', RegistryNode.scalar('n'))
        assert node.is_mapping
        assert node.to_python() == {'0': 'a', '1': 'b', 'name': 'n'}

    def test_set_child_scalar_raises(self):
        """Test writing a child into a scalar raises."""
        with pytest.raises(PathConflictError):
            RegistryNode.scalar(1).set_child('a', RegistryNode.scalar(2))

    def test_remove_child(self):
        """Test removal from mapping and sequence."""
        mapping = RegistryNode.from_python({'a': 1, 'b': 2})
        assert mapping.remove_child('a').value == 1
        assert mapping.remove_child('missing') is None
        assert mapping.to_python() == {'b': 2}

        seq = RegistryNode.from_python(['x', 'y', 'z'])
        assert seq.remove_child('0').value == 'x'
        assert seq.to_python() == ['y', 'z']
        assert seq.remove_child('5') is None

    def test_as_mapping_converts_sequence_in_place(self):
        """Test as_mapping turns a sequence into an index-keyed mapping."""
        node = RegistryNode.from_python(['a', 'b'])
        children = node.as_mapping()
        assert node.is_mapping
        assert list(children) == ['0', '1']
        assert node.as_mapping() is children

    def test_as_mapping_scalar_raises(self):
        """Test scalars cannot be viewed as mappings."""
        with pytest.raises(PathConflictError, match="no children"):
            RegistryNode.scalar('x').as_mapping()

    def test_append_sequence(self):
        """Test append on a sequence."""
        node = RegistryNode.sequence()
        node.append(RegistryNode.scalar(1))
        node.append(RegistryNode.scalar(2))
        assert node.to_python() == [1, 2]

    def test_append_mapping_uses_next_integer_key(self):
        """Test append on a mapping picks the next integer key."""
        node = RegistryNode.from_python({'name': 'n'})
        node.append(RegistryNode.scalar('a'))
        assert node.to_python() == {'name': 'n', '0': 'a'}

        node = RegistryNode.from_python({'3': 'x', 'name': 'n'})
        node.append(RegistryNode.scalar('y'))
        assert node.get_child('4').value == 'y'

    def test_iter_children_keys(self):
        """Test mapping keys are strings, sequence keys are ints."""
        assert [k for k, _ in RegistryNode.from_python({'a': 1}).iter_children()] == ['a']
        assert [k for k, _ in RegistryNode.from_python([1, 2]).iter_children()] == [0, 1]
        assert list(RegistryNode.scalar(1).iter_children()) == []

    def test_clone_is_deep(self):
        """Test clone shares no nodes."""
        original = RegistryNode.from_python({'a': {'b': [1, 2]}})
        clone = original.clone()
        assert clone == original
        clone.get_child('a').get_child('b').append(RegistryNode.scalar(3))
        assert original.to_python() == {'a': {'b': [1, 2]}}


class TestFromPython:
    """Tests for converting host data into nodes."""

    def test_nested_containers(self):
        """Test dicts and lists become mappings and sequences."""
        node = RegistryNode.from_python({'a': [1, {'b': 2}], 'c': (3, 4)})
        assert node.get_child('a').is_sequence
        assert node.get_child('a').get_child('1').is_mapping
        assert node.get_child('c').to_python() == [3, 4]

    def test_non_string_keys_are_stringified(self):
        """Test mapping keys are converted to strings."""
        node = RegistryNode.from_python({1: 'one'})
        assert node.get_child('1').value == 'one'

    def test_object_public_attributes(self):
        """Test objects bind their public attributes only."""
        obj = SimpleNamespace(name='x', _secret='hidden', nested=SimpleNamespace(v=1))
        assert RegistryNode.from_python(obj).to_python() == {'name': 'x', 'nested': {'v': 1}}

    def test_dataclass(self):
        """Test dataclass instances become mappings."""
        assert RegistryNode.from_python(Point(1, 2)).to_python() == {'x': 1, 'y': 2}

    def test_enum_and_scalars_stay_scalar(self):
        """Test enum members and plain values are scalars."""
        assert RegistryNode.from_python(Color.RED).value is Color.RED
        assert RegistryNode.from_python(1.5).is_scalar
        assert RegistryNode.from_python(None).is_scalar

    def test_from_node_clones(self):
        """Test converting a node gives an independent copy."""
        node = RegistryNode.from_python({'a': 1})
        copy = RegistryNode.from_python(node)
        assert copy == node
        assert copy is not node


class TestAbsentValue:
    """Tests for the absent-value predicate."""

    def test_none_and_empty_string(self):
        """Test None and '' are absent."""
        assert is_absent_value(None)
        assert is_absent_value('')
        assert is_absent_value(RegistryNode.scalar(None))
        assert is_absent_value(RegistryNode.scalar(''))

    def test_falsy_values_are_present(self):
        """Test other falsy values are not absent."""
        assert not is_absent_value(0)
        assert not is_absent_value(False)
        assert not is_absent_value([])
        assert not is_absent_value(RegistryNode.mapping())
        assert not is_absent_value(RegistryNode.sequence())


class TestPaths:
    """Tests for split_path, walk and resolve."""

    def test_split_filters_empty_segments(self):
        """Test double, leading and trailing separators are dropped."""
        assert split_path('a.b.c') == ['a', 'b', 'c']
        assert split_path('.a..b.') == ['a', 'b']
        assert split_path('...') == []
        assert split_path('') == []

    def test_split_custom_separator(self):
        """Test custom separator."""
        assert split_path('a/b.c', '/') == ['a', 'b.c']

    def test_walk_returns_live_parent(self):
        """Test walk returns the actual parent node of the final segment."""
        root = RegistryNode.from_python({'a': {'b': {'c': 1}}})
        parent = walk(root, ['a', 'b', 'c'])
        assert parent is root.get_child('a').get_child('b')

    def test_walk_missing_without_create(self):
        """Test walk reports not found for missing intermediates."""
        root = RegistryNode.mapping()
        assert walk(root, ['a', 'b']) is None
        assert root.to_python() == {}

    def test_walk_creates_intermediate_mappings(self):
        """Test walk creates intermediates but not the final node."""
        root = RegistryNode.mapping()
        parent = walk(root, ['a', 'b', 'c'], create_missing=True)
        assert parent.is_mapping
        assert root.to_python() == {'a': {'b': {}}}

    def test_walk_replaces_null_intermediate(self):
        """Test a None intermediate is replaced by a mapping."""
        root = RegistryNode.from_python({'a': None})
        walk(root, ['a', 'b'], create_missing=True)
        assert root.get_child('a').is_mapping

    def test_walk_through_scalar(self):
        """Test a scalar intermediate is not found, or a conflict when creating."""
        root = RegistryNode.from_python({'a': 'text'})
        assert walk(root, ['a', 'b']) is None
        with pytest.raises(PathConflictError, match="'a' holds a scalar"):
            walk(root, ['a', 'b'], create_missing=True)

    def test_walk_conflict_uses_separator(self):
        """Test the conflict message joins segments with the given separator."""
        root = RegistryNode.from_python({'a': {'b': 1}})
        with pytest.raises(PathConflictError, match="'a/b' holds a scalar"):
            walk(root, ['a', 'b', 'c'], create_missing=True, separator='/')

    def test_walk_replaces_empty_string_intermediate(self):
        """Test a '' intermediate is replaced by a mapping."""
        root = RegistryNode.from_python({'a': ''})
        assert walk(root, ['a', 'b']) is None
        walk(root, ['a', 'b'], create_missing=True)
        assert root.get_child('a').is_mapping

    def test_walk_through_sequence(self):
        """Test numeric segments descend into sequences."""
        root = RegistryNode.from_python({'servers': [{'host': 'a'}, {'host': 'b'}]})
        assert resolve(root, ['servers', '1', 'host']).value == 'b'
        assert resolve(root, ['servers', '2', 'host']) is None

    def test_resolve_empty_segments(self):
        """Test resolving no segments finds nothing."""
        assert resolve(RegistryNode.mapping(), []) is None
