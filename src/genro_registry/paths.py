# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path splitting and tree traversal.

Paths are strings of segments joined by a separator ('a.b.c'). Empty
segments are dropped, so 'a..b', '.a.b' and 'a.b.' all address 'a.b'.
A segment addresses a mapping key, or a sequence index when it is a plain
decimal integer without leading zeros that is within range.
"""

from __future__ import annotations

from .exceptions import PathConflictError
from .node import RegistryNode, is_absent_value

DEFAULT_SEPARATOR = '.'


def split_path(path: str, separator: str = DEFAULT_SEPARATOR) -> list[str]:
    """Split path into its non-empty segments.

    Example:
        >>> split_path('.a..b.')
        ['a', 'b']
        >>> split_path('a/b', '/')
        ['a', 'b']
    """
    if not path:
        return []
    return [segment for segment in path.split(separator or DEFAULT_SEPARATOR) if segment]


def walk(
    root: RegistryNode,
    segments: list[str],
    create_missing: bool = False,
    separator: str = DEFAULT_SEPARATOR,
) -> RegistryNode | None:
    """Follow every segment but the last, returning the node reached.

    The returned node is the live parent of the final segment, so callers
    decide how to assign, append or remove there. The final segment's node
    is never created here.

    Args:
        root: Node to start from.
        segments: Path segments, as returned by split_path.
        create_missing: If True, missing intermediate nodes (and
            intermediates holding None or '') are replaced by empty mappings.
        separator: Separator used to report the conflicting path.

    Returns:
        The parent node of the final segment, or None if an intermediate
        segment is missing (or is a scalar) and create_missing is False.

    Raises:
        PathConflictError: If create_missing is True and an intermediate
            segment holds a scalar that is not absent.
    """
    current = root
    for i, segment in enumerate(segments[:-1]):
        child = current.get_child(segment)
        if child is None or is_absent_value(child):
            if not create_missing:
                return None
            child = current.set_child(segment, RegistryNode.mapping())
        elif child.is_scalar:
            if not create_missing:
                return None
            walked = separator.join(segments[:i + 1])
            raise PathConflictError(f"'{walked}' holds a scalar, cannot write below it")
        current = child
    return current


def resolve(root: RegistryNode, segments: list[str]) -> RegistryNode | None:
    """Return the node addressed by segments, or None if any is missing."""
    if not segments:
        return None
    parent = walk(root, segments)
    if parent is None:
        return None
    return parent.get_child(segments[-1])
