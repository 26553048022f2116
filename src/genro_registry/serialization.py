# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JSON interchange for registry trees.

Example:
    >>> node = parse('{"db": {"host": "localhost"}}')
    >>> serialize(node)
    '{"db": {"host": "localhost"}}'
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .exceptions import ParseError
from .node import RegistryNode

logger = logging.getLogger(__name__)


class RegistryEncoder(json.JSONEncoder):
    """JSON encoder that understands Registry and RegistryNode values.

    Example:
        >>> json.dumps({'settings': Registry({'a': 1})}, cls=RegistryEncoder)
        '{"settings": {"a": 1}}'
    """

    def default(self, o: Any) -> Any:
        from .store import Registry
        if isinstance(o, Registry):
            return o.as_node().to_python()
        if isinstance(o, RegistryNode):
            return o.to_python()
        return super().default(o)


def parse(text: str) -> RegistryNode:
    """Parse JSON text into a new node tree.

    Args:
        text: JSON document.

    Returns:
        The root RegistryNode of the parsed document.

    Raises:
        ParseError: If text is not valid JSON, or nests too deeply to be
            decoded.
    """
    try:
        return RegistryNode.from_python(json.loads(text))
    except (json.JSONDecodeError, TypeError, RecursionError) as err:
        logger.debug("Cannot parse registry text: %s", err)
        raise ParseError(f"Invalid JSON text: {err}") from err


def serialize(node: RegistryNode, **options: Any) -> str:
    """Serialize a node tree to JSON text.

    Args:
        node: Root of the tree to serialize.
        **options: Forwarded to json.dumps (indent, sort_keys, ensure_ascii...).
    """
    options.setdefault('cls', RegistryEncoder)
    return json.dumps(node.to_python(), **options)
