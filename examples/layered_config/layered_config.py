# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""LayeredConfig - Example of application settings built from layers.

A didactic example showing how a host application can stack defaults,
a JSON settings document and command-line overrides in one Registry.
"""

from __future__ import annotations

from genro_registry import Registry

DEFAULTS = {
    'app': {'name': 'demo', 'debug': False},
    'database': {'host': 'localhost', 'port': 5432, 'options': {'ssl': False}},
}


class LayeredConfig:
    """Application settings made of defaults, a document and overrides.

    Example:
        >>> config = LayeredConfig('{"database": {"host": "db.internal"}}')
        >>> config.apply_overrides(['database.options.ssl=true'])
        >>> config['database.host']
        'db.internal'
        >>> config['database.port']
        5432
    """

    def __init__(self, document: str | None = None) -> None:
        self.registry = Registry(DEFAULTS)
        if document:
            self.registry.merge(Registry(document), recursive=True)

    def __getitem__(self, path: str):
        return self.registry[path]

    def apply_overrides(self, overrides: list[str]) -> None:
        """Apply 'path=value' strings, as a CLI would collect them."""
        flat = {}
        for item in overrides:
            path, _, raw = item.partition('=')
            flat[path.strip()] = _coerce(raw.strip())
        self.registry.load_dict(flat, flattened=True)

    def dump(self) -> str:
        return self.registry.to_string(indent=2)


def _coerce(raw: str):
    lowered = raw.lower()
    if lowered in ('true', 'false'):
        return lowered == 'true'
    if raw.isdigit():
        return int(raw)
    return raw


if __name__ == '__main__':
    config = LayeredConfig('{"app": {"debug": true}}')
    config.apply_overrides(['database.port=6543', 'app.name=showcase'])
    print(config.dump())
    for path, value in config.registry.flatten().items():
        print(f"{path} = {value!r}")
