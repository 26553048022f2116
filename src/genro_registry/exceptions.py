# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registry exceptions."""

from __future__ import annotations


class RegistryError(Exception):
    """Base exception for Registry errors."""

    pass


class ParseError(RegistryError, ValueError):
    """Raised when interchange text cannot be turned into a registry tree."""

    pass


class PathConflictError(RegistryError, TypeError):
    """Raised when a write has to pass through (or append to) a scalar node."""

    pass
