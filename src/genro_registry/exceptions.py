# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Registry exceptions."""

from __future__ import annotations


class RegistryError(Exception):
    """Base exception for Registry errors."""

    pass


class InvalidFormatError(RegistryError, ValueError):
    """Raised when a format name (or file suffix) has no registered format."""

    pass


class MalformedInputError(RegistryError, ValueError):
    """Raised when a document cannot be converted to or from a registry tree."""

    pass
