# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Lookup of formats by name."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from ..exceptions import InvalidFormatError
from .base import Format

_logger = logging.getLogger(__name__)


class FormatFactory:
    """Maps case-insensitive format names to Format classes.

    Each format is instantiated on first use and the instance is reused
    for every later request of the same name.

    Example:
        >>> factory = FormatFactory({'json': JsonFormat})
        >>> factory.get('JSON') is factory.get('json')
        True
    """

    def __init__(self, formats: Mapping[str, type[Format]] | None = None) -> None:
        self._classes: dict[str, type[Format]] = {}
        self._instances: dict[str, Format] = {}
        for name, format_cls in (formats or {}).items():
            self.register(name, format_cls)

    def __repr__(self) -> str:
        return f"FormatFactory({self.names()})"

    def __contains__(self, name: str) -> bool:
        return str(name).lower() in self._classes

    def register(self, name: str, format_cls: type[Format]) -> None:
        """Register (or replace) the class used for a format name."""
        key = name.lower()
        self._classes[key] = format_cls
        self._instances.pop(key, None)

    def names(self) -> list[str]:
        """Return the registered format names."""
        return list(self._classes)

    def get(self, name: str) -> Format:
        """Return the shared instance for a format name.

        Raises:
            InvalidFormatError: If no format is registered under name.
        """
        key = str(name).lower()
        instance = self._instances.get(key)
        if instance is not None:
            return instance

        try:
            format_cls = self._classes[key]
        except KeyError:
            raise InvalidFormatError(f"Unable to load format '{name}'") from None

        _logger.debug("Instantiating %s for format '%s'", format_cls.__name__, key)
        instance = self._instances[key] = format_cls()
        return instance

    def for_file(self, path: str | os.PathLike) -> Format:
        """Return the format handling the extension of a file name.

        Raises:
            InvalidFormatError: If no registered format claims the extension.
        """
        ext = os.path.splitext(os.fspath(path))[1].lower()
        for name, format_cls in self._classes.items():
            if ext and ext in format_cls.extensions:
                return self.get(name)
        raise InvalidFormatError(f"Unable to determine the format of '{os.fspath(path)}'")
