# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Converter registry: declared type to converter mapping."""

from enum import Enum
import logging
import threading
from typing import Any

from .converters import Converter, standard_converters
from .value_types import type_name

logger = logging.getLogger(__name__)


class ConverterRegistry:
    """Thread-safe mapping from declared value types to converters.

    A new registry is seeded with ``standard_converters()``. Registration
    replaces any existing entry, built-ins included, and bumps ``version`` so
    caches built from an older snapshot know they are stale.

    Example:
        >>> registry = ConverterRegistry()
        >>> registry.register(Color, EnumConverter())  # per-enum override
        >>> registry.lookup(Int32)
        NumericConverter(fallback=0)
    """

    def __init__(self, converters: dict[Any, Converter] | None = None) -> None:
        self._lock = threading.RLock()
        self._converters: dict[Any, Converter] = (
            standard_converters() if converters is None else dict(converters)
        )
        self._version = 0

    @classmethod
    def empty(cls) -> "ConverterRegistry":
        """Registry without any converter."""
        return cls({})

    @property
    def version(self) -> int:
        return self._version

    def register(self, value_type: Any, converter: Converter | None) -> "ConverterRegistry":
        """Register ``converter`` for ``value_type``; no-op if either is None."""
        if value_type is None or converter is None:
            return self
        with self._lock:
            replaced = value_type in self._converters
            self._converters[value_type] = converter
            self._version += 1
        logger.debug(
            "%s converter for %s: %r",
            "Replaced" if replaced else "Registered",
            type_name(value_type),
            converter,
        )
        return self

    def lookup(self, value_type: Any) -> Converter | None:
        """Find the converter for a declared type.

        Exact match first; Enum subclasses without their own entry use the
        converter registered for ``enum.Enum``.
        """
        if value_type is None:
            return None
        with self._lock:
            try:
                converter = self._converters.get(value_type)
            except TypeError:
                # unhashable annotation
                return None
            if converter is None and isinstance(value_type, type) and issubclass(value_type, Enum):
                converter = self._converters.get(Enum)
            return converter

    def copy(self) -> "ConverterRegistry":
        """Independent snapshot; later registrations on either side are not shared."""
        with self._lock:
            return ConverterRegistry(self._converters)

    def types(self) -> list[Any]:
        with self._lock:
            return list(self._converters)

    def __contains__(self, value_type: object) -> bool:
        with self._lock:
            return value_type in self._converters

    def __len__(self) -> int:
        with self._lock:
            return len(self._converters)
