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

"""Aggregation of declared properties across classes and modules.

These helpers report every declared property, whether or not a converter
exists for its type, so documentation and analysis tools see the full
configuration surface.
"""

from collections.abc import Iterable
import logging

from .declarations import module_of
from .resolution import PropertyDescriptor, discover_properties

logger = logging.getLogger(__name__)


def _unique(classes: Iterable[type]) -> list[type]:
    seen: dict[type, None] = {}
    for cls in classes:
        seen.setdefault(cls, None)
    return list(seen)


def collect_properties(*classes: type) -> list[PropertyDescriptor]:
    """Declared properties of the given classes, in class then declaration order."""
    properties: list[PropertyDescriptor] = []
    for cls in _unique(classes):
        properties.extend(discover_properties(cls))
    return properties


def collect_referenced_properties(*classes: type) -> list[PropertyDescriptor]:
    """Declared properties of the classes and of everything their modules reference.

    ``ConfigModule.refs`` is followed transitively; each class is visited once,
    so reference cycles terminate.
    """
    properties: list[PropertyDescriptor] = []
    visited: set[type] = set()
    for cls in _unique(classes):
        _collect_referenced(cls, visited, properties)
    return properties


def _collect_referenced(
    cls: type,
    visited: set[type],
    properties: list[PropertyDescriptor],
) -> None:
    if cls in visited:
        return
    visited.add(cls)
    properties.extend(discover_properties(cls))

    module = module_of(cls)
    if module is None:
        return
    for ref in module.refs:
        if ref not in visited:
            logger.debug("Following module reference %s -> %s", cls.__qualname__, ref.__qualname__)
            _collect_referenced(ref, visited, properties)


def declared_keys(*classes: type) -> list[str]:
    """Unique property keys declared by the classes, first occurrence order."""
    return list(dict.fromkeys(p.key for p in collect_properties(*classes)))
