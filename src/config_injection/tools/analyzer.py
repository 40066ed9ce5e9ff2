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

"""Compare a configuration against the properties declared by a set of classes."""

from collections.abc import Iterable, Mapping
from typing import Any

from ..catalog import collect_properties, collect_referenced_properties


class PropertyAnalyzer:
    """Find declared keys missing from a configuration, and unknown keys in it.

    Args:
        *classes: Classes declaring configuration properties
        follow_modules: Also include classes referenced through ``ConfigModule``
    """

    def __init__(self, *classes: type, follow_modules: bool = False) -> None:
        self.classes = list(classes)
        self.follow_modules = follow_modules

    @classmethod
    def for_classes(cls, classes: Iterable[type], follow_modules: bool = False) -> "PropertyAnalyzer":
        return cls(*classes, follow_modules=follow_modules)

    def declared_keys(self) -> list[str]:
        collect = collect_referenced_properties if self.follow_modules else collect_properties
        return list(dict.fromkeys(p.key for p in collect(*self.classes)))

    def find_missing(self, conf: Mapping[Any, Any], prefix: str = "") -> list[str]:
        """Declared keys (without prefix) absent from ``conf``, in declaration order."""
        return [key for key in self.declared_keys() if prefix + key not in conf]

    def find_extra(self, conf: Mapping[Any, Any], prefix: str = "") -> list[str]:
        """String keys of ``conf`` that no class declares, sorted."""
        declared = {prefix + key for key in self.declared_keys()}
        return sorted(key for key in conf if isinstance(key, str) and key not in declared)
