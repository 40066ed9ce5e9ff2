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

"""Assignment targets: where an injected value is written."""

from abc import ABC, abstractmethod
from typing import Any

from .exceptions import InjectionError, PropertyAccessError


class AssignmentTarget(ABC):
    """A member of the target object that accepts a typed value."""

    kind = "member"

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def assign(self, instance: Any, value: Any, key: str) -> None:
        """Write ``value`` to this member of ``instance``.

        Raises:
            PropertyAccessError: If the member cannot be written
            InjectionError: If a setter rejects the value
        """

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.name == other.name  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class FieldTarget(AssignmentTarget):
    """Instance attribute written with ``setattr``.

    Name-mangled private attributes are addressed by their mangled name
    (``_Owner__name``), which is the name recorded at discovery time.
    """

    kind = "field"

    def assign(self, instance: Any, value: Any, key: str) -> None:
        try:
            setattr(instance, self.name, value)
        except (AttributeError, TypeError) as e:
            # read-only properties, __slots__ without the name, frozen dataclasses
            raise PropertyAccessError(key, self.name, e) from e
        except Exception as e:
            # __setattr__ guards and validating models
            raise InjectionError(
                key,
                f"Write to '{self.name}' rejected for property '{key}': {e}",
                f"Configuration value for '{key}' was rejected",
                e,
            ) from e

    def read(self, instance: Any) -> Any:
        return getattr(instance, self.name)


class SetterTarget(AssignmentTarget):
    """Single-argument method invoked with the value."""

    kind = "setter"

    def assign(self, instance: Any, value: Any, key: str) -> None:
        try:
            setter = getattr(instance, self.name)
        except AttributeError as e:
            raise PropertyAccessError(key, self.name, e) from e
        if not callable(setter):
            raise PropertyAccessError(key, self.name)

        try:
            setter(value)
        except Exception as e:
            raise InjectionError(
                key,
                f"Setter '{self.name}' failed for property '{key}': {e}",
                f"Configuration value for '{key}' was rejected",
                e,
            ) from e
