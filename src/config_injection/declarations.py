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

"""Declarations that mark class members as configuration properties.

A ``ConfigProperty`` is used either as an annotated class attribute (the
value is written to the instance attribute of the same name) or as a
decorator on a setter taking exactly one argument besides ``self``:

    class ServerConfig:
        host: str = ConfigProperty("server.host", default="localhost")
        port: int = ConfigProperty("server.port", default="8080", description="Listen port")

        @ConfigProperty("server.banner", default="hello")
        def set_banner(self, banner: str) -> None:
            self._banner = banner.upper()

``ConfigModule`` groups classes so tools can aggregate the properties of a
whole component graph.
"""

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from .exceptions import ConfigurationError

PROPERTY_ATTRIBUTE = "__config_property__"
MODULE_ATTRIBUTE = "__config_module__"

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)


class ConfigProperty:
    """Configuration property declaration.

    Attributes:
        key: Lookup key in the value source (before any prefix)
        default: Default value text used when the key is absent or unusable
        description: Free text used for documentation and templates
        name: Member name, recorded when the declaration is bound to a class
    """

    __slots__ = ("default", "description", "key", "name")

    def __init__(self, key: str, default: str = "", description: str = "") -> None:
        if not isinstance(key, str) or not key:
            raise ConfigurationError(
                f"Property key must be a non-empty string, got {key!r}",
                "Invalid configuration property declaration",
                recovery_suggestion="Declare every property with a non-empty key",
            )
        self.key = key
        self.default = "" if default is None else str(default)
        self.description = description or ""
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        # Injected values live in the instance __dict__ and shadow this descriptor
        raise AttributeError(
            f"{type(instance).__name__}.{self.name} has not been injected "
            f"(property '{self.key}')",
        )

    def __call__(self, func: F) -> F:
        """Mark ``func`` as a setter for this property."""
        self.name = func.__name__
        setattr(func, PROPERTY_ATTRIBUTE, self)
        return func

    def __repr__(self) -> str:
        return (
            f"ConfigProperty(key={self.key!r}, default={self.default!r}, "
            f"description={self.description!r})"
        )


class ConfigModule:
    """Group declaration referencing other configuration classes.

    ``refs`` is either an iterable of classes or a zero-argument callable
    returning one, so that modules can reference classes defined later
    (including each other).
    """

    def __init__(
        self,
        description: str = "",
        refs: Iterable[type] | Callable[[], Iterable[type]] = (),
    ) -> None:
        self.description = description
        self._refs = refs

    @property
    def refs(self) -> tuple[type, ...]:
        refs = self._refs() if callable(self._refs) else self._refs
        return tuple(refs)

    def __call__(self, cls: C) -> C:
        setattr(cls, MODULE_ATTRIBUTE, self)
        return cls


def property_of(member: Any) -> ConfigProperty | None:
    """Return the declaration attached to a class member, if any."""
    if isinstance(member, ConfigProperty):
        return member
    declaration = getattr(member, PROPERTY_ATTRIBUTE, None)
    return declaration if isinstance(declaration, ConfigProperty) else None


def module_of(cls: type) -> ConfigModule | None:
    """Return the module declaration of ``cls`` (own, not inherited)."""
    declaration = vars(cls).get(MODULE_ATTRIBUTE)
    return declaration if isinstance(declaration, ConfigModule) else None
