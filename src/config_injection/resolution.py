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

"""Property discovery and resolution.

Discovery turns a class into an ordered table of ``PropertyDescriptor``
records; resolution pairs each descriptor with a converter from a registry.
Resolution is the expensive step and is meant to run once per target type:
the resulting ``ResolvedPropertySet`` is immutable and safe to share between
threads and injections.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
import inspect
import logging
import threading
from typing import Any, get_type_hints

from .converters import Converter
from .declarations import ConfigProperty, property_of
from .registry import ConverterRegistry
from .targets import AssignmentTarget, FieldTarget, SetterTarget
from .value_types import type_name, unwrap_optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyDescriptor:
    """Static metadata for one configuration property.

    Attributes:
        key: Lookup key in the value source (before prefixing)
        default_value: Text used when the key is absent or unusable
        description: Free text for documentation
        declared_type: Type used to select a converter
        target: Field or setter receiving the value
        owner: Class declaring the member, None for hand-built tables
    """

    key: str
    default_value: str
    description: str
    declared_type: Any
    target: AssignmentTarget
    owner: type | None = None

    @classmethod
    def from_declaration(
        cls,
        declaration: ConfigProperty,
        declared_type: Any,
        target: AssignmentTarget,
        owner: type | None = None,
    ) -> "PropertyDescriptor":
        return cls(
            key=declaration.key,
            default_value=declaration.default,
            description=declaration.description,
            declared_type=declared_type,
            target=target,
            owner=owner,
        )

    @property
    def type_name(self) -> str:
        return type_name(self.declared_type)


@dataclass(frozen=True)
class ResolvedProperty:
    """A descriptor paired with the converter that injects it."""

    descriptor: PropertyDescriptor
    converter: Converter

    @property
    def key(self) -> str:
        return self.descriptor.key


class ResolvedPropertySet:
    """Ordered, immutable result of resolving one target type."""

    __slots__ = ("_properties", "target_type")

    def __init__(self, target_type: type | None, properties: Iterable[ResolvedProperty]) -> None:
        self.target_type = target_type
        self._properties = tuple(properties)

    def __iter__(self) -> Iterator[ResolvedProperty]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __getitem__(self, index: int) -> ResolvedProperty:
        return self._properties[index]

    def keys(self) -> list[str]:
        return [rp.key for rp in self._properties]

    def metadata(self) -> list[dict[str, str]]:
        """Key, description, type and default of every resolved property, in order."""
        return [
            {
                "key": rp.descriptor.key,
                "description": rp.descriptor.description,
                "declared_type": rp.descriptor.type_name,
                "default_value": rp.descriptor.default_value,
            }
            for rp in self._properties
        ]

    def __repr__(self) -> str:
        owner = self.target_type.__name__ if self.target_type else "<table>"
        return f"ResolvedPropertySet({owner}, keys={self.keys()})"


def _class_members(target_type: type) -> dict[str, tuple[type, Any]]:
    """Members along the MRO, base classes first; subclasses override in place."""
    members: dict[str, tuple[type, Any]] = {}
    for klass in reversed(target_type.__mro__):
        if klass is object:
            continue
        for name, member in vars(klass).items():
            members[name] = (klass, member)
    return members


def _field_types(target_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(target_type)
    except (NameError, TypeError) as e:
        logger.debug(
            "Could not evaluate annotations of %s (%s), using raw annotations",
            target_type.__qualname__,
            e,
        )
        annotations: dict[str, Any] = {}
        for klass in reversed(target_type.__mro__):
            annotations.update(vars(klass).get("__annotations__", {}))
        return annotations


def _setter_type(func: Any) -> tuple[bool, Any]:
    """Return (eligible, declared type) for a decorated setter."""
    try:
        parameters = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError):
        return False, None
    # drop self
    parameters = parameters[1:]
    if len(parameters) != 1 or parameters[0].kind not in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        return False, None

    parameter = parameters[0]
    try:
        hints = get_type_hints(func)
    except (NameError, TypeError):
        hints = getattr(func, "__annotations__", {})
    declared = hints.get(parameter.name, parameter.annotation)
    if declared is inspect.Parameter.empty:
        declared = None
    return True, declared


def discover_properties(target_type: type) -> list[PropertyDescriptor]:
    """Build the descriptor table of a class.

    Fields (class attributes holding a ``ConfigProperty``) come first, then
    setters (methods decorated with a ``ConfigProperty``), each in declaration
    order. Setters must take exactly one argument besides ``self``; others are
    skipped. ``Optional[X]`` annotations are treated as ``X``.

    Args:
        target_type: Class to inspect

    Returns:
        Descriptors in resolution order
    """
    members = _class_members(target_type)
    field_types = _field_types(target_type)

    fields: list[PropertyDescriptor] = []
    setters: list[PropertyDescriptor] = []

    for name, (owner, member) in members.items():
        if isinstance(member, ConfigProperty):
            declared = unwrap_optional(field_types.get(name))
            fields.append(
                PropertyDescriptor.from_declaration(member, declared, FieldTarget(name), owner)
            )
            continue

        declaration = property_of(member) if inspect.isfunction(member) else None
        if declaration is None:
            continue
        eligible, declared = _setter_type(member)
        if not eligible:
            logger.debug(
                "Skipping %s.%s: property setters take exactly one argument",
                owner.__qualname__,
                name,
            )
            continue
        setters.append(
            PropertyDescriptor.from_declaration(
                declaration, unwrap_optional(declared), SetterTarget(name), owner
            )
        )

    return fields + setters


def resolve_properties(
    target_type: type | None,
    registry: ConverterRegistry,
    descriptors: Sequence[PropertyDescriptor] | None = None,
) -> ResolvedPropertySet:
    """Pair every descriptor with a converter.

    Descriptors whose declared type has no converter are skipped: the owning
    object is responsible for initializing them.

    Args:
        target_type: Class to resolve; may be None when ``descriptors`` is given
        registry: Registry to look converters up in
        descriptors: Explicit descriptor table replacing discovery

    Returns:
        The resolved property set
    """
    if descriptors is None:
        if target_type is None:
            raise ValueError("Either target_type or descriptors is required")
        descriptors = discover_properties(target_type)

    resolved = []
    for descriptor in descriptors:
        converter = registry.lookup(descriptor.declared_type)
        if converter is None:
            logger.debug(
                "No converter for property '%s' of type %s, skipping",
                descriptor.key,
                descriptor.type_name,
            )
            continue
        resolved.append(ResolvedProperty(descriptor, converter))

    return ResolvedPropertySet(target_type, resolved)


class ResolutionCache:
    """Per-type cache of resolved sets for one registry.

    Entries are rebuilt when the registry version changes, so per-call
    engines sharing a cache pay the resolution cost only once per type.
    """

    def __init__(self, registry: ConverterRegistry | None = None) -> None:
        self.registry = registry or ConverterRegistry()
        self._lock = threading.Lock()
        self._entries: dict[type, tuple[int, ResolvedPropertySet]] = {}

    def get(self, target_type: type) -> ResolvedPropertySet:
        version = self.registry.version
        with self._lock:
            entry = self._entries.get(target_type)
            if entry is not None and entry[0] == version:
                return entry[1]
            resolved = resolve_properties(target_type, self.registry)
            self._entries[target_type] = (version, resolved)
            return resolved

    def invalidate(self, target_type: type | None = None) -> None:
        with self._lock:
            if target_type is None:
                self._entries.clear()
            else:
                self._entries.pop(target_type, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
