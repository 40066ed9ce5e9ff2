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

"""Injection engine: one target type, one registry, one prefix.

An engine resolves its target type lazily (or eagerly on request) and then
injects any number of instances. Registration and prefix changes are
serialized by a per-engine lock; ``inject`` takes a consistent snapshot under
the lock and performs the writes outside of it, so concurrent injections on
different instances do not contend.

Typical use from a constructor:

    _ENGINE = InjectionEngine(ServerConfig)

    class ServerConfig:
        port: int = ConfigProperty("port", default="8080")

        def __init__(self, conf):
            _ENGINE.inject(self, conf)
"""

from collections.abc import Callable, Mapping, Sequence
import logging
import threading
from typing import Any

from .config.schema import InjectionSettings
from .converters import Converter
from .exceptions import ConfigurationError
from .injector import inject
from .registry import ConverterRegistry
from .resolution import (
    PropertyDescriptor,
    ResolutionCache,
    ResolvedPropertySet,
    resolve_properties,
)
from .targets import FieldTarget

logger = logging.getLogger(__name__)


def _render(value: Any) -> str:
    # bool defaults are declared as "true"/"false"
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


class InjectionEngine:
    """Configuration injector for a single target type.

    Args:
        target_type: Class whose declared properties are injected
        registry: Registry to copy converters from (standard set if None)
        prefix: String prepended to every key
        coerce_non_string_values: Stringify non-string source values
        eager: Resolve immediately instead of on first injection
        descriptors: Explicit descriptor table used instead of discovery
        cache: Shared resolution cache; its registry is used directly, so
            ``registry`` must not be given as well
        log_fallbacks: Log degraded values at WARNING (DEBUG otherwise)
    """

    def __init__(
        self,
        target_type: type,
        registry: ConverterRegistry | None = None,
        prefix: str = "",
        *,
        coerce_non_string_values: bool = True,
        eager: bool = False,
        descriptors: Sequence[PropertyDescriptor] | None = None,
        cache: ResolutionCache | None = None,
        log_fallbacks: bool = True,
    ) -> None:
        self._lock = threading.RLock()
        self.target_type = target_type
        self._cache = cache
        if cache is not None:
            if registry is not None:
                raise ConfigurationError(
                    "InjectionEngine accepts either a registry or a cache, not both",
                    "Invalid injection engine configuration",
                    recovery_suggestion="Register converters on the cache's registry instead",
                )
            self._registry = cache.registry
        else:
            self._registry = registry.copy() if registry is not None else ConverterRegistry()
        self._descriptors = tuple(descriptors) if descriptors is not None else None
        self._prefix = prefix or ""
        self._coerce = coerce_non_string_values
        self._log_fallbacks = log_fallbacks
        self._resolved: ResolvedPropertySet | None = None
        self._dirty = True

        if eager:
            self.resolve()

    @classmethod
    def from_settings(
        cls,
        target_type: type,
        settings: InjectionSettings,
        registry: ConverterRegistry | None = None,
    ) -> "InjectionEngine":
        """Create an engine configured by ``InjectionSettings``."""
        return cls(
            target_type,
            registry,
            settings.prefix,
            coerce_non_string_values=settings.coerce_non_string_values,
            eager=settings.eager_resolution,
            log_fallbacks=settings.log_fallbacks,
        )

    @property
    def prefix(self) -> str:
        with self._lock:
            return self._prefix

    @prefix.setter
    def prefix(self, prefix: str) -> None:
        self.with_prefix(prefix)

    def with_prefix(self, prefix: str | None) -> "InjectionEngine":
        """Set the key prefix; the resolved set stays valid."""
        with self._lock:
            self._prefix = prefix or ""
        return self

    @property
    def registry(self) -> ConverterRegistry:
        return self._registry

    def register(self, value_type: Any, converter: Converter | None) -> "InjectionEngine":
        """Register a converter for this engine and force re-resolution.

        No-op if either argument is None.
        """
        if value_type is None or converter is None:
            return self
        with self._lock:
            self._registry.register(value_type, converter)
            self._dirty = True
        logger.info("Registered converter %r on engine for %s", converter, self._owner_name())
        return self

    def resolve(self) -> ResolvedPropertySet:
        """Resolve the target type now, or return the cached result."""
        with self._lock:
            if self._cache is not None and self._descriptors is None:
                # the cache tracks registry versions itself
                self._resolved = self._cache.get(self.target_type)
                self._dirty = False
                return self._resolved
            if self._dirty or self._resolved is None:
                self._resolved = resolve_properties(
                    self.target_type, self._registry, self._descriptors
                )
                self._dirty = False
                logger.info(
                    "Resolved %d properties for %s",
                    len(self._resolved),
                    self._owner_name(),
                )
            return self._resolved

    @property
    def properties(self) -> ResolvedPropertySet:
        return self.resolve()

    def inject(self, instance: Any, source: Mapping[Any, Any]) -> None:
        """Inject the configuration in ``source`` into ``instance``.

        Raises:
            InjectionError: If a member cannot be written or a property
                without a fallback has no valid value
        """
        with self._lock:
            resolved = self.resolve()
            prefix = self._prefix
            coerce = self._coerce
            log_fallbacks = self._log_fallbacks
        inject(
            instance,
            source,
            resolved,
            prefix,
            coerce_non_string_values=coerce,
            log_fallbacks=log_fallbacks,
        )

    def describe(self, instance: Any) -> str:
        """Render the injected values of ``instance`` next to their defaults."""
        lines = []
        for rp in self.resolve():
            descriptor = rp.descriptor
            target = descriptor.target
            if isinstance(target, FieldTarget):
                try:
                    value = _render(target.read(instance))
                except AttributeError:
                    value = "[unknown - not injected]"
            else:
                value = "[unknown - setter property]"
            line = f"{descriptor.key} = "
            if value != descriptor.default_value:
                line += f"{value} "
            line += f"[default value = {descriptor.default_value}]"
            lines.append(line)
        return "".join(f"{line}\n" for line in lines)

    def _owner_name(self) -> str:
        return getattr(self.target_type, "__qualname__", str(self.target_type))

    def __str__(self) -> str:
        return "".join(
            f"{{ key : {rp.descriptor.key} }} "
            f"{{ description : {rp.descriptor.description} }} "
            f"{{ type : {rp.descriptor.type_name} }} "
            f"{{ default : {rp.descriptor.default_value} }}\n"
            for rp in self.resolve()
        )

    def __repr__(self) -> str:
        return f"InjectionEngine({self._owner_name()}, prefix={self.prefix!r})"


class ThreadLocalEngine:
    """One engine per thread, built on first use by ``factory``.

    Trades memory for lock-free injection under high construction
    throughput; each thread may also set its own prefix.
    """

    def __init__(self, factory: Callable[[], InjectionEngine]) -> None:
        self._factory = factory
        self._local = threading.local()

    def get(self) -> InjectionEngine:
        engine = getattr(self._local, "engine", None)
        if engine is None:
            engine = self._factory()
            self._local.engine = engine
        return engine

    def inject(self, instance: Any, source: Mapping[Any, Any]) -> None:
        self.get().inject(instance, source)
