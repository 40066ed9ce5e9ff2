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

"""Injection of resolved properties into an instance."""

from collections.abc import Mapping
import logging
from typing import Any

from .resolution import ResolvedPropertySet

logger = logging.getLogger(__name__)


def value_text(raw: Any, coerce_non_string_values: bool) -> str | None:
    """Candidate text for a raw source value.

    Strings are used as-is. Other non-None values are stringified with
    ``str()`` when coercion is enabled and ignored otherwise.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    if coerce_non_string_values:
        return str(raw)
    return None


def inject(
    instance: Any,
    source: Mapping[Any, Any],
    resolved: ResolvedPropertySet,
    prefix: str = "",
    *,
    coerce_non_string_values: bool = True,
    log_fallbacks: bool = True,
) -> None:
    """Inject every resolved property of ``instance`` from ``source``.

    For each property the value at ``prefix + key`` is used when present and
    usable, otherwise the declared default text. Numeric converters degrade to
    their fallback value when the default does not parse either.

    Args:
        instance: Object receiving the values
        source: Flat mapping of configuration keys to values
        resolved: Resolved property set of the instance's type
        prefix: String prepended to every key before lookup
        coerce_non_string_values: Stringify non-string source values instead
            of ignoring them
        log_fallbacks: Log degraded values at WARNING (DEBUG otherwise)

    Raises:
        InjectionError: If a member cannot be written or a property without a
            fallback has no valid value
    """
    log_level = logging.WARNING if log_fallbacks else logging.DEBUG
    for rp in resolved:
        descriptor = rp.descriptor
        raw = source.get(prefix + descriptor.key)
        text = value_text(raw, coerce_non_string_values)
        if raw is not None and text is None:
            logger.debug(
                "Ignoring non-string value of type %s for property '%s'",
                type(raw).__name__,
                descriptor.key,
            )
        rp.converter.inject(
            instance,
            descriptor.target,
            text,
            descriptor.default_value,
            descriptor.declared_type,
            descriptor.key,
            log_level,
        )
