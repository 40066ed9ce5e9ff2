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

"""Value converters: turn configuration text into typed values.

Each converter parses text for one semantic type. Converters that carry a
fallback value (the numeric ones) never fail on bad input: a malformed
supplied value degrades to the default text, and a malformed default text
degrades to the fallback. Converters without a fallback (enums, resource
locators and, unless configured otherwise, custom converters) treat a
malformed value as an injection failure.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from decimal import Decimal
from enum import Enum
import ipaddress
import logging
import math
from pathlib import Path
import re
import struct
from typing import Any
from urllib.parse import urlsplit

from pydantic import AnyUrl, IPvAnyAddress, TypeAdapter

from .exceptions import ConversionError, InvalidPropertyValueError
from .targets import AssignmentTarget
from .value_types import (
    INT32_RANGE,
    INT64_RANGE,
    Float32,
    Float64,
    Int32,
    Int64,
    Uri,
    type_name,
)

logger = logging.getLogger(__name__)

_NO_FALLBACK = object()

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_FLOATS = {"NaN", "Infinity", "+Infinity", "-Infinity"}
_URI_PATTERN = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*")
_PERCENT_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)
_IP_ADAPTER: TypeAdapter[Any] = TypeAdapter(IPvAnyAddress)


class Converter(ABC):
    """Parses text for one value type and writes the result to a target.

    Subclasses implement ``parse``; raising ``ConversionError`` signals
    malformed text. Passing ``fallback`` enables the lenient chain used by
    the numeric converters.
    """

    def __init__(self, fallback: Any = _NO_FALLBACK) -> None:
        self._fallback = fallback

    @property
    def has_fallback(self) -> bool:
        return self._fallback is not _NO_FALLBACK

    @property
    def fallback(self) -> Any:
        """Value used when neither the supplied nor the default text parses."""
        if not self.has_fallback:
            raise AttributeError(f"{type(self).__name__} has no fallback value")
        return self._fallback

    @abstractmethod
    def parse(self, text: str, value_type: Any) -> Any:
        """Parse ``text`` as ``value_type``.

        Raises:
            ConversionError: If the text is not a valid literal
        """

    def convert(
        self,
        text: str | None,
        default_text: str,
        value_type: Any,
        key: str,
        log_level: int = logging.WARNING,
    ) -> Any:
        """Resolve the value to inject for one property.

        Args:
            text: Text supplied by the value source, or None if absent
            default_text: The property's declared default
            value_type: Declared type of the property
            key: Property key, for diagnostics
            log_level: Level used when a value degrades to a default/fallback

        Returns:
            The parsed value, the parsed default, or the fallback value

        Raises:
            InvalidPropertyValueError: If no usable value exists and the
                converter has no fallback
        """
        if text is not None:
            try:
                return self.parse(text, value_type)
            except ConversionError as e:
                if not self.has_fallback:
                    raise InvalidPropertyValueError(key, text, type_name(value_type), e) from e
                logger.log(
                    log_level,
                    "Invalid value %r for property '%s', using default %r: %s",
                    text,
                    key,
                    default_text,
                    e,
                )

        try:
            return self.parse(default_text, value_type)
        except ConversionError as e:
            if not self.has_fallback:
                raise InvalidPropertyValueError(
                    key, default_text, type_name(value_type), e
                ) from e
            logger.log(
                log_level,
                "Invalid default %r for property '%s', using fallback %r",
                default_text,
                key,
                self._fallback,
            )
            return self._fallback

    def inject(
        self,
        instance: Any,
        target: AssignmentTarget,
        text: str | None,
        default_text: str,
        value_type: Any,
        key: str,
        log_level: int = logging.WARNING,
    ) -> None:
        """Convert and assign one property; field and setter targets share parsing."""
        value = self.convert(text, default_text, value_type, key, log_level)
        target.assign(instance, value, key)

    def __repr__(self) -> str:
        if self.has_fallback:
            return f"{type(self).__name__}(fallback={self._fallback!r})"
        return f"{type(self).__name__}()"


class ParsingConverter(Converter):
    """Converter built from a plain parse function.

    ``ValueError``, ``TypeError`` and ``ArithmeticError`` raised by the
    function are reported as conversion failures.
    """

    def __init__(
        self,
        parse_function: Callable[[str], Any],
        label: str | None = None,
        fallback: Any = _NO_FALLBACK,
    ) -> None:
        super().__init__(fallback)
        self.parse_function = parse_function
        self.label = label or getattr(parse_function, "__name__", "value")

    def parse(self, text: str, value_type: Any) -> Any:
        try:
            return self.parse_function(text)
        except (ValueError, TypeError, ArithmeticError) as e:
            raise ConversionError(text, self.label, str(e)) from e


class NumericConverter(ParsingConverter):
    """Numeric converter with a fallback value (``zero`` unless overridden)."""

    def __init__(
        self,
        parse_function: Callable[[str], Any],
        zero: Any,
        label: str | None = None,
        fallback: Any = None,
    ) -> None:
        super().__init__(parse_function, label, zero if fallback is None else fallback)
        self.zero = zero


class BooleanConverter(Converter):
    """``"true"`` in any case is True; everything else is False."""

    def __init__(self) -> None:
        super().__init__(False)

    def parse(self, text: str, value_type: Any) -> bool:
        return text.lower() == "true"


class StringConverter(Converter):
    def __init__(self) -> None:
        super().__init__("")

    def parse(self, text: str, value_type: Any) -> str:
        return text


class EnumConverter(Converter):
    """Matches the exact, case-sensitive member name of the declared enum."""

    def parse(self, text: str, value_type: Any) -> Enum:
        if not (isinstance(value_type, type) and issubclass(value_type, Enum)):
            raise ConversionError(text, type_name(value_type), "declared type is not an enum")
        try:
            return value_type[text]
        except KeyError as e:
            names = ", ".join(value_type.__members__)
            raise ConversionError(
                text, type_name(value_type), f"expected one of: {names}"
            ) from e


def parse_integer(text: str) -> int:
    """Strict base-10 integer: optional sign and ASCII digits only."""
    if not _INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"{text!r} is not a base-10 integer")
    return int(text)


def _bounded_integer(bounds: tuple[int, int], label: str) -> Callable[[str], int]:
    low, high = bounds

    def parse(text: str) -> int:
        value = parse_integer(text)
        if not low <= value <= high:
            raise ValueError(f"{value} is out of range for {label}")
        return value

    parse.__name__ = label
    return parse


parse_int32 = _bounded_integer(INT32_RANGE, "Int32")
parse_int64 = _bounded_integer(INT64_RANGE, "Int64")


def parse_float(text: str) -> float:
    """Plain decimal or scientific literal, or one of ``NaN``, ``[+-]Infinity``."""
    if text not in _SPECIAL_FLOATS and not _DECIMAL_PATTERN.fullmatch(text):
        raise ValueError(f"{text!r} is not a decimal floating point literal")
    return float(text)


def parse_float32(text: str) -> float:
    """Parse as double, then round to the nearest single precision value."""
    value = parse_float(text)
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def parse_decimal(text: str) -> Decimal:
    if not _DECIMAL_PATTERN.fullmatch(text):
        raise ValueError(f"{text!r} is not a finite decimal literal")
    return Decimal(text)


def parse_url(text: str) -> AnyUrl:
    return _URL_ADAPTER.validate_python(text)


def parse_uri(text: str) -> str:
    """Validate an RFC 3986 URI reference and return it unchanged."""
    if not _URI_PATTERN.fullmatch(text):
        raise ValueError(f"{text!r} contains characters not allowed in a URI")
    if _PERCENT_PATTERN.search(text):
        raise ValueError(f"{text!r} contains a malformed percent escape")
    # urlsplit rejects unbalanced IPv6 brackets, .port rejects bad ports
    _ = urlsplit(text).port
    return Uri(text)


def parse_path(text: str) -> Path:
    """Any text without NUL; the empty string is the current directory."""
    if "\x00" in text:
        raise ValueError("path contains a NUL character")
    return Path(text)


def parse_ip_address(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    return _IP_ADAPTER.validate_python(text.strip())


def standard_converters() -> dict[Any, Converter]:
    """Build a fresh copy of the built-in converter table.

    Returns:
        Mapping from declared type to converter. ``int`` is unbounded,
        ``Int32``/``Int64`` are range checked; ``float`` and ``Float64`` are
        double precision, ``Float32`` is rounded to single precision.
    """
    integer = NumericConverter(parse_integer, 0, "int")
    double = NumericConverter(parse_float, 0.0, "float")
    return {
        bool: BooleanConverter(),
        str: StringConverter(),
        int: integer,
        Int32: NumericConverter(parse_int32, 0, "Int32"),
        Int64: NumericConverter(parse_int64, 0, "Int64"),
        float: double,
        Float64: NumericConverter(parse_float, 0.0, "Float64"),
        Float32: NumericConverter(parse_float32, 0.0, "Float32"),
        Decimal: NumericConverter(parse_decimal, Decimal(0), "Decimal"),
        Enum: EnumConverter(),
        AnyUrl: ParsingConverter(parse_url, "AnyUrl"),
        Uri: ParsingConverter(parse_uri, "Uri"),
        Path: ParsingConverter(parse_path, "Path"),
        IPvAnyAddress: ParsingConverter(parse_ip_address, "IPvAnyAddress"),
        ipaddress.IPv4Address: ParsingConverter(ipaddress.IPv4Address, "IPv4Address"),
        ipaddress.IPv6Address: ParsingConverter(ipaddress.IPv6Address, "IPv6Address"),
    }
