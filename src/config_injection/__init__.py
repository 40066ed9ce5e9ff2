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

"""Configuration injection.

Populate annotated fields and setters of a class from a flat key/value
source, with per-type parsing, default-value fallback and key prefixes.

    class ServerConfig:
        host: str = ConfigProperty("host", default="localhost")
        port: int = ConfigProperty("port", default="8080", description="Listen port")

    engine = InjectionEngine(ServerConfig, prefix="server.")
    config = ServerConfig()
    engine.inject(config, {"server.port": "9000"})

The library logs through the standard ``logging`` module under the
``config_injection`` logger and never installs handlers.
"""

import logging

from .catalog import collect_properties, collect_referenced_properties, declared_keys
from .config import InjectionSettings, SettingsLoader, load_settings
from .converters import (
    BooleanConverter,
    Converter,
    EnumConverter,
    NumericConverter,
    ParsingConverter,
    StringConverter,
    standard_converters,
)
from .declarations import ConfigModule, ConfigProperty
from .engine import InjectionEngine, ThreadLocalEngine
from .exceptions import (
    ConfigurationError,
    ConversionError,
    InjectionError,
    InvalidPropertyValueError,
    PropertyAccessError,
    PropertyInjectionError,
)
from .injector import inject
from .registry import ConverterRegistry
from .resolution import (
    PropertyDescriptor,
    ResolutionCache,
    ResolvedProperty,
    ResolvedPropertySet,
    discover_properties,
    resolve_properties,
)
from .sources import load_properties, parse_properties
from .targets import AssignmentTarget, FieldTarget, SetterTarget
from .value_types import Float32, Float64, Int32, Int64, Uri

__all__ = [
    "AssignmentTarget",
    "BooleanConverter",
    "ConfigModule",
    "ConfigProperty",
    "ConfigurationError",
    "ConversionError",
    "Converter",
    "ConverterRegistry",
    "EnumConverter",
    "FieldTarget",
    "Float32",
    "Float64",
    "InjectionEngine",
    "InjectionError",
    "InjectionSettings",
    "Int32",
    "Int64",
    "InvalidPropertyValueError",
    "NumericConverter",
    "ParsingConverter",
    "PropertyAccessError",
    "PropertyDescriptor",
    "PropertyInjectionError",
    "ResolutionCache",
    "ResolvedProperty",
    "ResolvedPropertySet",
    "SetterTarget",
    "SettingsLoader",
    "StringConverter",
    "ThreadLocalEngine",
    "Uri",
    "collect_properties",
    "collect_referenced_properties",
    "declared_keys",
    "discover_properties",
    "inject",
    "load_properties",
    "load_settings",
    "parse_properties",
    "resolve_properties",
    "standard_converters",
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
