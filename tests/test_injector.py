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

"""
Tests for value resolution and injection.

Tests cover:
- End-to-end injection from string maps
- Default and fallback precedence
- Prefix scoping
- Non-string value coercion policy
- Access failures reported as injection errors
"""

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

import pytest

from config_injection import (
    ConfigProperty,
    ConverterRegistry,
    FieldTarget,
    InjectionError,
    InvalidPropertyValueError,
    PropertyAccessError,
    PropertyDescriptor,
    Uri,
    inject,
    resolve_properties,
)
from config_injection.injector import value_text
from sample_configs import Color, ExampleConfig, ServerConfig, SetterConfig


def _inject(cls, source, prefix="", **kwargs):
    instance = cls.__new__(cls)
    inject(instance, source, resolve_properties(cls, ConverterRegistry()), prefix, **kwargs)
    return instance


class KeyValueConfig:
    string_value: str = ConfigProperty("string_key", default="default")
    long_value: int = ConfigProperty("long_key", default="0")
    double_value: float = ConfigProperty("double_key", default="0.0")


class SlotsConfig:
    __slots__ = ()
    value: str = ConfigProperty("value", default="x")


class ReadOnlyConfig:
    @ConfigProperty("value", default="x")
    def set_value(self, value: str) -> None:
        raise PermissionError("configuration is locked")


class GuardedConfig:
    value: str = ConfigProperty("value", default="x")

    def __setattr__(self, name, value):
        raise PermissionError("writes blocked by policy")


class ValidatingConfig:
    level: int = ConfigProperty("level", default="1")

    def __setattr__(self, name, value):
        if name == "level" and value < 0:
            raise ValueError("level must not be negative")
        super().__setattr__(name, value)


class LocatorConfig:
    log_dir: Path = ConfigProperty("log.dir")
    base_uri: Uri = ConfigProperty("base.uri")


@dataclass(frozen=True)
class FrozenConfig:
    value: str = ConfigProperty("value", default="x")


class StrictConfig:
    color: Color = ConfigProperty("color", default="RED")
    no_default: Color = ConfigProperty("other_color")


class PrivateFields:
    __secret: str = ConfigProperty("secret", default="s3cr3t")

    def reveal(self):
        return self.__secret


class TestEndToEnd:
    """Test the documented end-to-end behavior."""

    def test_inject_values(self):
        """Test injection of a complete string map."""
        config = _inject(
            KeyValueConfig,
            {"string_key": "string_value", "long_key": "10", "double_key": "9.5"},
        )
        assert config.string_value == "string_value"
        assert config.long_value == 10
        assert config.double_value == 9.5

    def test_inject_defaults(self):
        """Test that an empty source yields the parsed defaults."""
        config = _inject(KeyValueConfig, {})
        assert config.string_value == "default"
        assert config.long_value == 0
        assert config.double_value == 0.0

    def test_example_config(self, full_source):
        """Test a class that injects itself from its constructor."""
        config = ExampleConfig(full_source)
        assert config.string_value == "string_value"
        assert config.long_value == 10
        assert config.int_value == 100
        assert config.float_value == pytest.approx(4.5, abs=1e-6)
        assert config.double_value == pytest.approx(9.5, abs=1e-6)
        assert config.optional_double == pytest.approx(5.8, abs=1e-6)
        assert config.custom_value.value == "custom"
        assert config.color is Color.RED

    def test_example_config_defaults(self):
        """Test constructor injection from an empty source."""
        config = ExampleConfig({})
        assert config.string_value == "default"
        assert config.long_value == 0
        assert config.int_value == 0
        assert config.float_value == 0.0
        assert config.double_value == 0.0
        assert config.optional_double == 1.0
        assert config.custom_value.value == "custom_default"
        assert config.color is Color.DEFAULT

    def test_setter_injection(self):
        """Test injection through a setter method."""
        assert SetterConfig({"foo": "value"}).foo == "value"
        assert SetterConfig({}).foo == "default"

    def test_mixed_types(self):
        """Test decimal, path and bool properties."""
        config = _inject(ServerConfig, {"debug": "TRUE", "ratio": "0.5", "data_dir": "/srv"})
        assert config.debug is True
        assert config.ratio == Decimal("0.5")
        assert config.data_dir == Path("/srv")
        assert config.host == "localhost"
        assert config.port == 8080
        assert not hasattr(config, "unsupported")

    def test_private_field(self):
        """Test that name-mangled private fields are writable."""
        assert _inject(PrivateFields, {"secret": "value"}).reveal() == "value"


class TestFallbacks:
    """Test default and fallback precedence."""

    def test_malformed_number_uses_default(self):
        """Test that a malformed number degrades to the default."""
        config = _inject(ServerConfig, {"port": "eighty"})
        assert config.port == 8080

    def test_locators_with_implicit_empty_default(self):
        """Test that path and URI properties without a default inject from an empty source."""
        config = _inject(LocatorConfig, {})
        assert config.log_dir == Path("")
        assert config.base_uri == ""

    def test_padded_float_uses_default(self):
        """Test that grouped or padded float text is malformed."""
        assert _inject(KeyValueConfig, {"double_key": "1_000.5"}).double_value == 0.0
        assert _inject(KeyValueConfig, {"double_key": " 2.5"}).double_value == 0.0

    def test_malformed_default_uses_zero(self):
        """Test that an unparsable default degrades to the converter fallback."""

        class BadDefault:
            port: int = ConfigProperty("port", default="not-a-number")

        assert _inject(BadDefault, {}).port == 0

    def test_enum_mismatch_is_fatal(self):
        """Test that an unknown enum name surfaces as an injection error."""
        with pytest.raises(InvalidPropertyValueError) as exc_info:
            _inject(StrictConfig, {"color": "PURPLE", "other_color": "RED"})
        assert exc_info.value.key == "color"
        assert isinstance(exc_info.value, InjectionError)

    def test_enum_without_default_is_fatal_when_absent(self):
        """Test that an enum with no usable value fails."""
        with pytest.raises(InvalidPropertyValueError) as exc_info:
            _inject(StrictConfig, {})
        assert exc_info.value.key == "other_color"

    def test_enum_injection(self):
        """Test that an exact constant name is injected."""
        config = _inject(StrictConfig, {"color": "GREEN", "other_color": "DEFAULT"})
        assert config.color is Color.GREEN
        assert config.no_default is Color.DEFAULT


class TestPrefix:
    """Test prefix scoping."""

    def test_prefixed_equals_unprefixed(self):
        """Test that prefixed lookup matches the unprefixed result."""
        prefixed = _inject(KeyValueConfig, {"app.long_key": "7"}, "app.")
        plain = _inject(KeyValueConfig, {"long_key": "7"})
        assert prefixed.long_value == plain.long_value == 7

    def test_unprefixed_keys_ignored(self):
        """Test that unprefixed keys are ignored when a prefix is configured."""
        config = _inject(KeyValueConfig, {"long_key": "7"}, "app.")
        assert config.long_value == 0

    def test_setter_prefix(self):
        """Test prefix scoping through a per-call engine."""
        assert SetterConfig({"prefix.foo": "value"}, "prefix.").foo == "value"
        assert SetterConfig({"foo": "value"}, "prefix.").foo == "default"


class TestCoercion:
    """Test the non-string value policy."""

    def test_coerce_non_string_values(self):
        """Test that typed values are stringified by default."""
        config = _inject(KeyValueConfig, {"long_key": 12, "double_key": 2.5})
        assert config.long_value == 12
        assert config.double_value == 2.5

    def test_ignore_non_string_values(self):
        """Test that typed values are ignored when coercion is off."""
        config = _inject(KeyValueConfig, {"long_key": 12}, coerce_non_string_values=False)
        assert config.long_value == 0

    @pytest.mark.parametrize(
        ("raw", "coerce", "expected"),
        [(None, True, None), ("x", False, "x"), (3, True, "3"), (3, False, None), (True, True, "True")],
    )
    def test_value_text(self, raw, coerce, expected):
        """Test candidate text selection."""
        assert value_text(raw, coerce) == expected


class TestAccessFailures:
    """Test that unwritable targets surface as injection errors."""

    def test_slots_without_member(self):
        """Test that a __slots__ class without the member cannot be injected."""
        with pytest.raises(PropertyAccessError) as exc_info:
            _inject(SlotsConfig, {})
        assert exc_info.value.member == "value"
        assert isinstance(exc_info.value.__cause__, AttributeError)

    def test_frozen_dataclass(self):
        """Test that frozen instances reject injection."""
        instance = object.__new__(FrozenConfig)
        resolved = resolve_properties(FrozenConfig, ConverterRegistry())
        with pytest.raises(PropertyAccessError):
            inject(instance, {"value": "y"}, resolved)

    def test_setter_failure_wrapped(self):
        """Test that exceptions raised by setters are wrapped."""
        with pytest.raises(InjectionError) as exc_info:
            _inject(ReadOnlyConfig, {"value": "y"})
        assert isinstance(exc_info.value.original_error, PermissionError)

    def test_read_only_property(self):
        """Test that a table pointing at a read-only property fails on write."""

        class Sealed:
            @property
            def value(self):
                return "fixed"

        resolved = resolve_properties(
            None,
            ConverterRegistry(),
            [PropertyDescriptor("value", "x", "", str, FieldTarget("value"))],
        )
        with pytest.raises(PropertyAccessError):
            inject(Sealed(), {}, resolved)

    def test_guarded_setattr_wrapped(self):
        """Test that a write refused by __setattr__ surfaces as an injection error."""
        with pytest.raises(InjectionError) as exc_info:
            _inject(GuardedConfig, {})
        assert not isinstance(exc_info.value, PropertyAccessError)
        assert exc_info.value.key == "value"
        assert isinstance(exc_info.value.original_error, PermissionError)
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_validating_model_wrapped(self):
        """Test that a value rejected by attribute validation surfaces as an injection error."""
        assert _inject(ValidatingConfig, {"level": "3"}).level == 3
        with pytest.raises(InjectionError) as exc_info:
            _inject(ValidatingConfig, {"level": "-1"})
        assert isinstance(exc_info.value.original_error, ValueError)


class SharedKeyConfig:
    primary: int = ConfigProperty("shared", default="1")
    mirror: int = ConfigProperty("shared", default="2")


class TestDuplicateKeys:
    """Test properties that share a key or a member."""

    def test_shared_key_injects_every_member(self):
        """Test that each member bound to the same key receives the value."""
        config = _inject(SharedKeyConfig, {"shared": "5"})
        assert config.primary == 5
        assert config.mirror == 5

    def test_shared_key_defaults_are_per_member(self):
        """Test that each member keeps its own default."""
        config = _inject(SharedKeyConfig, {})
        assert (config.primary, config.mirror) == (1, 2)

    def test_last_write_wins(self):
        """Test resolution order decides the value of a shared member."""
        table = [
            PropertyDescriptor("first", "1", "", int, FieldTarget("value")),
            PropertyDescriptor("second", "2", "", int, FieldTarget("value")),
        ]

        class Target:
            pass

        instance = Target()
        inject(instance, {}, resolve_properties(None, ConverterRegistry(), table))
        assert instance.value == 2
