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

"""Custom exceptions for configuration injection."""

from datetime import datetime, timezone
from typing import Any


class PropertyInjectionError(Exception):
    """Base exception for all configuration injection errors."""

    ERROR_CATEGORY = "GENERAL"
    ERROR_CODE = "CFI_0000"

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recovery_suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.user_message = user_message or "An error occurred"
        self.error_code = error_code or self.ERROR_CODE
        self.error_category = self.ERROR_CATEGORY
        self.context = context or {}
        self.recovery_suggestion = recovery_suggestion
        self.timestamp = datetime.now(timezone.utc)


class ConversionError(PropertyInjectionError):
    """Text could not be parsed as the requested value type."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "CFI_1000"

    def __init__(self, text: str | None, type_name: str, reason: str | None = None) -> None:
        message = f"Cannot convert {text!r} to {type_name}"
        if reason:
            message = f"{message}: {reason}"
        context = {"text": text, "type": type_name}
        super().__init__(message, f"Invalid {type_name} value", self.ERROR_CODE, context)
        self.text = text
        self.type_name = type_name
        self.reason = reason


class InjectionError(PropertyInjectionError):
    """A property could not be injected into its target."""

    ERROR_CATEGORY = "SERVER_ERROR"
    ERROR_CODE = "CFI_2000"

    def __init__(
        self,
        key: str,
        message: str,
        user_message: str | None = None,
        original_error: Exception | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recovery_suggestion: str | None = None,
    ) -> None:
        context = context or {}
        context["key"] = key
        if original_error:
            context["original_error"] = str(original_error)
        super().__init__(message, user_message, error_code, context, recovery_suggestion)
        self.key = key
        self.original_error = original_error


class PropertyAccessError(InjectionError):
    """The assignment target rejected the write."""

    ERROR_CODE = "CFI_2001"

    def __init__(
        self,
        key: str,
        member: str,
        original_error: Exception | None = None,
    ) -> None:
        message = f"Unable to assign property '{key}' to member '{member}'"
        if original_error:
            message = f"{message}: {original_error}"
        user_message = f"Configuration target for '{key}' is not writable"
        recovery_suggestion = (
            "Make the member a writable attribute or a setter accepting one argument"
        )
        super().__init__(
            key,
            message,
            user_message,
            original_error,
            self.ERROR_CODE,
            {"member": member},
            recovery_suggestion,
        )
        self.member = member


class InvalidPropertyValueError(InjectionError):
    """No usable value could be produced for a property without a fallback."""

    ERROR_CODE = "CFI_2002"

    def __init__(
        self,
        key: str,
        text: str | None,
        type_name: str,
        original_error: Exception | None = None,
    ) -> None:
        message = f"Invalid value {text!r} for property '{key}' of type {type_name}"
        user_message = f"Configuration value for '{key}' is invalid"
        recovery_suggestion = f"Provide a valid {type_name} value for '{key}'"
        super().__init__(
            key,
            message,
            user_message,
            original_error,
            self.ERROR_CODE,
            {"text": text, "type": type_name},
            recovery_suggestion,
        )
        self.text = text
        self.type_name = type_name


class ConfigurationError(PropertyInjectionError):
    """Invalid property declarations or engine settings."""

    ERROR_CATEGORY = "SERVER_ERROR"
    ERROR_CODE = "CFI_3000"
