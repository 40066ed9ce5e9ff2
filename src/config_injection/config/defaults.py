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

"""Default settings and environment variable tables."""

from .schema import InjectionSettings

ENV_PREFIX = "CONFIG_INJECTION_"

DEFAULT_SETTINGS = InjectionSettings()

# Environment variable -> settings field
ENV_VAR_MAPPING = {
    "CONFIG_INJECTION_PREFIX": "prefix",
    "CONFIG_INJECTION_COERCE_NON_STRING_VALUES": "coerce_non_string_values",
    "CONFIG_INJECTION_EAGER_RESOLUTION": "eager_resolution",
    "CONFIG_INJECTION_LOG_FALLBACKS": "log_fallbacks",
}

# Type mapping for environment variable conversion
ENV_VAR_TYPES: dict[str, type] = {
    "CONFIG_INJECTION_PREFIX": str,
    "CONFIG_INJECTION_COERCE_NON_STRING_VALUES": bool,
    "CONFIG_INJECTION_EAGER_RESOLUTION": bool,
    "CONFIG_INJECTION_LOG_FALLBACKS": bool,
}

TRUE_VALUES = ("true", "1", "yes", "on")
