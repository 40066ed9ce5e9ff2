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

"""Settings schema for injection engines.

Engine behavior that callers commonly want to drive from deployment
configuration (key prefix, coercion policy) is described here as a Pydantic
model so it is validated in one place.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InjectionSettings(BaseModel):
    """Engine settings."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    prefix: str = Field(
        default="",
        max_length=256,
        description="String prepended to every property key before lookup",
    )
    coerce_non_string_values: bool = Field(
        default=True,
        description="Stringify non-string source values instead of ignoring them",
    )
    eager_resolution: bool = Field(
        default=False,
        description="Resolve target types when the engine is created",
    )
    log_fallbacks: bool = Field(
        default=True,
        description="Log values replaced by defaults or fallbacks at WARNING level",
    )

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Prefixes are part of the key and may not contain whitespace."""
        if any(ch.isspace() for ch in v):
            raise ValueError(f"prefix must not contain whitespace: {v!r}")
        return v
