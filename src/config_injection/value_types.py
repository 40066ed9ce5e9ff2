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

"""Semantic value types for property declarations.

Python has a single unbounded ``int`` and a single double precision
``float``. The bounded and single precision variants below are ``NewType``
markers: they annotate a property so the registry picks the matching
converter, while the injected values stay plain ``int``/``float``/``str``.

Example:
    >>> class Limits:
    ...     max_connections: Int32 = ConfigProperty("max_connections", default="64")
    ...     ratio: Float32 = ConfigProperty("ratio", default="0.5")
"""

from enum import Enum
import types
from typing import Any, NewType, Union, get_args, get_origin

Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)

# RFC 3986 reference (absolute or relative), validated but kept as text
Uri = NewType("Uri", str)

INT32_RANGE = (-(2**31), 2**31 - 1)
INT64_RANGE = (-(2**63), 2**63 - 1)


def unwrap_optional(declared_type: Any) -> Any:
    """Return ``X`` for ``Optional[X]`` / ``X | None``, otherwise the type unchanged."""
    origin = get_origin(declared_type)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(declared_type) if arg is not type(None)]
        if len(args) == 1 and len(get_args(declared_type)) == 2:
            return args[0]
    return declared_type


def type_name(declared_type: Any) -> str:
    """Human readable name of a declared type, used in summaries and errors."""
    if declared_type is None:
        return "unknown"
    if isinstance(declared_type, type) and issubclass(declared_type, Enum):
        return f"enum<{declared_type.__qualname__}>"
    name = getattr(declared_type, "__qualname__", None) or getattr(
        declared_type, "__name__", None
    )
    return name if isinstance(name, str) else str(declared_type)
