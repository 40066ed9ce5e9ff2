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

"""Configuration template generators.

Both generators render the declared properties of a set of classes with
their default values: one as ``.properties`` text, one as a Hadoop style
``<configuration>`` XML document.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TextIO
import xml.etree.ElementTree as ET

from ..catalog import collect_properties
from ..resolution import PropertyDescriptor


class TemplateGenerator(ABC):
    """Base class holding the classes to render and the empty-default filter."""

    def __init__(self, *classes: type) -> None:
        self.classes = list(classes)
        self.skip_empty_defaults = False

    @classmethod
    def for_classes(cls, classes: Iterable[type]) -> "TemplateGenerator":
        return cls(*classes)

    def ignore_empty_defaults(self) -> "TemplateGenerator":
        """Leave out properties whose default value is the empty string."""
        self.skip_empty_defaults = True
        return self

    def properties(self) -> list[PropertyDescriptor]:
        return [
            p
            for p in collect_properties(*self.classes)
            if not (self.skip_empty_defaults and not p.default_value)
        ]

    def write(self, stream: TextIO) -> None:
        """Append the template to ``stream``; the caller owns the stream."""
        stream.write(self.generate())

    @abstractmethod
    def generate(self) -> str:
        """Render the template text."""


class PropertiesTemplateGenerator(TemplateGenerator):
    """``# description`` comment, ``key=default`` line, blank line per property."""

    def generate(self) -> str:
        parts = []
        for prop in self.properties():
            if prop.description:
                parts.append(f"# {prop.description}\n")
            parts.append(f"{prop.key}={prop.default_value}\n\n")
        return "".join(parts)


class XmlTemplateGenerator(TemplateGenerator):
    """``<configuration>`` document with one ``<property>`` element per property."""

    def generate(self) -> str:
        root = ET.Element("configuration")
        for prop in self.properties():
            element = ET.SubElement(root, "property")
            ET.SubElement(element, "name").text = prop.key
            ET.SubElement(element, "value").text = prop.default_value
            if prop.description:
                ET.SubElement(element, "description").text = prop.description
        ET.indent(root, space="\t")
        return ET.tostring(root, encoding="unicode")
