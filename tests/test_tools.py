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
Tests for the configuration analysis and template tools.

Tests cover:
- Missing and unknown key detection
- .properties templates
- XML templates
"""

import io
import xml.etree.ElementTree as ET

import pytest

from config_injection import ConfigProperty
from config_injection.tools import (
    PropertiesTemplateGenerator,
    PropertyAnalyzer,
    TemplateGenerator,
    XmlTemplateGenerator,
)
from sample_configs import ExampleModule


class AbcConfig:
    a: str = ConfigProperty("a", default="1", description="first")
    b: str = ConfigProperty("b", default="2")
    c: str = ConfigProperty("c")


class TestPropertyAnalyzer:
    """Test comparison of configurations against declarations."""

    def test_find_missing(self):
        """Test that declared keys absent from the configuration are reported."""
        analyzer = PropertyAnalyzer(AbcConfig)
        assert analyzer.find_missing({"a": "x", "b": "y", "d": "z"}) == ["c"]

    def test_find_extra(self):
        """Test that unknown keys are reported."""
        analyzer = PropertyAnalyzer(AbcConfig)
        assert analyzer.find_extra({"a": "x", "b": "y", "d": "z", 1: "int key"}) == ["d"]

    def test_prefix(self):
        """Test analysis of a prefixed configuration."""
        analyzer = PropertyAnalyzer.for_classes([AbcConfig])
        conf = {"app.a": "x", "app.b": "y", "c": "z"}
        assert analyzer.find_missing(conf, "app.") == ["c"]
        assert analyzer.find_extra(conf, "app.") == ["c"]

    def test_follow_modules(self):
        """Test that module references are analyzed on request."""
        assert PropertyAnalyzer(ExampleModule).declared_keys() == []
        keys = PropertyAnalyzer(ExampleModule, follow_modules=True).declared_keys()
        assert "foo" in keys
        assert "enum_key" in keys


class TestTemplateGenerator:
    """Test the generator base class."""

    def test_base_class_is_abstract(self):
        """Test that the base class cannot render on its own."""
        with pytest.raises(TypeError):
            TemplateGenerator(AbcConfig)


class TestPropertiesTemplate:
    """Test .properties template generation."""

    def test_generate(self):
        """Test the template layout."""
        assert PropertiesTemplateGenerator(AbcConfig).generate() == (
            "# first\na=1\n\nb=2\n\nc=\n\n"
        )

    def test_ignore_empty_defaults(self):
        """Test that empty defaults can be left out."""
        generator = PropertiesTemplateGenerator.for_classes([AbcConfig]).ignore_empty_defaults()
        assert "c=" not in generator.generate()

    def test_write(self):
        """Test writing to a caller-owned stream."""
        stream = io.StringIO()
        stream.write("# header\n")
        PropertiesTemplateGenerator(AbcConfig).write(stream)
        assert stream.getvalue().startswith("# header\n# first\na=1\n")
        assert not stream.closed


class TestXmlTemplate:
    """Test XML template generation."""

    def test_generate(self):
        """Test the document structure."""
        root = ET.fromstring(XmlTemplateGenerator(AbcConfig).generate())
        assert root.tag == "configuration"
        properties = root.findall("property")
        assert [p.findtext("name") for p in properties] == ["a", "b", "c"]
        assert properties[0].findtext("value") == "1"
        assert properties[0].findtext("description") == "first"
        assert properties[1].find("description") is None
        assert properties[2].findtext("value") == ""

    def test_indented(self):
        """Test that elements are indented with tabs."""
        assert "\n\t<property>\n\t\t<name>a</name>" in XmlTemplateGenerator(AbcConfig).generate()

    def test_ignore_empty_defaults(self):
        """Test that empty defaults can be left out."""
        root = ET.fromstring(XmlTemplateGenerator(AbcConfig).ignore_empty_defaults().generate())
        assert [p.findtext("name") for p in root.findall("property")] == ["a", "b"]
