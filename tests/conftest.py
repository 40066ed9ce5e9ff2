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
Shared pytest configuration and fixtures for config-injection tests.

This file contains:
- Common test fixtures used across test modules
- Markers for different test categories
"""

from pathlib import Path
import sys

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config_injection import ConverterRegistry, InjectionEngine  # noqa: E402
from sample_configs import CustomConverter, CustomType, ExampleConfig  # noqa: E402


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for system interactions")
    config.addinivalue_line("markers", "performance: Performance and benchmark tests")
    config.addinivalue_line("markers", "concurrent: Tests that use concurrency/parallelism")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location and name."""
    for item in items:
        if "performance" in str(item.fspath):
            item.add_marker(pytest.mark.performance)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)

        if any(keyword in item.name.lower() for keyword in ["concurrent", "parallel", "thread"]):
            item.add_marker(pytest.mark.concurrent)


@pytest.fixture()
def registry():
    """Provide a registry seeded with the standard converters."""
    return ConverterRegistry()


@pytest.fixture()
def example_engine():
    """Provide an engine for ExampleConfig with the custom converter registered."""
    return InjectionEngine(ExampleConfig).register(CustomType, CustomConverter())


@pytest.fixture()
def full_source():
    """Provide a value source covering every ExampleConfig property."""
    return {
        "string_key": "string_value",
        "long_key": "10",
        "int_key": "100",
        "float_key": "4.5",
        "double_key": "9.5",
        "Double_key": "5.8",
        "custom_key": "custom",
        "enum_key": "RED",
    }
