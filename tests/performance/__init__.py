"""Performance tests for config-injection.

This package contains performance tests that measure:
- Resolution and injection cost for wide classes
- Construction throughput
"""
