"""Integration tests for config-injection.

This package contains integration tests that verify:
- Injection from many threads through shared and per-thread engines
- Converter registration racing with injection
"""
