"""Test suite for Build Tag Generator.

This package contains test modules and fixtures for verifying the functionality
of the Build Tag Generator tool. It includes tests for:
- Branch normalization and tag composition
- Counter resolution and length enforcement
- Git operations and the I/O layer
- Configuration handling and the CLI

The test suite uses pytest and provides fixtures for common test scenarios.
"""
