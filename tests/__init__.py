"""Test package for Aithena.

Structure:
    - unit/: Individual module tests with the network stubbed
    - integration/: HTTP API and persistence workflows

Uses pytest with pytest-check for soft assertions.
"""
