"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: attachment validation and encoding
    - storage/: message log ordering, persistence and preferences
    - agent/: request building, response interpretation, session engine

Uses an in-memory store and a stub Gemini client; no network access.
"""
