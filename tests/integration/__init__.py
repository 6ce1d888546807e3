"""Integration tests across the HTTP API, engine and storage.

Gemini is always stubbed; storage is real SQLite.
"""
