"""NiceGUI interface - thin presentation layer over the session engine.

Responsibilities:
    - Subject list and selection
    - Message display with a typing indicator while a request is in flight
    - Single-file attachment picker
    - Persisted dark/light theme switch

Contains no conversation logic. Only calls the engine's public operations.
"""
