"""Aithena - subject-scoped study assistant backed by the Gemini API.

Combines FastAPI for HTTP access, httpx for the Gemini client,
NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - agent: session engine, request building and response interpretation
    - storage: durable message log and display preferences
    - parsing: attachment validation and encoding
    - api: HTTP endpoints over the session engine
    - ui: Web interface for chat interactions
    - models: message, subject and wire schemas
"""

__version__ = "0.1.0"
