"""FastAPI endpoints for the study assistant.

Thin HTTP layer over the session engine; holds no conversation state itself.

Endpoints:
    - GET /health: Service health status
    - GET /subjects: Subject catalog
    - GET /subjects/{id}/messages: Ordered history for one subject
    - GET /session, PUT /session/subject: Active subject and submission state
    - POST /chat: Submit a message with an optional attachment
    - POST /preferences/dark-mode/toggle: Flip the display preference
"""

from aithena.api.app import app, create_app

__all__ = ["app", "create_app"]
