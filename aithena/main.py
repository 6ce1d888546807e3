"""Main application entry point.

Runs FastAPI with the NiceGUI chat page mounted on the same server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    Builds the session engine up front so a missing GEMINI_API_KEY or an
    unwritable database path fails at startup instead of on first request.
    Set UI_ENABLED=false to serve only the HTTP API.
    """
    import sqlite3

    import uvicorn
    from pydantic import ValidationError

    from aithena.agent.session_engine import get_session_engine
    from aithena.api.app import create_app

    try:
        engine = get_session_engine()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    except (OSError, sqlite3.Error) as e:
        logger.error(f"Cannot open storage: {e}")
        sys.exit(1)
    logger.info(f"Loaded {len(engine.store)} stored messages")

    app = create_app()
    port = int(os.getenv("PORT", "8000"))

    if os.getenv("UI_ENABLED", "true").lower() != "false":
        from nicegui import ui

        from aithena.ui.chat_page import chat_page  # noqa: F401 - Registers the page

        ui.run_with(
            app,
            title="Aithena",
            favicon="🎓",
            storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "aithena-secret"),
        )
        logger.info(f"Chat UI available at http://localhost:{port}/")

    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
