"""Assistant configuration with environment variable loading.

Pydantic-based configuration for the Gemini client and local storage.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from aithena.models.gemini import GenerationConfig

# Load environment variables from .env file
load_dotenv()

_DATA_DIR = Path(__file__).parent.parent.parent / "data"


class AssistantConfig(BaseModel):
    """Configuration for the study assistant.

    Attributes:
        api_key: Gemini API key.
        base_url: Gemini REST base URL.
        model_name: Model identifier to call.
        request_timeout: Seconds before an outbound request is abandoned.
            None leaves the deadline to the server.
        db_path: SQLite file holding the message log and preferences.
        generation: Sampling parameters sent with every request.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        validate_default=True,
        description="API key for the Gemini API",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ),
        validate_default=True,
        description="Gemini REST base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        description="Model to use",
    )
    request_timeout: float | None = Field(
        default_factory=lambda: os.getenv("GEMINI_TIMEOUT", "").strip() or None,
        validate_default=True,
        gt=0.0,
        description="Outbound request timeout in seconds (None = no timeout)",
    )
    db_path: Path = Field(
        default_factory=lambda: Path(os.getenv("AITHENA_DB_PATH", str(_DATA_DIR / "aithena.db"))),
        description="SQLite file for messages and preferences",
    )
    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("GEMINI_API_KEY is required. Set it in the environment or .env")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_assistant_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Returns:
        Configured AssistantConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AssistantConfig()
