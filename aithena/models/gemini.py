"""Wire models for the Gemini generateContent endpoint.

Field names are snake_case in Python and serialized as the camelCase
keys the REST API expects.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class InlineData(_WireModel):
    """Base64 payload carried inline with a turn."""

    mime_type: str
    data: str


class Part(_WireModel):
    """One piece of a turn: either text or inline data."""

    text: str | None = None
    inline_data: InlineData | None = None


class Content(_WireModel):
    """A role-tagged turn.

    Attributes:
        role: "user" or "model". None for the system instruction.
        parts: Ordered parts of the turn.
    """

    role: str | None = None
    parts: list[Part]


class GenerationConfig(_WireModel):
    """Request-level sampling parameters.

    Attributes:
        temperature: Controls response randomness.
        top_p: Nucleus sampling probability mass.
        top_k: Size of the candidate pool considered at each step.
    """

    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float = Field(default=0.95, gt=0.0, le=1.0)
    top_k: int = Field(default=40, ge=1)


class GenerateContentRequest(_WireModel):
    """Complete generateContent request body."""

    contents: list[Content]
    system_instruction: Content
    generation_config: GenerationConfig = Field(default_factory=GenerationConfig)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict sent over the wire."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
