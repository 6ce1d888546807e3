"""Static subject catalog.

Each subject scopes both the system instruction sent to Gemini and
the partition of the message log it writes to.
"""

from pydantic import BaseModel, ConfigDict


class UnknownSubjectError(KeyError):
    """Raised when a subject id is not in the catalog."""

    pass


class Subject(BaseModel):
    """An immutable catalog entry.

    Attributes:
        id: Unique key, also the message log partition name.
        name: Display name.
        description: One-line tagline.
        icon: Emoji glyph shown next to the name.
        system_prompt: Persona and domain restriction sent with every request.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    system_prompt: str


SUBJECTS: tuple[Subject, ...] = (
    Subject(
        id="math",
        name="Mathematics",
        description="Your expert mathematics tutor",
        icon="🔢",
        system_prompt=(
            "You are MathBot, an expert mathematics teacher. Only answer questions related "
            "to mathematics, algebra, geometry, calculus, and other mathematical topics. "
            "If asked about other subjects, politely redirect to the appropriate subject bot."
        ),
    ),
    Subject(
        id="science",
        name="Science",
        description="Your science and research guide",
        icon="🔬",
        system_prompt=(
            "You are ScienceBot, an expert science teacher. Only answer questions related "
            "to physics, chemistry, biology, and other scientific fields. "
            "If asked about other subjects, politely redirect to the appropriate subject bot."
        ),
    ),
    Subject(
        id="history",
        name="History",
        description="Your historical knowledge companion",
        icon="📚",
        system_prompt=(
            "You are HistoryBot, an expert history teacher. Only answer questions related "
            "to historical events, civilizations, and cultural history. "
            "If asked about other subjects, politely redirect to the appropriate subject bot."
        ),
    ),
    Subject(
        id="programming",
        name="Programming",
        description="Your coding mentor",
        icon="💻",
        system_prompt=(
            "You are CodeBot, an expert programming teacher. Only answer questions related "
            "to computer programming, software development, and computer science. "
            "If asked about other subjects, politely redirect to the appropriate subject bot."
        ),
    ),
)


def get_subject(subject_id: str, subjects: tuple[Subject, ...] = SUBJECTS) -> Subject:
    """Look up a subject by id.

    Raises:
        UnknownSubjectError: If no subject has this id.
    """
    for subject in subjects:
        if subject.id == subject_id:
            return subject
    raise UnknownSubjectError(subject_id)
