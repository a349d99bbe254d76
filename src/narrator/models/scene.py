"""Scene data model."""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


def normalize_text(text: str) -> str:
    """Lower-case and collapse whitespace for duplicate detection."""
    return " ".join(text.lower().split())


def scene_id(index: int) -> str:
    """Return the stable identifier for a 0-based scene position."""
    return f"scene_{index + 1}"


class Scene(BaseModel):
    """A single narration unit of a script."""

    id: str = Field(..., description="Stable scene identifier (scene_<n>)")
    text: str = Field(..., description="Narration sentence for speech and subtitles")
    presentation_bullets: Optional[List[str]] = Field(
        None, description="Slide bullet points, unset when the model gave none"
    )
    approved: bool = Field(default=False, description="Approved by the user")
    start_time: float = Field(..., description="Slot start in seconds", ge=0)
    end_time: float = Field(..., description="Slot end in seconds", ge=0)
    needs_regeneration: bool = Field(
        default=False, description="Placeholder content that should be regenerated"
    )

    class Config:
        """Pydantic config."""
        frozen = True

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Scene text must not be empty")
        return value

    @property
    def normalized_text(self) -> str:
        """Text as compared for uniqueness."""
        return normalize_text(self.text)

    @property
    def duration(self) -> float:
        """Slot length in seconds."""
        return self.end_time - self.start_time
