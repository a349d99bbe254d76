"""Segmentation parameters."""

from pydantic import BaseModel, Field

DEFAULT_SCENE_COUNT = 15
DEFAULT_SLOT_SECONDS = 6.0
DEFAULT_MIN_SENTENCE_CHARS = 20


class SegmentationSettings(BaseModel):
    """Parameters for turning a model response into scenes.

    Always passed explicitly; the engine never reads process configuration.
    """

    scene_count: int = Field(default=DEFAULT_SCENE_COUNT, description="Scenes per script", gt=0)
    slot_seconds: float = Field(
        default=DEFAULT_SLOT_SECONDS, description="Seconds of narration per scene", gt=0
    )
    min_sentence_chars: int = Field(
        default=DEFAULT_MIN_SENTENCE_CHARS,
        description="Fragments this short or shorter are treated as noise",
        ge=0,
    )

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def total_seconds(self) -> float:
        """Target length of the whole narration."""
        return self.scene_count * self.slot_seconds
