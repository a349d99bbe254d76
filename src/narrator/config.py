"""Configuration management."""

import os
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .segmentation.settings import (
    DEFAULT_SCENE_COUNT,
    DEFAULT_SLOT_SECONDS,
    SegmentationSettings,
)

# Load environment variables
load_dotenv()


class Config(BaseModel):
    """Application configuration."""

    # API Keys
    anthropic_api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="Anthropic API key"
    )

    # Paths
    workspace: Path = Field(
        default_factory=lambda: Path(os.getenv("NARRATOR_WORKSPACE", ".")),
        description="Workspace directory"
    )

    # Model settings
    default_model: str = Field(
        default_factory=lambda: os.getenv("NARRATOR_MODEL", "claude-sonnet-4-20250514"),
        description="Default Claude model"
    )

    # Script shape
    scene_count: int = Field(
        default_factory=lambda: int(os.getenv("NARRATOR_SCENE_COUNT", DEFAULT_SCENE_COUNT)),
        description="Scenes per narration script",
        gt=0,
    )
    slot_seconds: float = Field(
        default_factory=lambda: float(os.getenv("NARRATOR_SLOT_SECONDS", DEFAULT_SLOT_SECONDS)),
        description="Seconds of narration per scene",
        gt=0,
    )
    variant_count: int = Field(
        default_factory=lambda: int(os.getenv("NARRATOR_VARIANT_COUNT", 3)),
        description="Alternative scripts requested by 'generate --variants'",
        gt=0,
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that required credentials are set."""
        if not self.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY not set")

    def segmentation_settings(self) -> SegmentationSettings:
        """Segmentation parameters for the configured script shape."""
        return SegmentationSettings(
            scene_count=self.scene_count,
            slot_seconds=self.slot_seconds,
        )


# Global config instance
config = Config()
