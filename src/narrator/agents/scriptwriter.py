"""Scriptwriter agent: paper data in, segmented script versions out."""

import logging
from typing import Optional

from ..config import config
from ..models import PaperData, ScriptVersion
from ..segmentation import (
    SegmentationSettings,
    build_version,
    rebuild_version,
    regenerate_partial,
    segment_response,
    segment_variants,
)
from ..services.anthropic import TextGenerator
from .base import BaseAgent
from .prompts import (
    build_partial_prompt,
    build_regeneration_prompt,
    build_script_prompt,
    build_variants_prompt,
    load_system_prompt,
)

logger = logging.getLogger(__name__)


class ScriptWriterAgent(BaseAgent[PaperData, ScriptVersion]):
    """Agent for writing and refining narration scripts.

    Every response goes through the segmentation pipeline, so each script
    it returns has exactly ``settings.scene_count`` unique scenes.
    """

    def __init__(
        self,
        client: Optional[TextGenerator] = None,
        model: Optional[str] = None,
        settings: Optional[SegmentationSettings] = None,
        temperature: float = 0.8,
    ) -> None:
        super().__init__(client=client, model=model)
        self._settings = settings or config.segmentation_settings()
        self._temperature = temperature

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "ScriptWriterAgent"

    @property
    def system_prompt(self) -> str:
        """Return the system prompt for script writing."""
        return load_system_prompt()

    @property
    def settings(self) -> SegmentationSettings:
        return self._settings

    def run(self, input_data: PaperData) -> ScriptVersion:
        """Write a single script for the paper.

        Raises:
            UpstreamFormatError: If the model returned nothing usable.
        """
        self._logger.info(
            f"Writing script for '{input_data.title}' "
            f"({self._settings.scene_count} scenes, {self._settings.total_seconds:g}s)"
        )
        response = self._create_message(
            build_script_prompt(input_data, self._settings),
            temperature=self._temperature,
        )
        scenes = segment_response(response, self._settings)
        return build_version(scenes, scene_count=self._settings.scene_count)

    def generate_variants(self, paper: PaperData, count: Optional[int] = None) -> list[ScriptVersion]:
        """Write several alternative scripts in a single request.

        Raises:
            UpstreamCountMismatch: If the response labels fewer scripts than asked for.
        """
        count = count or config.variant_count
        self._logger.info(f"Writing {count} script variants for '{paper.title}'")
        response = self._create_message(
            build_variants_prompt(paper, self._settings, count),
            max_tokens=8192,
            temperature=self._temperature,
        )
        return [
            build_version(scenes, scene_count=self._settings.scene_count)
            for scenes in segment_variants(response, count, self._settings)
        ]

    def _settings_for(self, current: ScriptVersion) -> SegmentationSettings:
        """Settings sized to an existing script rather than the configured default."""
        if len(current.scenes) == self._settings.scene_count:
            return self._settings
        return self._settings.model_copy(update={"scene_count": len(current.scenes)})

    def regenerate(self, paper: PaperData, current: ScriptVersion) -> ScriptVersion:
        """Rewrite the whole script, discarding approvals."""
        self._logger.info(f"Regenerating all scenes of version {current.version}")
        settings = self._settings_for(current)
        response = self._create_message(
            build_regeneration_prompt(paper, settings, current),
            temperature=self._temperature,
        )
        return rebuild_version(current, segment_response(response, settings))

    def regenerate_unapproved(self, paper: PaperData, current: ScriptVersion) -> ScriptVersion:
        """Rewrite only the unapproved scenes.

        Returns ``current`` itself, without calling the model, when every
        scene is already approved.
        """
        if current.all_approved:
            self._logger.info("All scenes approved; nothing to regenerate")
            return current

        settings = self._settings_for(current)
        pending = len(current.scenes) - current.approved_count
        self._logger.info(f"Regenerating {pending} unapproved scene(s) of version {current.version}")
        response = self._create_message(
            build_partial_prompt(paper, settings, current),
            temperature=self._temperature,
        )
        return regenerate_partial(current, segment_response(response, settings))
