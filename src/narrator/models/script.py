"""Script version and export models."""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator
import yaml

from ..errors import ContractViolation
from .scene import Scene


def utcnow() -> datetime:
    """Timestamp used for generated_at."""
    return datetime.now(timezone.utc)


class ScriptVersion(BaseModel):
    """An ordered, fixed-size set of scenes plus its version counter.

    Instances are immutable. Approvals, edits and regenerations all return
    a new object; see ``narrator.segmentation.scene_set``.
    """

    scenes: List[Scene] = Field(..., description="Scenes in narrative order")
    version: int = Field(default=1, description="Regeneration counter", ge=1)
    raw_text: str = Field(..., description="Scene texts joined by a single space")
    generated_at: datetime = Field(
        default_factory=utcnow, description="Time of last (re)generation"
    )

    class Config:
        """Pydantic config."""
        frozen = True

    @model_validator(mode="after")
    def check_scenes(self) -> "ScriptVersion":
        """Scenes must exist and carry distinct ids and distinct narration."""
        if not self.scenes:
            raise ValueError("A script version needs at least one scene")

        ids = [scene.id for scene in self.scenes]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate scene ids: {ids}")

        texts = [scene.normalized_text for scene in self.scenes]
        if len(set(texts)) != len(texts):
            raise ValueError("Two scenes carry the same narration text")
        return self

    @property
    def approved_count(self) -> int:
        """Number of approved scenes."""
        return sum(1 for scene in self.scenes if scene.approved)

    @property
    def all_approved(self) -> bool:
        """True when every scene is approved."""
        return all(scene.approved for scene in self.scenes)

    def compose_raw_text(self) -> str:
        """Rebuild raw_text from the scenes."""
        return " ".join(scene.text for scene in self.scenes)

    def scene(self, scene_id: str) -> Scene:
        """Look up a scene by id.

        Raises:
            KeyError: If no scene has that id.
        """
        for scene in self.scenes:
            if scene.id == scene_id:
                return scene
        raise KeyError(scene_id)

    @classmethod
    def from_yaml(cls, path: Path, scene_count: Optional[int] = None) -> "ScriptVersion":
        """Load a script version from a YAML file.

        Raises:
            pydantic.ValidationError: If ids or narration texts repeat.
            ContractViolation: If ``scene_count`` is given and does not match.
        """
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        version = cls(**data)
        if scene_count is not None and len(version.scenes) != scene_count:
            raise ContractViolation(
                f"{path} has {len(version.scenes)} scenes, expected {scene_count}"
            )
        return version

    def to_yaml(self, path: Path) -> None:
        """Save the script version to a YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )


class SceneRecord(BaseModel):
    """Per-scene metadata in an export."""

    id: str
    text: str
    approved: bool
    presentation_bullets: Optional[List[str]] = None
    start_time: float
    end_time: float
    needs_regeneration: bool = False

    class Config:
        """Pydantic config."""
        frozen = True


class ExportProjection(BaseModel):
    """Read-only projection of a script version for download."""

    paper_title: str
    final_text: str = Field(..., description="Approved narration, or the full script")
    records: List[SceneRecord]
    status: Literal["approved", "draft"]
    version: int

    class Config:
        """Pydantic config."""
        frozen = True

    def default_filename(self) -> str:
        """Return the download file name for this export."""
        safe_title = re.sub(r"[^a-zA-Z0-9]", "_", self.paper_title)
        return f"script_{safe_title}_v{self.version}.json"

    def to_json(self) -> str:
        """Serialize the export as indented JSON."""
        return self.model_dump_json(indent=2)
