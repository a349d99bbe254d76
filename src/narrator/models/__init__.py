"""Data models for the narration engine."""

from .scene import Scene, normalize_text, scene_id
from .script import ScriptVersion, SceneRecord, ExportProjection
from .paper import PaperData

__all__ = [
    "Scene",
    "ScriptVersion",
    "SceneRecord",
    "ExportProjection",
    "PaperData",
    "normalize_text",
    "scene_id",
]
