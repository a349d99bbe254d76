"""Assemble scenes into script versions and merge regenerations."""

import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..errors import ContractViolation
from ..models import ExportProjection, Scene, SceneRecord, ScriptVersion, normalize_text
from ..models.script import utcnow
from .normalizer import duplicate_placeholder, is_placeholder
from .settings import DEFAULT_SCENE_COUNT

logger = logging.getLogger(__name__)


def _check_scenes(scenes: Sequence[Scene], scene_count: int) -> None:
    if len(scenes) != scene_count:
        raise ContractViolation(f"Expected {scene_count} scenes, got {len(scenes)}")

    ids = [scene.id for scene in scenes]
    if len(set(ids)) != len(ids):
        raise ContractViolation(f"Duplicate scene ids: {ids}")

    texts = [scene.normalized_text for scene in scenes]
    if len(set(texts)) != len(texts):
        raise ContractViolation("Two scenes carry the same narration text")


def _assemble(
    scenes: Sequence[Scene], version: int, generated_at: Optional[datetime] = None
) -> ScriptVersion:
    return ScriptVersion(
        scenes=list(scenes),
        version=version,
        raw_text=" ".join(scene.text for scene in scenes),
        generated_at=generated_at or utcnow(),
    )


def build_version(
    scenes: Sequence[Scene],
    scene_count: int = DEFAULT_SCENE_COUNT,
    version: int = 1,
    generated_at: Optional[datetime] = None,
) -> ScriptVersion:
    """Build a script version from freshly segmented scenes.

    Every scene starts unapproved.

    Raises:
        ContractViolation: If the scenes break the count, id or uniqueness rules.
    """
    _check_scenes(scenes, scene_count)
    fresh = [
        scene if not scene.approved else scene.model_copy(update={"approved": False})
        for scene in scenes
    ]
    return _assemble(fresh, version, generated_at)


def rebuild_version(
    current: ScriptVersion,
    scenes: Sequence[Scene],
    generated_at: Optional[datetime] = None,
) -> ScriptVersion:
    """Full regeneration: new scenes, approvals discarded, version bumped."""
    return build_version(
        scenes,
        scene_count=len(current.scenes),
        version=current.version + 1,
        generated_at=generated_at,
    )


def regenerate_partial(
    current: ScriptVersion,
    fresh: Sequence[Scene],
    generated_at: Optional[datetime] = None,
) -> ScriptVersion:
    """Replace unapproved scenes with fresh ones, keeping approved scenes intact.

    Approved scenes are carried over unchanged. Unapproved slots take the
    fresh text and bullets but keep their id and timing. When every scene
    is already approved the input is returned as-is.

    Raises:
        ContractViolation: If ``fresh`` does not have one scene per slot.
    """
    if len(fresh) != len(current.scenes):
        raise ContractViolation(
            f"Regeneration produced {len(fresh)} scenes for {len(current.scenes)} slots"
        )

    if current.all_approved:
        logger.info(f"All scenes approved; version {current.version} left unchanged")
        return current

    taken = {scene.normalized_text for scene in current.scenes if scene.approved}
    placeholder_counter = 1
    merged: list[Scene] = []

    for old, new in zip(current.scenes, fresh):
        if old.approved:
            merged.append(old)
            continue

        text, bullets = new.text, new.presentation_bullets
        if normalize_text(text) in taken:
            logger.warning(f"Regenerated text for {old.id} repeats another scene; keeping previous text")
            text, bullets = old.text, old.presentation_bullets
        while normalize_text(text) in taken:
            text, bullets = duplicate_placeholder(placeholder_counter), None
            placeholder_counter += 1

        taken.add(normalize_text(text))
        merged.append(
            Scene(
                id=old.id,
                text=text,
                presentation_bullets=bullets,
                approved=False,
                start_time=old.start_time,
                end_time=old.end_time,
                needs_regeneration=is_placeholder(text),
            )
        )

    return _assemble(merged, current.version + 1, generated_at)


def _replace_scenes(current: ScriptVersion, scenes: list[Scene]) -> ScriptVersion:
    return current.model_copy(
        update={"scenes": scenes, "raw_text": " ".join(scene.text for scene in scenes)}
    )


def set_approval(
    current: ScriptVersion, scene_ids: Iterable[str], approved: bool = True
) -> ScriptVersion:
    """Return a copy with the given scenes (un)approved; version is unchanged.

    Raises:
        ContractViolation: If a scene id is unknown.
    """
    wanted = set(scene_ids)
    unknown = wanted - {scene.id for scene in current.scenes}
    if unknown:
        raise ContractViolation(f"Unknown scene id(s): {', '.join(sorted(unknown))}")

    scenes = [
        scene.model_copy(update={"approved": approved}) if scene.id in wanted else scene
        for scene in current.scenes
    ]
    return _replace_scenes(current, scenes)


def approve_all(current: ScriptVersion) -> ScriptVersion:
    """Approve every scene."""
    return set_approval(current, [scene.id for scene in current.scenes])


def edit_scene(
    current: ScriptVersion,
    scene_id: str,
    text: Optional[str] = None,
    presentation_bullets: Optional[list[str]] = None,
) -> ScriptVersion:
    """Return a copy with one scene's narration and/or bullets replaced.

    An empty bullet list clears the bullets.

    Raises:
        ContractViolation: If the id is unknown, or the new text is empty or
            duplicates another scene.
    """
    try:
        target = current.scene(scene_id)
    except KeyError:
        raise ContractViolation(f"Unknown scene id: {scene_id}") from None

    update: dict = {}
    if text is not None:
        text = text.strip()
        if not text:
            raise ContractViolation(f"Narration for {scene_id} must not be empty")
        others = {scene.normalized_text for scene in current.scenes if scene.id != scene_id}
        if normalize_text(text) in others:
            raise ContractViolation(f"Narration for {scene_id} duplicates another scene")
        update["text"] = text
        update["needs_regeneration"] = is_placeholder(text)
    if presentation_bullets is not None:
        bullets = [bullet.strip() for bullet in presentation_bullets if bullet.strip()]
        update["presentation_bullets"] = bullets or None

    scenes = [
        scene.model_copy(update=update) if scene is target else scene
        for scene in current.scenes
    ]
    return _replace_scenes(current, scenes)


def export_approved(
    version: ScriptVersion, paper_title: str = "Untitled Paper"
) -> ExportProjection:
    """Project a script version for download.

    ``final_text`` is the approved narration, or the whole script when
    nothing is approved yet.
    """
    approved = [scene.text for scene in version.scenes if scene.approved]
    return ExportProjection(
        paper_title=paper_title,
        final_text=" ".join(approved) or version.raw_text,
        records=[
            SceneRecord(
                id=scene.id,
                text=scene.text,
                approved=scene.approved,
                presentation_bullets=scene.presentation_bullets,
                start_time=scene.start_time,
                end_time=scene.end_time,
                needs_regeneration=scene.needs_regeneration,
            )
            for scene in version.scenes
        ],
        status="approved" if version.all_approved else "draft",
        version=version.version,
    )
