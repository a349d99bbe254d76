"""Parse the marker-delimited scene format.

The generation prompt asks for::

    SCENE 1:
    NARRATION: One or more lines of narration.
    PRESENTATION:
    - First bullet
    - Second bullet

Multi-variant responses repeat the whole set under ``SCRIPT 1:``,
``SCRIPT 2:`` and so on. Markers are matched case-insensitively at the
start of a line, tolerating markdown decoration such as ``**SCENE 1:**``
and a title after the scene number (``SCENE 1: Opening Hook``).
"""

import logging
import re
from typing import Optional

from ..models import Scene, normalize_text
from .normalizer import make_scenes
from .settings import DEFAULT_SCENE_COUNT, DEFAULT_SLOT_SECONDS

logger = logging.getLogger(__name__)

_DECORATION = r"[ \t>#*_]*"
_SUFFIX = r"[ \t*_]*"

_SCENE_BLOCK = re.compile(
    rf"^{_DECORATION}SCENE[ \t]+(?P<index>\d+){_SUFFIX}(?:[:\-–][^\n]*?)?\s*"
    rf"{_DECORATION}NARRATION(?:[ \t]+TEXT)?{_SUFFIX}:{_SUFFIX}(?P<narration>.*?)\s*"
    rf"(?:^{_DECORATION}PRESENTATION(?:[ \t]+TEXT)?{_SUFFIX}:{_SUFFIX}(?P<presentation>.*?))?"
    rf"(?=^{_DECORATION}(?:SCENE|SCRIPT)[ \t]+\d+|\Z)",
    re.IGNORECASE | re.DOTALL | re.MULTILINE,
)

_VARIANT_MARKER = re.compile(
    rf"^{_DECORATION}SCRIPT[ \t]+\d+{_SUFFIX}:{_SUFFIX}",
    re.IGNORECASE | re.MULTILINE,
)

_BULLET = re.compile(r"^\s*(?:[-*•–·]\s*|\d+[.)]\s+)(.*)$")

_NARRATION_LINE = re.compile(
    rf"^{_DECORATION}(?:SCENE[ \t]+\d+[^\n]*?)?NARRATION(?:[ \t]+TEXT)?{_SUFFIX}:{_SUFFIX}",
    re.IGNORECASE,
)
_HEADER_LINE = re.compile(
    rf"^{_DECORATION}(?:SCENE|SCRIPT)[ \t]+\d+{_SUFFIX}(?:[:\-–]|$)",
    re.IGNORECASE,
)
_PRESENTATION_LINE = re.compile(
    rf"^{_DECORATION}PRESENTATION(?:[ \t]+TEXT)?{_SUFFIX}:",
    re.IGNORECASE,
)


def extract_bullets(block: Optional[str]) -> Optional[list[str]]:
    """Return bullet texts from a presentation block, or None if there are none."""
    if not block:
        return None

    bullets = []
    for line in block.splitlines():
        match = _BULLET.match(line)
        if not match:
            continue
        bullet = match.group(1).strip()
        if bullet:
            bullets.append(bullet)
    return bullets or None


def find_scene_blocks(raw: str) -> list[tuple[str, Optional[list[str]]]]:
    """Return ``(narration, bullets)`` for every block with narration text."""
    blocks = []
    for match in _SCENE_BLOCK.finditer(raw):
        narration = " ".join(match.group("narration").split())
        if not narration:
            logger.debug(f"Skipping scene block {match.group('index')} with empty narration")
            continue
        blocks.append((narration, extract_bullets(match.group("presentation"))))
    return blocks


def parse_structured(
    raw: str,
    scene_count: int = DEFAULT_SCENE_COUNT,
    slot_seconds: float = DEFAULT_SLOT_SECONDS,
) -> Optional[list[Scene]]:
    """Parse scenes with presentation bullets from a structured response.

    Args:
        raw: Response text from the generation service.
        scene_count: Number of scenes the response must contain.
        slot_seconds: Seconds per scene for timing.

    Returns:
        Exactly ``scene_count`` scenes, or None when the structure is missing,
        has the wrong number of blocks, or repeats a narration. A partial
        match is never topped up; the caller falls back to plain text.
    """
    if not raw:
        return None

    blocks = find_scene_blocks(raw)
    if not blocks:
        return None

    if len(blocks) != scene_count:
        logger.info(
            f"Structured response had {len(blocks)} scene blocks, expected {scene_count}; "
            "discarding structure"
        )
        return None

    keys = {normalize_text(narration) for narration, _ in blocks}
    if len(keys) != len(blocks):
        logger.info("Structured response repeats a narration; discarding structure")
        return None

    return make_scenes(
        [narration for narration, _ in blocks],
        slot_seconds=slot_seconds,
        bullets=[bullets for _, bullets in blocks],
    )


def split_variants(raw: str) -> list[str]:
    """Split a multi-variant response on its ``SCRIPT N:`` markers.

    Text before the first marker is ignored. Returns an empty list when no
    marker is present.
    """
    markers = list(_VARIANT_MARKER.finditer(raw or ""))
    variants = []
    for i, marker in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(raw)
        body = raw[marker.end():end].strip()
        if body:
            variants.append(body)
    return variants


def strip_markup(raw: str) -> str:
    """Drop scene markers and presentation content, keeping narration text.

    Lines after a ``PRESENTATION:`` marker are dropped until the next
    narration or scene marker. Text without markers comes back unchanged
    apart from surrounding whitespace.
    """
    kept = []
    in_presentation = False
    for line in (raw or "").splitlines():
        narration = _NARRATION_LINE.match(line)
        if narration:
            in_presentation = False
            kept.append(line[narration.end():])
        elif _HEADER_LINE.match(line):
            in_presentation = False
        elif _PRESENTATION_LINE.match(line):
            in_presentation = True
        elif not in_presentation:
            kept.append(line)
    return "\n".join(kept).strip()
