"""Force candidate sentences into exactly N unique scenes."""

import logging
import re
from typing import Iterable, Optional, Sequence

from ..models import Scene, normalize_text, scene_id
from .settings import DEFAULT_SCENE_COUNT, DEFAULT_SLOT_SECONDS
from .tokenizer import chunk_words, terminate

logger = logging.getLogger(__name__)

# Entries with more words than this may be halved to fill missing slots.
MIN_SPLIT_WORDS = 10

_PLACEHOLDER = re.compile(
    r"^(?:Scene \d+ needs regeneration|Additional content segment \d+)\.$"
)


def missing_placeholder(position: int) -> str:
    """Placeholder for a slot the input could not fill (1-based position)."""
    return f"Scene {position} needs regeneration."


def duplicate_placeholder(counter: int) -> str:
    """Placeholder appended in place of a dropped duplicate."""
    return f"Additional content segment {counter}."


def is_placeholder(text: str) -> bool:
    """True for text produced by the degenerate path."""
    return bool(_PLACEHOLDER.match(text.strip()))


def dedupe(texts: Iterable[str], limit: Optional[int] = None) -> list[str]:
    """Keep the first occurrence of each normalized text, in order."""
    seen: set[str] = set()
    unique: list[str] = []
    for text in texts:
        key = normalize_text(text)
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(text)
        if limit is not None and len(unique) == limit:
            break
    return unique


def _subdivide(entries: list[str], scene_count: int) -> list[str]:
    """Halve the longest entry until there are enough or none can be split."""
    entries = list(entries)
    while len(entries) < scene_count:
        word_counts = [len(entry.split()) for entry in entries]
        longest = max(range(len(entries)), key=lambda i: word_counts[i], default=None)
        if longest is None or word_counts[longest] <= MIN_SPLIT_WORDS:
            break
        words = entries[longest].split()
        middle = (len(words) + 1) // 2
        entries[longest:longest + 1] = [
            terminate(" ".join(words[:middle])),
            " ".join(words[middle:]),
        ]
    return entries


def _redistribute(words: list[str], scene_count: int) -> list[str]:
    entries = _subdivide(chunk_words(words, scene_count), scene_count)
    shortfall = scene_count - len(entries)
    if shortfall > 0:
        logger.warning(
            f"Only {len(entries)} of {scene_count} scenes could be filled; "
            f"adding {shortfall} placeholder(s)"
        )
        entries.extend(
            missing_placeholder(position)
            for position in range(len(entries) + 1, scene_count + 1)
        )
    return entries


def _enforce_unique(entries: list[str], scene_count: int) -> list[str]:
    unique = dedupe(entries, limit=scene_count)
    if len(unique) == scene_count:
        return unique

    logger.warning(
        f"{scene_count - len(unique)} duplicate scene(s) replaced with placeholders"
    )
    seen = {normalize_text(text) for text in unique}
    counter = 1
    while len(unique) < scene_count:
        candidate = duplicate_placeholder(counter)
        counter += 1
        if normalize_text(candidate) in seen:
            continue
        seen.add(normalize_text(candidate))
        unique.append(candidate)
    return unique


def normalize_texts(
    candidates: Sequence[str],
    scene_count: int = DEFAULT_SCENE_COUNT,
    source_text: Optional[str] = None,
) -> list[str]:
    """Map any number of candidates to exactly ``scene_count`` unique texts.

    Args:
        candidates: Candidate sentences, usually from ``tokenize``.
        scene_count: Required number of entries.
        source_text: Text to redistribute when there are no candidates.

    Returns:
        ``scene_count`` non-empty strings, pairwise distinct after
        normalization. Deterministic for a given input.
    """
    if scene_count <= 0:
        raise ValueError("scene_count must be positive")

    cleaned = [candidate.strip() for candidate in candidates if candidate and candidate.strip()]
    unique = dedupe(cleaned)

    if len(unique) >= scene_count:
        entries = unique[:scene_count]
    elif unique:
        words = [word for text in unique for word in text.split()]
        entries = _redistribute(words, scene_count)
    else:
        words = source_text.split() if source_text else []
        entries = _redistribute(words, scene_count)

    return _enforce_unique(entries, scene_count)


def make_scenes(
    texts: Sequence[str],
    slot_seconds: float = DEFAULT_SLOT_SECONDS,
    bullets: Optional[Sequence[Optional[list[str]]]] = None,
) -> list[Scene]:
    """Wrap texts in unapproved scenes with sequential ids and slot timing."""
    scenes: list[Scene] = []
    for index, text in enumerate(texts):
        scenes.append(
            Scene(
                id=scene_id(index),
                text=text,
                presentation_bullets=bullets[index] if bullets else None,
                approved=False,
                start_time=index * slot_seconds,
                end_time=(index + 1) * slot_seconds,
                needs_regeneration=is_placeholder(text),
            )
        )
    return scenes


def normalize(
    candidates: Sequence[str],
    scene_count: int = DEFAULT_SCENE_COUNT,
    slot_seconds: float = DEFAULT_SLOT_SECONDS,
    source_text: Optional[str] = None,
) -> list[Scene]:
    """Normalize candidates and wrap them as scenes.

    See ``normalize_texts`` for the count and uniqueness rules.
    """
    return make_scenes(
        normalize_texts(candidates, scene_count, source_text=source_text),
        slot_seconds=slot_seconds,
    )
