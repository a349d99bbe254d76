"""Split freeform narration into candidate sentences.

The tiers run in order and the first one that yields anything wins:

1. ``terminal_punctuation`` - split after ``.``/``!``/``?`` when the next
   word starts with a capital letter, dropping short fragments.
2. ``punctuation_runs`` - split on any run of ``.``/``!``/``?``, same filter.
3. ``word_chunks`` - spread the words evenly over ``scene_count`` chunks.

Nothing here guarantees a count or uniqueness; see ``normalizer``.
"""

import logging
import math
import re
from typing import Callable

from .settings import DEFAULT_MIN_SENTENCE_CHARS, DEFAULT_SCENE_COUNT

logger = logging.getLogger(__name__)

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+(?=[A-Z])")
_PUNCTUATION_RUN = re.compile(r"[.!?]+")
_TERMINAL = (".", "!", "?")

Tier = Callable[[str, int, int], list[str]]


def _keep_long(fragments: list[str], min_chars: int) -> list[str]:
    stripped = (fragment.strip() for fragment in fragments)
    return [fragment for fragment in stripped if len(fragment) > min_chars]


def split_terminal_punctuation(text: str, scene_count: int, min_chars: int) -> list[str]:
    """Tier 1: sentence boundaries followed by a capitalized word."""
    return _keep_long(_SENTENCE_BOUNDARY.split(text), min_chars)


def split_punctuation_runs(text: str, scene_count: int, min_chars: int) -> list[str]:
    """Tier 2: any run of terminal punctuation, regardless of case."""
    return _keep_long(_PUNCTUATION_RUN.split(text), min_chars)


def terminate(fragment: str) -> str:
    """Append a period unless the fragment already ends a sentence."""
    return fragment if fragment.endswith(_TERMINAL) else fragment + "."


def chunk_words(words: list[str], chunk_count: int) -> list[str]:
    """Spread words over at most ``chunk_count`` chunks of equal size.

    Every chunk but the last gets a trailing period.
    """
    if not words or chunk_count <= 0:
        return []

    per_chunk = math.ceil(len(words) / chunk_count)
    chunks: list[str] = []
    for i in range(chunk_count):
        start = i * per_chunk
        if start >= len(words):
            break
        chunk = " ".join(words[start:start + per_chunk])
        is_last = i == chunk_count - 1 or start + per_chunk >= len(words)
        chunks.append(chunk if is_last else terminate(chunk))
    return chunks


def split_word_chunks(text: str, scene_count: int, min_chars: int) -> list[str]:
    """Tier 3: last resort, ignores punctuation entirely."""
    return chunk_words(text.split(), scene_count)


TIERS: list[tuple[str, Tier]] = [
    ("terminal_punctuation", split_terminal_punctuation),
    ("punctuation_runs", split_punctuation_runs),
    ("word_chunks", split_word_chunks),
]


def tokenize(
    text: str,
    scene_count: int = DEFAULT_SCENE_COUNT,
    min_chars: int = DEFAULT_MIN_SENTENCE_CHARS,
) -> list[str]:
    """Split text into candidate sentences.

    Args:
        text: Freeform narration from the generation service.
        scene_count: Chunk count for the word-split tier.
        min_chars: Fragments of this length or shorter are discarded by the
            punctuation tiers.

    Returns:
        Candidate sentences in reading order. Empty only when the text has
        no words at all.
    """
    if not text or not text.strip():
        return []

    for name, tier in TIERS:
        sentences = tier(text, scene_count, min_chars)
        if sentences:
            logger.debug(f"Tokenizer tier '{name}' produced {len(sentences)} candidates")
            return sentences

    return []
