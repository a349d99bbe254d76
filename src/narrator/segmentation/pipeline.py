"""Turn a raw model response into scenes."""

import logging
from typing import Optional

from ..errors import UpstreamCountMismatch, UpstreamFormatError
from ..models import Scene
from .normalizer import normalize
from .settings import SegmentationSettings
from .structured import parse_structured, split_variants, strip_markup
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def segment_response(
    raw: str, settings: Optional[SegmentationSettings] = None
) -> list[Scene]:
    """Segment one script from a response.

    The structured format is preferred because it carries presentation
    bullets. Anything else has its markers stripped and goes through the
    tokenizer and normalizer.

    Raises:
        UpstreamFormatError: If the response is empty.
    """
    settings = settings or SegmentationSettings()
    if not raw or not raw.strip():
        raise UpstreamFormatError("The generation service returned an empty response")

    scenes = parse_structured(raw, settings.scene_count, settings.slot_seconds)
    if scenes is not None:
        logger.debug(f"Parsed {len(scenes)} structured scenes")
        return scenes

    logger.info("No usable scene structure in response; segmenting plain text")
    text = strip_markup(raw)
    candidates = tokenize(text, settings.scene_count, settings.min_sentence_chars)
    return normalize(
        candidates,
        scene_count=settings.scene_count,
        slot_seconds=settings.slot_seconds,
        source_text=text,
    )


def segment_variants(
    raw: str, expected: int, settings: Optional[SegmentationSettings] = None
) -> list[list[Scene]]:
    """Segment every labeled script in a multi-variant response.

    Raises:
        UpstreamFormatError: If the response is empty.
        UpstreamCountMismatch: If fewer than ``expected`` scripts are labeled.
    """
    if not raw or not raw.strip():
        raise UpstreamFormatError("The generation service returned an empty response")

    variants = split_variants(raw)
    if len(variants) < expected:
        raise UpstreamCountMismatch(expected, len(variants))
    if len(variants) > expected:
        logger.warning(f"Response had {len(variants)} scripts; keeping the first {expected}")

    return [segment_response(text, settings) for text in variants[:expected]]
