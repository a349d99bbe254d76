"""Segmentation engine: raw narration in, fixed-size scene sets out."""

from .settings import SegmentationSettings
from .tokenizer import tokenize
from .normalizer import normalize, normalize_texts, is_placeholder
from .structured import parse_structured, split_variants, strip_markup
from .scene_set import (
    build_version,
    rebuild_version,
    regenerate_partial,
    set_approval,
    approve_all,
    edit_scene,
    export_approved,
)
from .pipeline import segment_response, segment_variants

__all__ = [
    "SegmentationSettings",
    "tokenize",
    "normalize",
    "normalize_texts",
    "is_placeholder",
    "parse_structured",
    "split_variants",
    "strip_markup",
    "build_version",
    "rebuild_version",
    "regenerate_partial",
    "set_approval",
    "approve_all",
    "edit_scene",
    "export_approved",
    "segment_response",
    "segment_variants",
]
