"""Tests for narrator.segmentation.normalizer."""

import pytest

from narrator.models import normalize_text
from narrator.segmentation.normalizer import (
    dedupe,
    is_placeholder,
    normalize,
    normalize_texts,
)
from narrator.segmentation.tokenizer import tokenize


def assert_well_formed(texts, count=15):
    assert len(texts) == count
    assert all(text.strip() for text in texts)
    assert len({normalize_text(text) for text in texts}) == count


class TestDedupe:
    def test_keeps_first_occurrence_ignoring_case_and_spacing(self):
        assert dedupe(["Hello  World.", "hello world.", "Other."]) == ["Hello  World.", "Other."]

    def test_limit(self):
        assert dedupe(["a", "b", "c"], limit=2) == ["a", "b"]


class TestNormalizeTexts:
    def test_exact_count_passes_through(self, sentences):
        assert normalize_texts(sentences) == sentences

    def test_surplus_is_dropped(self, sentences, alternate_sentences):
        assert normalize_texts(sentences + alternate_sentences) == sentences

    def test_duplicates_are_skipped_before_counting(self, sentences, alternate_sentences):
        candidates = [sentences[0], sentences[0].upper()] + sentences[1:] + alternate_sentences[:1]
        assert normalize_texts(candidates) == sentences

    def test_too_few_candidates_are_redistributed_by_words(self):
        candidates = [" ".join(f"w{i}" for i in range(start, start + 10)) for start in (0, 10, 20)]
        texts = normalize_texts(candidates)
        assert_well_formed(texts)
        assert texts[0] == "w0 w1."
        assert texts[-1] == "w28 w29"

    def test_long_entries_are_subdivided_to_fill_slots(self):
        # 151 words -> 11 words per slot -> 14 slots, one more from a split
        candidates = [" ".join(f"x{i}" for i in range(151))]
        texts = normalize_texts(candidates)
        assert_well_formed(texts)
        assert not any(is_placeholder(text) for text in texts)
        assert " ".join(texts).replace(".", "").split() == [f"x{i}" for i in range(151)]

    def test_shortfall_is_filled_with_labeled_placeholders(self):
        texts = normalize_texts(["A.", "B.", "C."])
        assert_well_formed(texts)
        assert texts[:3] == ["A.", "B.", "C."]
        assert texts[3] == "Scene 4 needs regeneration."
        assert texts[14] == "Scene 15 needs regeneration."

    def test_no_candidates_uses_source_text(self):
        source = " ".join(f"token{i}" for i in range(45))
        texts = normalize_texts([], source_text=source)
        assert_well_formed(texts)
        assert texts[0] == "token0 token1 token2."

    def test_nothing_at_all_yields_placeholders_only(self):
        texts = normalize_texts(["", "   "])
        assert_well_formed(texts)
        assert all(is_placeholder(text) for text in texts)

    def test_colliding_slices_get_numbered_segments(self):
        # 30 words -> 2 per slot; "again again" repeats
        words = ["again", "again"] * 3 + [f"u{i}" for i in range(24)]
        texts = normalize_texts([" ".join(words)])
        assert_well_formed(texts)
        assert texts.count("again again.") == 1
        assert texts[-2:] == ["Additional content segment 1.", "Additional content segment 2."]

    def test_is_deterministic(self):
        candidates = ["Some candidate sentence with words.", "Another one that is rather long too."]
        assert normalize_texts(candidates) == normalize_texts(list(candidates))

    def test_rejects_non_positive_count(self):
        with pytest.raises(ValueError):
            normalize_texts(["x"], scene_count=0)

    @pytest.mark.parametrize(
        "candidates",
        [
            [],
            ["x"],
            ["Same sentence here."] * 40,
            ["one two three four five six seven eight nine ten eleven twelve"] * 2,
            [f"Sentence number {i} is long enough to keep." for i in range(7)],
        ],
    )
    def test_always_well_formed(self, candidates):
        assert_well_formed(normalize_texts(candidates))


class TestNormalize:
    def test_assigns_ids_and_slot_timing(self, sentences):
        scenes = normalize(sentences, slot_seconds=6.0)
        assert [scene.id for scene in scenes] == [f"scene_{i}" for i in range(1, 16)]
        assert (scenes[0].start_time, scenes[0].end_time) == (0.0, 6.0)
        assert (scenes[14].start_time, scenes[14].end_time) == (84.0, 90.0)
        assert not any(scene.approved for scene in scenes)
        assert all(scene.presentation_bullets is None for scene in scenes)

    def test_custom_count_and_slot(self, sentences):
        scenes = normalize(sentences, scene_count=5, slot_seconds=12.0)
        assert len(scenes) == 5
        assert scenes[-1].end_time == 60.0

    def test_placeholders_are_flagged(self):
        scenes = normalize(tokenize("A. B. C."))
        assert [scene.text for scene in scenes[:3]] == ["A.", "B.", "C."]
        assert not any(scene.needs_regeneration for scene in scenes[:3])
        assert all(scene.needs_regeneration for scene in scenes[3:])
        assert_well_formed([scene.text for scene in scenes])
