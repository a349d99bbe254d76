"""Tests for narrator.segmentation.structured."""

from narrator.segmentation.structured import (
    extract_bullets,
    find_scene_blocks,
    parse_structured,
    split_variants,
    strip_markup,
)

from conftest import structured_response, variants_response


class TestExtractBullets:
    def test_recognized_prefixes(self):
        block = "- dash\n* star\n• dot\n– en dash\n1. numbered\n2) paren\nnot a bullet\n-   \n"
        assert extract_bullets(block) == ["dash", "star", "dot", "en dash", "numbered", "paren"]

    def test_no_bullets_is_none(self):
        assert extract_bullets("Just prose here.") is None
        assert extract_bullets("") is None
        assert extract_bullets(None) is None

    def test_numbers_inside_text_are_not_bullets(self):
        assert extract_bullets("1.5x faster than baseline") is None


class TestFindSceneBlocks:
    def test_multiline_narration_stops_at_presentation(self):
        raw = (
            "SCENE 1:\n"
            "NARRATION: The opening line\n"
            "continues on a second line.\n"
            "PRESENTATION:\n"
            "- First point\n"
            "- Second point\n"
            "SCENE 2:\n"
            "NARRATION: The second scene has no slide.\n"
        )
        assert find_scene_blocks(raw) == [
            ("The opening line continues on a second line.", ["First point", "Second point"]),
            ("The second scene has no slide.", None),
        ]

    def test_tolerates_markdown_and_case(self):
        raw = (
            "**Scene 1:**\n"
            "**Narration:** Markdown wrapped narration text.\n"
            "**Presentation Text:**\n"
            "* Bold bullet\n"
        )
        assert find_scene_blocks(raw) == [("Markdown wrapped narration text.", ["Bold bullet"])]

    def test_empty_narration_contributes_nothing(self):
        raw = "SCENE 1:\nNARRATION:\nPRESENTATION:\n- Orphan bullet\n"
        assert find_scene_blocks(raw) == []

    def test_scene_words_inside_narration_do_not_split(self):
        raw = "SCENE 1:\nNARRATION: The scene 2 results were striking.\n"
        assert find_scene_blocks(raw) == [("The scene 2 results were striking.", None)]

    def test_titles_after_the_scene_number(self):
        raw = (
            "SCENE 1: Opening Hook\n"
            "NARRATION: Sleep shapes how teenagers learn.\n"
            "PRESENTATION:\n"
            "- Sleep matters\n\n"
            "**Scene 2 - The Method**\n"
            "Narration: Sensors tracked every night of rest.\n"
        )
        assert find_scene_blocks(raw) == [
            ("Sleep shapes how teenagers learn.", ["Sleep matters"]),
            ("Sensors tracked every night of rest.", None),
        ]

    def test_narration_on_the_header_line(self):
        raw = "SCENE 1: NARRATION: Everything on one line.\n"
        assert find_scene_blocks(raw) == [("Everything on one line.", None)]


class TestParseStructured:
    def test_full_response_parses_with_bullets(self, sentences):
        scenes = parse_structured(structured_response(sentences))
        assert [scene.text for scene in scenes] == sentences
        assert all(scene.presentation_bullets for scene in scenes)
        assert scenes[0].presentation_bullets == ["Point 1a", "Point 1b"]
        assert scenes[0].id == "scene_1"
        assert scenes[14].end_time == 90.0

    def test_missing_bullets_stay_unset(self, sentences):
        scenes = parse_structured(structured_response(sentences, bullets=False))
        assert len(scenes) == 15
        assert all(scene.presentation_bullets is None for scene in scenes)

    def test_partial_structure_is_rejected(self, sentences):
        assert parse_structured(structured_response(sentences[:10])) is None

    def test_surplus_structure_is_rejected(self, sentences, alternate_sentences):
        assert parse_structured(structured_response(sentences + alternate_sentences[:1])) is None

    def test_plain_text_is_rejected(self, sentences):
        assert parse_structured(" ".join(sentences)) is None
        assert parse_structured("") is None

    def test_repeated_narration_is_rejected(self, sentences):
        repeated = sentences[:14] + [sentences[0].lower()]
        assert parse_structured(structured_response(repeated)) is None

    def test_custom_scene_count(self, sentences):
        scenes = parse_structured(structured_response(sentences[:4]), scene_count=4, slot_seconds=5)
        assert [scene.end_time for scene in scenes] == [5, 10, 15, 20]


class TestSplitVariants:
    def test_splits_on_labels_and_ignores_preamble(self, sentences, alternate_sentences):
        raw = "Here are your scripts.\n\n" + variants_response(sentences, alternate_sentences)
        variants = split_variants(raw)
        assert len(variants) == 2
        assert variants[0].startswith("SCENE 1:")
        assert sentences[-1] in variants[0]
        assert alternate_sentences[0] not in variants[0]
        assert alternate_sentences[-1] in variants[1]

    def test_plain_script_bodies(self):
        raw = "SCRIPT 1:\nFirst body.\n\nSCRIPT 2:\nSecond body.\nSCRIPT 3:\n"
        assert split_variants(raw) == ["First body.", "Second body."]

    def test_no_labels(self):
        assert split_variants("Just one script.") == []


class TestStripMarkup:
    def test_keeps_only_narration(self, sentences):
        text = strip_markup(structured_response(sentences[:3]))
        assert text.split() == " ".join(sentences[:3]).split()

    def test_titled_headers_and_variant_labels_are_dropped(self):
        raw = (
            "SCRIPT 1:\n"
            "SCENE 1: Opening Hook\n"
            "NARRATION: Teenagers need more sleep.\n"
            "PRESENTATION:\n"
            "Key idea\n"
            "- Sleep debt\n"
            "SCENE 2:\n"
            "Later starts helped.\n"
        )
        assert strip_markup(raw).split("\n") == ["Teenagers need more sleep.", "Later starts helped."]

    def test_plain_text_is_unchanged(self):
        text = "Scene 3 of the study was filmed at night. Results followed."
        assert strip_markup(f"  {text}\n") == text
