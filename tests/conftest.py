"""Shared fixtures and fakes for the narrator test suite."""

import json
from typing import Optional

import pytest

from narrator.models import ScriptVersion
from narrator.segmentation import build_version, normalize


SENTENCES = [
    "Researchers at three universities studied sleep in adolescents.",
    "The team followed 412 students for two full academic years.",
    "Each participant wore a wrist sensor that logged nightly rest.",
    "Surveys captured mood, stress and screen time every week.",
    "Students who slept under seven hours reported higher anxiety.",
    "Grades dropped most sharply during the winter exam period.",
    "Later school start times reduced the effect by a third.",
    "Weekend recovery sleep did not reverse the weekday deficit.",
    "Phone use after midnight predicted shorter sleep on school nights.",
    "The authors controlled for income, age and commute length.",
    "A regression model explained forty percent of the variance.",
    "Schools in the pilot program saw fewer absences overall.",
    "Parents reported calmer mornings once start times moved later.",
    "The study argues for policy changes in district scheduling.",
    "Better sleep may be the cheapest intervention schools can make.",
]

ALTERNATE_SENTENCES = [
    "Teenagers across three campuses became the subject of a sleep study.",
    "Over two academic years, 412 students shared their nightly data.",
    "Wrist sensors recorded exactly when each participant fell asleep.",
    "Weekly surveys tracked stress, mood and evening screen habits.",
    "Short sleepers described noticeably more anxious school days.",
    "Winter exams brought the steepest decline in student grades.",
    "Pushing the first bell later cut that decline by a third.",
    "Catching up on weekends never erased the weekday sleep debt.",
    "Late-night phone use was the strongest predictor of short sleep.",
    "Income, age and commute length were held constant in the analysis.",
    "Forty percent of the variance was captured by the final model.",
    "Pilot schools recorded a clear drop in unexplained absences.",
    "Families noticed calmer mornings after the schedule change.",
    "The authors call on districts to rethink their timetables.",
    "Protecting teenage sleep could be the most affordable reform of all.",
]


def structured_response(sentences: list[str], bullets: bool = True) -> str:
    """Render sentences in the SCENE / NARRATION / PRESENTATION format."""
    blocks = []
    for i, sentence in enumerate(sentences, start=1):
        lines = [f"SCENE {i}:", f"NARRATION: {sentence}"]
        if bullets:
            lines.extend(["PRESENTATION:", f"- Point {i}a", f"- Point {i}b"])
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def variants_response(*scripts: list[str]) -> str:
    """Render several labeled structured scripts in one response."""
    parts = [
        f"SCRIPT {i}:\n{structured_response(sentences)}"
        for i, sentences in enumerate(scripts, start=1)
    ]
    return "\n\n".join(parts)


class FakeClient:
    """Text generator that replays canned responses and records prompts."""

    def __init__(self, *responses: str) -> None:
        self._responses = list(responses)
        self.prompts: list[str] = []
        self.systems: list[Optional[str]] = []

    @property
    def model(self) -> str:
        return "fake-model"

    def create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        system: Optional[str] = None,
        temperature: float = 0.7,
    ) -> str:
        self.prompts.append(prompt)
        self.systems.append(system)
        if not self._responses:
            raise AssertionError("FakeClient ran out of responses")
        return self._responses.pop(0)


@pytest.fixture()
def sentences() -> list[str]:
    return list(SENTENCES)


@pytest.fixture()
def alternate_sentences() -> list[str]:
    return list(ALTERNATE_SENTENCES)


@pytest.fixture()
def script_version() -> ScriptVersion:
    """Version 1 built from the fifteen reference sentences."""
    return build_version(normalize(SENTENCES))


@pytest.fixture()
def paper_data() -> dict:
    return {
        "metadata": {
            "title": "Sleep and School Performance",
            "authors": [
                "Ada Lovelace",
                {"firstName": "Grace", "lastName": "Hopper", "affiliation": "Navy"},
            ],
            "abstract": "We study adolescent sleep.",
            "keywords": ["sleep", "education"],
        },
        "sections": [
            {"title": "Introduction", "content": "Teenagers sleep too little.", "level": 1},
            {"title": "Results", "content": "Later start times help.", "level": 1},
        ],
    }


@pytest.fixture()
def paper_file(tmp_path, paper_data):
    path = tmp_path / "paper.json"
    path.write_text(json.dumps(paper_data), encoding="utf-8")
    return path
