"""Prompt construction for narration scripts."""

from pathlib import Path

from ..models import PaperData, ScriptVersion
from ..segmentation import SegmentationSettings

PROMPT_TEMPLATE_PATH = (
    Path(__file__).parent.parent.parent.parent / "templates" / "prompts" / "scriptwriter.txt"
)


def load_system_prompt() -> str:
    """Load the system prompt from template file."""
    if PROMPT_TEMPLATE_PATH.exists():
        return PROMPT_TEMPLATE_PATH.read_text(encoding="utf-8")
    # Fallback inline prompt if template not found
    return """You are a professional narration scriptwriter who turns structured research
data into short, natural, spoken-style scripts for video narration.
Use specific findings, statistics and terminology from the paper. Open with a hook
naming the title and authors, build through methods and results, and close with
the study's significance. Follow the output format exactly and add no commentary."""


def _scene_format(settings: SegmentationSettings) -> str:
    n = settings.scene_count
    return "\n".join([
        f"Format every script as exactly {n} scene blocks, numbered 1 to {n}:",
        "",
        "SCENE 1:",
        "NARRATION: <one spoken sentence>",
        "PRESENTATION:",
        "- <short slide bullet>",
        "- <short slide bullet>",
        "",
        "Each NARRATION is a single sentence, different from every other scene.",
        "Each PRESENTATION has 2 to 4 bullets of at most eight words.",
    ])


def _paper_section(paper: PaperData) -> list[str]:
    lines = [f"TITLE: {paper.title}"]
    if paper.author_names:
        lines.append(f"AUTHORS: {', '.join(paper.author_names)}")
    lines.extend(["", "Paper Data:", paper.to_prompt_json()])
    return lines


def _length_line(settings: SegmentationSettings) -> str:
    return (
        f"Write a {settings.total_seconds:g}-second narration script of exactly "
        f"{settings.scene_count} sentences (about {settings.scene_count * 16} words)."
    )


def build_script_prompt(paper: PaperData, settings: SegmentationSettings) -> str:
    """Prompt for a single script."""
    return "\n".join([
        _length_line(settings),
        "",
        *_paper_section(paper),
        "",
        _scene_format(settings),
    ])


def build_variants_prompt(
    paper: PaperData, settings: SegmentationSettings, count: int
) -> str:
    """Prompt for several distinct alternative scripts in one response."""
    labels = [f"SCRIPT {i}:" for i in range(1, count + 1)]
    return "\n".join([
        f"Write {count} distinctly different variations of the script below.",
        _length_line(settings),
        "Each variation uses a different opening hook, emphasizes different aspects",
        "of the research and orders the information differently.",
        "",
        *_paper_section(paper),
        "",
        f"Start each variation with its label on its own line: {', '.join(labels)}",
        "",
        _scene_format(settings),
    ])


def build_regeneration_prompt(
    paper: PaperData, settings: SegmentationSettings, previous: ScriptVersion
) -> str:
    """Prompt for a complete rewrite that differs from the previous script."""
    return "\n".join([
        _length_line(settings),
        "",
        *_paper_section(paper),
        "",
        "Previous Script (for reference):",
        previous.raw_text,
        "",
        "Write a different version with the same quality and structure.",
        "",
        _scene_format(settings),
    ])


def build_partial_prompt(
    paper: PaperData, settings: SegmentationSettings, current: ScriptVersion
) -> str:
    """Prompt that keeps approved sentences and rewrites the rest in place."""
    keep = []
    rewrite = []
    for position, scene in enumerate(current.scenes, start=1):
        if scene.approved:
            keep.append(f"{position}. {scene.text}")
        else:
            rewrite.append(str(position))

    return "\n".join([
        _length_line(settings),
        "",
        *_paper_section(paper),
        "",
        "These approved sentences stay word for word at their scene numbers:",
        *keep,
        "",
        f"Write new sentences for scenes {', '.join(rewrite)} so the script keeps",
        "its opening, body and closing structure and flows around the approved text.",
        "Do not reuse any approved sentence.",
        "",
        _scene_format(settings),
    ])
