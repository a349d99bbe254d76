"""CLI entry point for the paper narrator."""

import logging
import typer
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import config
from .errors import ContractViolation, NarratorError
from .models import PaperData, ScriptVersion

DEFAULT_SCRIPT = config.workspace / "script.yaml"

app = typer.Typer(
    name="paper-narrator",
    help="Turn research papers into approvable narration scripts",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"paper-narrator version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Paper Narrator - Write and refine narration scripts with AI."""
    pass


def _load_script(script: Path) -> ScriptVersion:
    if not script.exists():
        typer.echo(f"❌ No script found at {script}")
        typer.echo("   Run 'paper-narrator generate' to create one")
        raise typer.Exit(1)
    try:
        return ScriptVersion.from_yaml(script)
    except Exception as e:
        typer.echo(f"❌ Error loading script: {e}")
        raise typer.Exit(1)


def _load_paper(paper: Path) -> PaperData:
    try:
        return PaperData.from_json(paper)
    except Exception as e:
        typer.echo(f"❌ Error loading paper data: {e}")
        raise typer.Exit(1)


def _save_script(version: ScriptVersion, output: Path) -> None:
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        version.to_yaml(output)
    except OSError as e:
        typer.echo(f"❌ Error saving script: {e}")
        raise typer.Exit(1)
    typer.echo(f"✅ Script saved: {output} (version {version.version})")


def _print_scenes(version: ScriptVersion, width: int = 70) -> None:
    for scene in version.scenes:
        if scene.needs_regeneration:
            icon = "⚠️ "
        else:
            icon = "✅" if scene.approved else "⏳"
        preview = scene.text[:width] + "..." if len(scene.text) > width else scene.text
        typer.echo(f"   {icon} {scene.id} [{scene.start_time:g}-{scene.end_time:g}s] {preview}")
        for bullet in scene.presentation_bullets or []:
            typer.echo(f"         • {bullet}")


def _writer():
    from .agents import ScriptWriterAgent

    try:
        config.validate_required()
        return ScriptWriterAgent()
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)


def _generation_failed(e: Exception) -> None:
    logging.getLogger(__name__).debug("Generation failed", exc_info=e)
    typer.echo(f"❌ Generation failed, please retry ({type(e).__name__})")
    raise typer.Exit(1)


@app.command()
def generate(
    paper: Path = typer.Argument(
        ...,
        help="Extracted paper data (JSON)",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    output: Path = typer.Option(
        DEFAULT_SCRIPT,
        "--output",
        "-o",
        help="Output script file path"
    ),
    variants: int = typer.Option(
        1,
        "--variants",
        "-n",
        help="Number of alternative scripts to write",
        min=1,
        max=10
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Write a narration script (or several alternatives) for a paper."""
    setup_logging(verbose)
    paper_data = _load_paper(paper)
    writer = _writer()

    typer.echo(f"🎬 Writing script for: {paper_data.title}")
    typer.echo(f"   Using model: {writer.model}")

    try:
        if variants == 1:
            versions = [writer.run(paper_data)]
        else:
            versions = writer.generate_variants(paper_data, variants)
    except Exception as e:
        _generation_failed(e)

    for i, version in enumerate(versions, start=1):
        target = output if len(versions) == 1 else output.with_name(f"{output.stem}_{i}{output.suffix}")
        typer.echo("")
        _save_script(version, target)
        _print_scenes(version)


@app.command()
def segment(
    response: Path = typer.Argument(
        ...,
        help="Saved model response (text)",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    output: Path = typer.Option(
        DEFAULT_SCRIPT,
        "--output",
        "-o",
        help="Output script file path"
    ),
    scenes: Optional[int] = typer.Option(
        None,
        "--scenes",
        "-s",
        help="Scene count (defaults to NARRATOR_SCENE_COUNT)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Segment a saved model response into a script without calling the API."""
    from .segmentation import build_version, segment_response

    setup_logging(verbose)
    settings = config.segmentation_settings()
    if scenes:
        settings = settings.model_copy(update={"scene_count": scenes})

    try:
        version = build_version(
            segment_response(response.read_text(encoding="utf-8"), settings),
            scene_count=settings.scene_count,
        )
    except NarratorError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    _save_script(version, output)
    _print_scenes(version)


@app.command()
def status(
    script: Path = typer.Option(
        DEFAULT_SCRIPT,
        "--script",
        "-s",
        help="Path to script YAML file"
    )
) -> None:
    """Show script scenes and approval state."""
    version = _load_script(script)
    flagged = sum(1 for scene in version.scenes if scene.needs_regeneration)

    typer.echo(f"📝 Script version {version.version}")
    typer.echo(f"   Generated: {version.generated_at:%Y-%m-%d %H:%M:%S}")
    typer.echo(f"   Approved: {version.approved_count}/{len(version.scenes)}")
    if flagged:
        typer.echo(f"   ⚠️  {flagged} scene(s) need regeneration")
    typer.echo("")
    _print_scenes(version)


@app.command()
def approve(
    scene_ids: Optional[List[str]] = typer.Argument(
        None,
        help="Scene ids to approve (e.g. scene_1 scene_2)"
    ),
    all_scenes: bool = typer.Option(
        False,
        "--all",
        help="Approve every scene"
    ),
    revoke: bool = typer.Option(
        False,
        "--revoke",
        help="Withdraw approval instead"
    ),
    script: Path = typer.Option(
        DEFAULT_SCRIPT,
        "--script",
        "-s",
        help="Path to script YAML file"
    ),
) -> None:
    """Approve (or un-approve) scenes."""
    from .segmentation import set_approval

    version = _load_script(script)
    ids = [scene.id for scene in version.scenes] if all_scenes else list(scene_ids or [])
    if not ids:
        typer.echo("❌ Name at least one scene id, or pass --all")
        raise typer.Exit(1)

    try:
        updated = set_approval(version, ids, approved=not revoke)
    except NarratorError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    _save_script(updated, script)
    typer.echo(f"   Approved: {updated.approved_count}/{len(updated.scenes)}")


@app.command()
def edit(
    scene_id: str = typer.Argument(..., help="Scene id to edit"),
    text: Optional[str] = typer.Option(
        None,
        "--text",
        "-t",
        help="New narration sentence"
    ),
    bullets: Optional[List[str]] = typer.Option(
        None,
        "--bullet",
        "-b",
        help="Presentation bullet (repeat for several)"
    ),
    clear_bullets: bool = typer.Option(
        False,
        "--clear-bullets",
        help="Remove every presentation bullet"
    ),
    script: Path = typer.Option(
        DEFAULT_SCRIPT,
        "--script",
        "-s",
        help="Path to script YAML file"
    ),
) -> None:
    """Edit a scene's narration or presentation bullets."""
    from .segmentation import edit_scene

    version = _load_script(script)
    try:
        updated = edit_scene(version, scene_id, text=text, presentation_bullets=[] if clear_bullets else (bullets or None))
    except NarratorError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    _save_script(updated, script)


@app.command()
def regenerate(
    paper: Path = typer.Argument(
        ...,
        help="Extracted paper data (JSON)",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    script: Path = typer.Option(
        DEFAULT_SCRIPT,
        "--script",
        "-s",
        help="Path to script YAML file"
    ),
    full: bool = typer.Option(
        False,
        "--full",
        help="Rewrite every scene and discard approvals"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Regenerate unapproved scenes (or the whole script with --full)."""
    setup_logging(verbose)
    version = _load_script(script)
    paper_data = _load_paper(paper)

    if not full and version.all_approved:
        typer.echo("✅ Every scene is approved; nothing to regenerate")
        return

    writer = _writer()
    typer.echo(f"🔁 Regenerating {'all' if full else 'unapproved'} scenes of version {version.version}")
    try:
        if full:
            updated = writer.regenerate(paper_data, version)
        else:
            updated = writer.regenerate_unapproved(paper_data, version)
    except ContractViolation as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)
    except Exception as e:
        _generation_failed(e)

    _save_script(updated, script)
    _print_scenes(updated)


@app.command()
def export(
    script: Path = typer.Option(
        DEFAULT_SCRIPT,
        "--script",
        "-s",
        help="Path to script YAML file"
    ),
    title: Optional[str] = typer.Option(
        None,
        "--title",
        help="Paper title for the export"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output JSON path (defaults to script_<title>_v<version>.json)"
    ),
) -> None:
    """Export the approved narration as JSON."""
    from .segmentation import export_approved

    version = _load_script(script)
    projection = export_approved(version, paper_title=title or "Untitled Paper")
    target = output or script.parent / projection.default_filename()

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(projection.to_json(), encoding="utf-8")
    except OSError as e:
        typer.echo(f"❌ Error writing export: {e}")
        raise typer.Exit(1)

    typer.echo(f"✅ Export saved: {target}")
    typer.echo(f"   Status: {projection.status}")
    if projection.status == "draft":
        typer.echo(f"   Approved: {version.approved_count}/{len(version.scenes)}")
