"""pagewright CLI interface.

Commands:
- build: Build a bundle page, including templates of required bundles
- test: Build a standalone test page from the entry's own templates
- fragments: List the templates a page is assembled from
- check: Validate bundle definitions and layouts
- init: Write a default configuration file

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from pagewright import __version__
from pagewright.config import PagewrightConfig, create_default_config, load_config
from pagewright.utils.logging import configure_from_cli, get_logger

if TYPE_CHECKING:
    from pagewright.models import Entry, Project, ProjectBundle

app = typer.Typer(
    name="pagewright",
    help="Assemble bundle HTML pages from localized template fragments",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: PagewrightConfig | None = None
_logger = get_logger()

LanguageOption = Annotated[
    str | None,
    typer.Option("--language", "-l", help="Language to build (default from config)"),
]
EntryOption = Annotated[
    str,
    typer.Option("--entry", "-e", help="Entry filename within the bundle"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pagewright {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with timestamps"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress info messages (warnings and errors only)"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Enable CI mode with JSON output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """pagewright - static HTML assembly for multi-bundle web applications."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


def _load_target(
    bundle_name: str,
    entry_name: str,
    language: str | None,
) -> tuple["Project", "ProjectBundle", "Entry"]:
    """Resolve CLI arguments to (project, bundle, entry), exiting on errors."""
    from pagewright.models import Project, ProjectError

    project = Project(_config or PagewrightConfig())
    try:
        bundle = project.bundle(bundle_name)
        entry = bundle.entry_named(entry_name, language)
    except ProjectError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    return project, bundle, entry


def _run_build(
    bundle_name: str,
    entry_name: str,
    language: str | None,
    deep: bool,
    dry_run: bool,
) -> None:
    from pagewright.builder import BuildError, HtmlBuilder
    from pagewright.models import ProjectError

    project, bundle, entry = _load_target(bundle_name, entry_name, language)
    builder = HtmlBuilder(project.config)

    _logger.info(f"Building {entry.filename} for {bundle.bundle_name} ({entry.language})")
    try:
        if dry_run:
            typer.echo(builder.build(entry, bundle, deep=deep))
            return
        path = builder.build_to_file(entry, bundle, deep=deep)
    except (BuildError, OSError, ProjectError) as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    _logger.info(f"Wrote {path}")


# =============================================================================
# build / test commands
# =============================================================================


@app.command()
def build(
    bundle: Annotated[str, typer.Argument(help="Bundle to build")],
    language: LanguageOption = None,
    entry: EntryOption = "index.html",
    shallow: Annotated[
        bool,
        typer.Option("--shallow", help="Do not include templates of required bundles"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the document instead of writing it"),
    ] = False,
) -> None:
    """Build a bundle page.

    Exit codes:
        0: Page built successfully
        1: Error during build (nothing written)
    """
    _run_build(bundle, entry, language, deep=not shallow, dry_run=dry_run)


@app.command()
def test(
    bundle: Annotated[str, typer.Argument(help="Bundle the test page belongs to")],
    entry: Annotated[str, typer.Argument(help="Entry filename of the test page")],
    language: LanguageOption = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the document instead of writing it"),
    ] = False,
) -> None:
    """Build a standalone test page from the entry's own templates."""
    _run_build(bundle, entry, language, deep=False, dry_run=dry_run)


# =============================================================================
# fragments command
# =============================================================================


@app.command()
def fragments(
    bundle: Annotated[str, typer.Argument(help="Bundle to inspect")],
    language: LanguageOption = None,
    entry: EntryOption = "index.html",
    shallow: Annotated[
        bool,
        typer.Option("--shallow", help="Do not include templates of required bundles"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """List the templates a page is assembled from, in render order."""
    from pagewright.builder import resolve_fragments
    from pagewright.models import ProjectError

    _, target_bundle, target = _load_target(bundle, entry, language)
    try:
        resolved = resolve_fragments(target, target_bundle, deep=not shallow)
    except ProjectError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    rows = [
        {
            "filename": fragment.filename,
            "language": fragment.language,
            "source_path": str(fragment.source_path),
        }
        for fragment in resolved
    ]

    if json_output:
        typer.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        typer.echo(f"  {row['filename']} [{row['language'] or '-'}]  {row['source_path']}")


# =============================================================================
# check command
# =============================================================================


@app.command()
def check() -> None:
    """Validate bundle requirements and layouts.

    Exit codes:
        0: All bundles valid
        1: One or more problems found
    """
    from pagewright.builder.dispatcher import match_template_kind
    from pagewright.models import Project, ProjectError

    project = Project(_config or PagewrightConfig())
    problems: list[str] = []

    if not project.bundles:
        problems.append("No bundles configured")

    for bundle in project.bundles:
        try:
            required = [b.bundle_name for b in bundle.all_required_bundles()]
        except ProjectError as e:
            problems.append(f"{bundle.bundle_name}: {e}")
            required = []

        layout = bundle.layout_path
        if not layout.is_file():
            problems.append(f"{bundle.bundle_name}: layout not found: {layout}")
        elif match_template_kind(layout) is None:
            problems.append(f"{bundle.bundle_name}: unsupported layout type: {layout}")

        if not bundle.root.is_dir():
            problems.append(f"{bundle.bundle_name}: root not found: {bundle.root}")

        typer.echo(f"  {bundle.bundle_name}: requires {' -> '.join(required) or '-'}")

    if problems:
        typer.echo("Check FAILED")
        for problem in problems:
            typer.echo(f"   • {problem}")
        raise typer.Exit(1)

    typer.echo("All bundles valid")


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing configuration"),
    ] = False,
) -> None:
    """Write a default .pagewright/config.yaml in the current directory."""
    config_path = Path.cwd() / ".pagewright" / "config.yaml"

    if config_path.exists() and not force:
        _logger.error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(1)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(create_default_config(), encoding="utf-8")
    typer.echo(f"Created {config_path}")
