"""wfdocs CLI interface.

Commands:
- generate: Scan workflows and rewrite the README's generated regions
- scan: List the workflows that would be documented
- check: Validate the repository layout and README markers
- init: Initialize wfdocs configuration
- validate: Validate a Jinja2 template

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines
- --version: Show version and exit
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from wfdocs import __version__
from wfdocs.config import WfdocsConfig, create_default_config, find_config_file, load_config
from wfdocs.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="wfdocs",
    help="Generate README documentation for reusable GitHub Actions workflows",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: WfdocsConfig | None = None
_explicit_config = False
_logger = get_logger()

RepoOption = Annotated[
    Path,
    typer.Option(
        "--repo",
        "-r",
        help="Repository root",
        exists=True,
        file_okay=False,
    ),
]


def _get_config(repo_path: Path | None = None) -> WfdocsConfig:
    """Return the active config.

    Without --config, a config file inside the repository wins over one
    discovered in the current directory.
    """
    if not _explicit_config and repo_path is not None:
        repo_config = find_config_file(repo_path)
        if repo_config is not None and (_config is None or _config.config_path != repo_config):
            try:
                return load_config(config_path=repo_config)
            except Exception as e:
                _logger.error(f"Failed to load config: {e}")
                raise typer.Exit(1)
    return _config or WfdocsConfig()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"wfdocs {__version__}")
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
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log lines",
        ),
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
    """wfdocs - README generator for reusable GitHub Actions workflows."""
    global _config, _explicit_config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)
    _explicit_config = config is not None

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


# =============================================================================
# generate command
# =============================================================================


@app.command()
def generate(
    repo: RepoOption = Path("."),
    readme: Annotated[
        Path | None,
        typer.Option(
            "--readme",
            help="README path (overrides config)",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Preview output without writing files",
        ),
    ] = False,
    check_only: Annotated[
        bool,
        typer.Option(
            "--check",
            help="Exit with status 1 if the README is out of date (nothing is written)",
        ),
    ] = False,
) -> None:
    """Scan workflow files and regenerate the README sections.

    Exit codes:
        0: README generated (or already up to date)
        1: Error during generation, or out of date with --check
        2: Generated, but some workflow files were skipped (ci.fail_on_warning)
    """
    from wfdocs.document import DocumentError
    from wfdocs.pipeline import GenerationOptions, GenerationPipeline

    repo_path = repo.resolve()
    config = _get_config(repo_path)
    _logger.info(f"Repository: {repo_path}")

    pipeline = GenerationPipeline(config=config)
    options = GenerationOptions(readme=readme, dry_run=dry_run or check_only)

    try:
        result = pipeline.run(repo_path, options)
    except DocumentError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Generation failed: {e}")
        raise typer.Exit(1)

    _logger.info(
        f"📋 {result.workflow_count} workflow(s), {result.reusable_count} reusable"
    )
    if result.errors:
        _logger.warning(f"Skipped {len(result.errors)} workflow file(s)")

    if check_only:
        if result.changed:
            _logger.error(f"{result.readme_path} is out of date; run `wfdocs generate`")
            raise typer.Exit(1)
        typer.echo(f"✅ {result.readme_path} is up to date")
    elif dry_run:
        typer.echo("\n--- Documentation Preview ---\n")
        typer.echo(pipeline.preview(result))
        typer.echo("\n--- End Preview ---")
    elif result.written:
        typer.echo(f"✅ Documentation written to: {result.readme_path}")
    else:
        typer.echo(f"✅ {result.readme_path} is up to date")

    if result.errors and config.ci.fail_on_warning:
        raise typer.Exit(2)


# =============================================================================
# scan command
# =============================================================================


@app.command()
def scan(
    repo: RepoOption = Path("."),
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results as JSON",
        ),
    ] = False,
) -> None:
    """List the workflows found in the repository.

    Exit codes:
        0: Scan completed
        2: Some workflow files were skipped (ci.fail_on_warning)
    """
    from wfdocs.scanner import WorkflowScanner

    repo_path = repo.resolve()
    config = _get_config(repo_path)
    classifier = config.build_classifier()
    result = WorkflowScanner(config.paths.workflows).scan(repo_path)

    if json_output:
        payload = result.to_dict()
        for entry, record in zip(payload["workflows"], result.workflows, strict=True):
            entry["category"] = classifier.classify(record).label
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))
    else:
        typer.echo(f"\n🔍 {len(result.workflows)} workflow(s)\n")
        for record in result.workflows:
            kind = "reusable" if record.is_reusable else "internal"
            category = classifier.classify(record)
            typer.echo(f"  {category.icon} {record.file_name} ({kind})")
            typer.echo(f"     └─ {record.name}: {record.description}")
        for error in result.errors:
            typer.echo(f"  ⚠️  {error.file_path}: {error.message}")

    if result.errors and config.ci.fail_on_warning:
        raise typer.Exit(2)


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    repo: RepoOption = Path("."),
    readme: Annotated[
        Path | None,
        typer.Option(
            "--readme",
            help="README path (overrides config)",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results as JSON",
        ),
    ] = False,
) -> None:
    """Validate the repository before generating.

    Exit codes:
        0: All checks passed
        1: One or more required checks failed
        2: Only optional checks failed (warnings)
    """
    from wfdocs.utils.preflight import PreflightChecker

    repo_path = repo.resolve()
    checker = PreflightChecker(_get_config(repo_path))
    result = checker.check_all(repo_path, readme=readme)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        raise typer.Exit(0 if result.success else 1)

    typer.echo("\n🔍 Preflight Check Results\n")
    for item in result.checks:
        status = "✅" if item.passed else "❌"
        required_str = " [required]" if item.required else " [optional]"
        typer.echo(f"  {status} {item.name}{required_str}")
        typer.echo(f"     └─ {item.message}")
    typer.echo()

    if result.errors:
        typer.echo("❌ Preflight check FAILED")
        for error in result.errors:
            typer.echo(f"   • {error}")
        raise typer.Exit(1)
    elif result.warnings:
        typer.echo("⚠️  Preflight check passed with WARNINGS")
        for warning in result.warnings:
            typer.echo(f"   • {warning}")
        raise typer.Exit(2)
    else:
        typer.echo("✅ All preflight checks passed")
        raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    repo: RepoOption = Path("."),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
    add_markers: Annotated[
        bool,
        typer.Option(
            "--readme",
            help="Append missing marker pairs to the README",
        ),
    ] = False,
) -> None:
    """Initialize wfdocs configuration.

    Creates .wfdocs/config.yaml and, with --readme, seeds the README with
    the marker pairs the generate command fills in.
    """
    from wfdocs.document import (
        FOLDER_TREE_REGION,
        WORKFLOWS_REGION,
        DocumentError,
        has_region,
        read_document,
        write_document,
    )

    repo_path = repo.resolve()
    config_dir = repo_path / ".wfdocs"
    config_dir.mkdir(exist_ok=True)
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")

    if add_markers:
        readme_path = repo_path / _get_config(repo_path).paths.readme
        try:
            content = read_document(readme_path) if readme_path.exists() else ""
        except DocumentError as e:
            _logger.error(str(e))
            raise typer.Exit(1)

        missing = [
            region
            for region in (WORKFLOWS_REGION, FOLDER_TREE_REGION)
            if not has_region(content, region)
        ]
        if missing:
            seeded = content.rstrip("\n")
            for region in missing:
                seeded += ("\n\n" if seeded else "") + region.skeleton()
            write_document(readme_path, seeded + "\n")
            _logger.info(f"Added {len(missing)} marker pair(s) to {readme_path}")

    typer.echo("\n✅ wfdocs configuration initialized")
    typer.echo(f"   Config: {config_file}")
    raise typer.Exit(0)


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    template: Annotated[
        Path,
        typer.Argument(
            help="Path to Jinja2 template to validate",
            exists=True,
            dir_okay=False,
        ),
    ],
) -> None:
    """Validate a Jinja2 template.

    Checks syntax of a custom workflows.md.j2 or section.md.j2.
    """
    from jinja2 import Environment, TemplateSyntaxError

    _logger.info(f"Validating template: {template}")

    try:
        env = Environment()
        env.parse(template.read_text(encoding="utf-8"))
    except TemplateSyntaxError as e:
        _logger.error(f"Template syntax error: {e.message}")
        typer.echo(f"❌ Template syntax error at line {e.lineno}: {e.message}")
        raise typer.Exit(1)

    typer.echo(f"✅ Template is valid: {template}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
