"""CLI entry point for skillhost."""

import logging
from pathlib import Path

import typer
from rich.markup import escape

from skillhost import __version__
from skillhost.cli.constants import ExitCodes
from skillhost.cli.utils import get_console, parse_tool_args
from skillhost.config import ConfigurationError, SkillsSettings, load_config, merge_with_env
from skillhost.logging_setup import setup_logging
from skillhost.skills.catalog import sync_catalog
from skillhost.skills.display import print_registry, print_skill_info
from skillhost.skills.errors import SkillError
from skillhost.skills.loader import SkillLoader
from skillhost.skills.prompt import registry_to_system_prompt
from skillhost.skills.registry import SkillRegistry
from skillhost.skills.tools import SkillToolExecutor
from skillhost.skills.validation import check_skill

app = typer.Typer(help="skillhost - Skill manifests and registry for agent hosts")

console = get_console()

logger = logging.getLogger(__name__)


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(ExitCodes.GENERAL_ERROR)


def _settings(ctx: typer.Context) -> SkillsSettings:
    settings = ctx.obj.get("settings") if ctx.obj else None
    return settings if settings is not None else SkillsSettings()


def _scan(ctx: typer.Context, directories: list[Path] | None) -> SkillRegistry:
    """Load every skill from the given directories (or the configured ones)."""
    settings = _settings(ctx)
    sources = directories or settings.skill_directories()

    registry = SkillRegistry()
    result = SkillLoader(registry).load_skill_sources(sources)

    for path, error in result.errors:
        console.print(f"[yellow]Skipped {escape(str(path))}:[/yellow] {escape(str(error))}")

    return registry


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Path = typer.Option(None, "--config", help="Path to settings.json"),
    log_level: str = typer.Option(
        None, "--log-level", help="Log level (overrides SKILLHOST_LOG_LEVEL)"
    ),
    version_flag: bool = typer.Option(False, "--version", help="Show version"),
) -> None:
    """skillhost - discover, validate and run agent skills.

    \b
    Examples:
        skillhost list                          # Skills from configured directories
        skillhost list -d ./skills              # Skills from a specific directory
        skillhost show skills/greet.toml        # Details of one skill
        skillhost validate skills/greet.toml    # Report every validation problem
        skillhost prompt                        # Aggregate system prompt
        skillhost run greet hello name=Alice    # Execute a skill tool
        skillhost sync --force                  # Refresh the catalog mirror
    """
    if version_flag:
        console.print(f"skillhost version {__version__}")
        raise typer.Exit(ExitCodes.SUCCESS)

    try:
        settings = merge_with_env(load_config(config))
    except ConfigurationError as e:
        raise _fail(str(e)) from e

    setup_logging(log_level or settings.log_level)
    ctx.obj = {"settings": settings}

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command("list")
def list_skills(
    ctx: typer.Context,
    directories: list[Path] = typer.Option(
        None, "--dir", "-d", help="Skill directory to scan (repeatable)"
    ),
) -> None:
    """List skills found in the skill directories."""
    registry = _scan(ctx, directories)

    if registry.count == 0:
        console.print("[yellow]No skills found[/yellow]")
        return

    print_registry(registry, console)


@app.command("show")
def show_skill(path: Path = typer.Argument(..., help="Skill file to load")) -> None:
    """Load one skill file and print its details."""
    try:
        skill = SkillLoader().load(path)
    except SkillError as e:
        raise _fail(str(e)) from e

    print_skill_info(skill, console)


@app.command("validate")
def validate_skill_file(path: Path = typer.Argument(..., help="Skill file to validate")) -> None:
    """Load one skill file and report every validation problem."""
    try:
        skill = SkillLoader().load(path)
    except SkillError as e:
        raise _fail(str(e)) from e

    problems = check_skill(skill)
    if problems:
        console.print(f"[red]✗[/red] {escape(skill.name or str(path))}: {len(problems)} problem(s)")
        for problem in problems:
            console.print(f"  • {escape(problem)}")
        raise typer.Exit(ExitCodes.GENERAL_ERROR)

    console.print(f"[green]✓[/green] {escape(skill.name)} is valid")


@app.command("prompt")
def show_prompt(
    ctx: typer.Context,
    directories: list[Path] = typer.Option(
        None, "--dir", "-d", help="Skill directory to scan (repeatable)"
    ),
) -> None:
    """Print the system prompt for every loaded skill."""
    registry = _scan(ctx, directories)
    typer.echo(registry_to_system_prompt(registry))


@app.command("json")
def show_json(path: Path = typer.Argument(..., help="Skill file to load")) -> None:
    """Print a skill manifest as JSON."""
    try:
        skill = SkillLoader().load(path)
    except SkillError as e:
        raise _fail(str(e)) from e

    typer.echo(skill.manifest.to_json())


@app.command("run")
def run_tool(
    ctx: typer.Context,
    skill_name: str = typer.Argument(..., help="Registered skill name"),
    tool_name: str = typer.Argument(..., help="Tool declared by the skill"),
    args: list[str] = typer.Argument(None, help="Tool arguments (key=value pairs or free text)"),
    directories: list[Path] = typer.Option(
        None, "--dir", "-d", help="Skill directory to scan (repeatable)"
    ),
    timeout: float = typer.Option(None, "--timeout", help="Timeout in seconds"),
) -> None:
    """Execute a tool declared by a skill."""
    registry = _scan(ctx, directories)
    settings = _settings(ctx)
    executor = SkillToolExecutor(timeout=timeout if timeout is not None else settings.tool_timeout)

    try:
        skill = registry.find(skill_name)
        result = executor.execute(skill, tool_name, parse_tool_args(args or []))
    except SkillError as e:
        raise _fail(str(e)) from e

    if result.output:
        typer.echo(result.output.rstrip("\n"))

    if not result.success:
        console.print(
            f"[red]Tool '{escape(tool_name)}' failed (exit code {result.exit_code})[/red]"
        )
        raise typer.Exit(ExitCodes.GENERAL_ERROR)


@app.command("sync")
def sync(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Sync even if the mirror is fresh"),
) -> None:
    """Clone or refresh the remote skill catalog mirror."""
    settings = _settings(ctx)
    target = Path(settings.catalog_dir)

    try:
        synced = sync_catalog(target, repo_url=settings.catalog_url, force=force)
    except SkillError as e:
        raise _fail(str(e)) from e

    if synced:
        console.print(f"[green]✓[/green] Skill catalog synced into {escape(str(target))}")
    else:
        console.print(f"[dim]Skill catalog at {escape(str(target))} is up to date[/dim]")
