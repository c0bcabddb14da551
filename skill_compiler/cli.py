"""
skill-compiler CLI - Documentation Index Compiler

A command-line tool that turns framework documentation into compressed
indexes inside AGENTS.md:
1. Scanning the project for frameworks and skills
2. Fetching version-matched documentation
3. Compressing each documentation tree into a pipe-delimited index
4. Injecting the indexes into the managed section of AGENTS.md
"""

import logging
from pathlib import Path
from typing import Optional, List

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from skill_compiler import __version__
from skill_compiler.compressor import get_compression_stats
from skill_compiler.config import (
    add_custom_skill,
    config_exists,
    create_initial_config,
    list_custom_skills,
    remove_custom_skill,
    save_config,
    CONFIG_FILENAME,
)
from skill_compiler.pipeline import CompilePipeline
from skill_compiler.schemas import IndexFormat
from skill_compiler.watcher import watch_project

app = typer.Typer(
    name="skill-compiler",
    help="Converts framework documentation into compressed AGENTS.md indexes",
    add_completion=False,
)

console = Console()


def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """Scan the project and generate AGENTS.md (runs `compile` when no command is given)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )

    if ctx.invoked_subcommand is None:
        compile_command(
            out=None,
            only=None,
            index_format=None,
            target_size=None,
            dry_run=False,
            refresh=False,
            silent=False,
            check=False,
            stats=False,
        )


# ============================================================================
# INIT COMMAND
# ============================================================================

@app.command("init")
def init(
    out: str = typer.Option("./AGENTS.md", "--out", "-o", help="Output path for AGENTS.md"),
    only: Optional[str] = typer.Option(
        None,
        "--only",
        help="Only process specific frameworks (comma-separated)",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
):
    """Initialize skill-compiler configuration."""
    cwd = Path.cwd()

    if config_exists(cwd) and not force:
        console.print("[yellow]Config file already exists. Use --force to overwrite.[/yellow]")
        return

    config = create_initial_config(out=out, frameworks=_split_csv(only))
    save_config(cwd, config)

    console.print(f"[green]✓ Created {CONFIG_FILENAME}[/green]")
    console.print("[dim]\nRun `skill-compiler` to generate AGENTS.md[/dim]")


# ============================================================================
# COMPILE COMMAND
# ============================================================================

@app.command("compile")
def compile_command(
    out: Optional[str] = typer.Option(None, "--out", "-o", help="Output path for AGENTS.md"),
    only: Optional[str] = typer.Option(
        None,
        "--only",
        help="Only process specific frameworks (comma-separated)",
    ),
    index_format: Optional[IndexFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Index format: v1 (paths) or v2 (semantic). Default from config.",
    ),
    target_size: Optional[int] = typer.Option(
        None,
        "--target-size",
        "-t",
        min=1,
        help="Target index size in bytes (default from config: 8192)",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview changes without writing"),
    refresh: bool = typer.Option(False, "--refresh", help="Force refresh cached docs"),
    silent: bool = typer.Option(False, "--silent", help="Suppress output"),
    check: bool = typer.Option(False, "--check", help="Check if AGENTS.md is up-to-date (for CI)"),
    stats: bool = typer.Option(False, "--stats", help="Show compression statistics"),
):
    """
    Scan the project and generate the AGENTS.md index.

    Example:
        skill-compiler compile --format v2 --target-size 4096
    """
    try:
        pipeline = CompilePipeline(
            cwd=Path.cwd(),
            out=out,
            only=_split_csv(only),
            index_format=index_format,
            target_size=target_size,
        )

        if not silent:
            console.print("[blue]🔍 Scanning project for frameworks...[/blue]")

        result = pipeline.build_indexes(refresh=refresh)

        if not result.skills:
            console.print("[yellow]No frameworks detected. Nothing to do.[/yellow]")
            return

        if not silent:
            names = ", ".join(skill.name for skill in result.skills)
            console.print(f"[green]✓ Found {len(result.skills)} framework(s): {names}[/green]")

        if dry_run:
            console.print("\n[yellow]--- DRY RUN ---[/yellow]")
            console.print(f"Would write to: {pipeline.out_path}")
            console.print("\nGenerated indexes:")
            for index in result.indexes:
                console.print(index[:200] + "...\n", markup=False, highlight=False)
        elif check:
            if not pipeline.out_path.exists():
                console.print(f"[red]✗ {pipeline.out_path.name} does not exist[/red]")
                raise typer.Exit(1)
            if not pipeline.is_up_to_date(result):
                console.print(f"[red]✗ {pipeline.out_path.name} is out of date[/red]")
                console.print("[dim]Run `skill-compiler` to update[/dim]")
                raise typer.Exit(1)
            console.print(f"[green]✓ {pipeline.out_path.name} is up to date[/green]")
        else:
            pipeline.write(result)
            if not silent:
                console.print(f"[green]✓ Updated {pipeline.out_path}[/green]")

        if stats:
            _print_stats(pipeline)

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"\n[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)


def _print_stats(pipeline: CompilePipeline):
    """Display compression statistics per skill."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Skill")
    table.add_column("Docs", justify="right")
    table.add_column("Index", justify="right")
    table.add_column("Reduction", justify="right")

    for skill, options in pipeline.detect():
        stats = get_compression_stats(skill, options)
        table.add_row(
            skill.name,
            f"{stats.original_size:,} B",
            f"{stats.compressed_size:,} B",
            f"{stats.reduction_percent}%",
        )

    console.print(table)


# ============================================================================
# WATCH COMMAND
# ============================================================================

@app.command("watch")
def watch(
    out: Optional[str] = typer.Option(None, "--out", "-o", help="Output path for AGENTS.md"),
    interval: float = typer.Option(1.0, "--interval", help="Polling interval in seconds"),
):
    """Watch for dependency changes and auto-update AGENTS.md."""
    cwd = Path.cwd()

    def update():
        console.print("[blue]\n🔄 Updating...[/blue]")
        # Reload config on every update so edits are picked up
        result = CompilePipeline(cwd=cwd, out=out).run()
        if not result.skills:
            console.print("[yellow]No frameworks detected.[/yellow]")
            return
        console.print(f"[green]✓ Updated {result.out_path}[/green]")

    console.print("[blue]👀 Watching for changes... (Ctrl+C to stop)[/blue]")
    try:
        watch_project(cwd, update, interval=interval)
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped watching[/yellow]")


# ============================================================================
# CUSTOM SKILL COMMANDS
# ============================================================================

@app.command("add")
def add(
    path: str = typer.Argument(..., help="Path to a local documentation directory"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name for the custom skill"),
    priority: Optional[str] = typer.Option(
        None,
        "--priority",
        help="Priority sections (comma-separated)",
    ),
):
    """Add a custom skill from a local path."""
    console.print("[yellow]⚠️  Custom skills are injected as-is without validation.[/yellow]")
    console.print("[yellow]   Poorly structured docs may degrade agent performance.[/yellow]")
    console.print(f"[blue]\n📥 Adding skill from: {path}[/blue]")

    try:
        result = add_custom_skill(Path.cwd(), path, name=name, priority=_split_csv(priority))
    except Exception as e:
        console.print(f"\n[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Added skill \"{result.name}\" ({result.file_count} files)[/green]")
    console.print("[dim]Run `skill-compiler` to regenerate indexes.[/dim]")


@app.command("list")
def list_skills():
    """List all custom skills."""
    skills = list_custom_skills(Path.cwd())

    if not skills:
        console.print("[dim]No custom skills configured.[/dim]")
        console.print("[dim]Use `skill-compiler add <path>` to add one.[/dim]")
        return

    console.print("[bold]Custom Skills:[/bold]\n")
    for skill in skills:
        console.print(f"  [green]•[/green] {skill.name}")
        console.print(f"[dim]    Path: {skill.path}[/dim]")
        if skill.priority:
            console.print(f"[dim]    Priority: {', '.join(skill.priority)}[/dim]")


@app.command("remove")
def remove(name: str = typer.Argument(..., help="Custom skill name")):
    """Remove a custom skill."""
    if remove_custom_skill(Path.cwd(), name):
        console.print(f"[green]✓ Removed skill \"{name}\"[/green]")
        console.print("[dim]Run `skill-compiler` to regenerate indexes.[/dim]")
    else:
        console.print(f"[yellow]Skill \"{name}\" not found.[/yellow]")


@app.command("version")
def version():
    """Show version information."""
    console.print(Panel.fit(
        f"[bold cyan]skill-compiler[/bold cyan] v{__version__}\n"
        "Documentation index compiler for AGENTS.md",
        border_style="cyan"
    ))


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
