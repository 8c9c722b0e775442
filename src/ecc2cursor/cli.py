"""ecc2cursor command-line interface."""

from __future__ import annotations

import logging
import re
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .catalog import Catalog, load_catalog
from .exceptions import Ecc2CursorError
from .models import Category, ScanResult, SyncOptions, TargetContext
from .naming import NamingPolicy
from .scanner import format_scan_result, scan_all, scan_directory
from .source import open_source
from .sync import run_clean, run_sync
from .translators.mcp import (
    get_available_servers,
    installed_server_names,
    merge_servers,
    parse_selection,
    resolve_selection,
)

app = typer.Typer(
    name="ecc2cursor",
    help="Sync Everything Claude Code configs into Cursor",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

DirOption = typer.Option(
    None,
    "--dir",
    "-d",
    envvar="ECC2CURSOR_DIR",
    help="Target .cursor/ directory (default: ~/.cursor)",
)
PrefixOption = typer.Option(
    None,
    "--prefix",
    "-p",
    envvar="ECC2CURSOR_PREFIX",
    help="Install prefix (default: ecc)",
)
NoPrefixOption = typer.Option(
    False,
    "--no-prefix",
    help="Keep original names (installed files can no longer be detected or cleaned)",
)
CatalogOption = typer.Option(
    None,
    "--catalog",
    envvar="ECC2CURSOR_CATALOG",
    help="Alternative catalog YAML file",
)
SourceOption = typer.Option(
    None,
    "--source",
    "-s",
    help="Local source tree to translate instead of cloning",
    exists=True,
    file_okay=False,
    dir_okay=True,
)
RepoOption = typer.Option(None, "--repo", envvar="ECC2CURSOR_REPO", help="Repository to clone")
BranchOption = typer.Option(None, "--branch", envvar="ECC2CURSOR_BRANCH", help="Branch to clone")


def _get_version_string() -> str:
    """Get version string from package metadata or pyproject.toml."""
    try:
        return get_version("ecc2cursor")
    except PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        content = pyproject_path.read_text()
        match = re.search(r'version\s*=\s*["\']([^"\']+)["\']', content)
        if match:
            return f"{match.group(1)} (development)"

    return "unknown"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"ecc2cursor version {_get_version_string()}")
        raise typer.Exit


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every file written"),
) -> None:
    """ecc2cursor: Sync Everything Claude Code configs into Cursor."""
    _configure_logging(verbose)


def _resolve_prefix(prefix: str | None, no_prefix: bool, catalog: Catalog) -> str:
    if no_prefix:
        return ""
    return catalog.defaults.prefix if prefix is None else prefix


def _resolve_target(target_dir: Path | None, catalog: Catalog) -> TargetContext:
    return TargetContext.from_root(target_dir or Path(catalog.defaults.target_dir))


def _print_untracked_notice(action: str) -> None:
    console.print(f"[yellow]Untracked mode:[/yellow] cannot {action} without a prefix.")
    console.print("Use --prefix NAME to select which installed files to look for.")


def _print_scan_details(result: ScanResult) -> None:
    console.print(f"  {format_scan_result(result)}")
    if result.skills:
        console.print(f"    Skills: {', '.join(result.skills)}")
    if result.agents:
        console.print(f"    Agents: {', '.join(result.agents)}")
    if result.commands:
        console.print(f"    Commands: {', '.join(result.commands)}")


@app.command()
def sync(
    target_dir: Path | None = DirOption,
    prefix: str | None = PrefixOption,
    no_prefix: bool = NoPrefixOption,
    source: Path | None = SourceOption,
    repo: str | None = RepoOption,
    branch: str | None = BranchOption,
    category: list[Category] | None = typer.Option(
        None,
        "--category",
        "-c",
        help="Categories to sync (can be repeated, default: all)",
    ),
    lang: list[str] | None = typer.Option(
        None,
        "--lang",
        "-l",
        help="Rule languages to sync (can be repeated, default: auto-detect)",
    ),
    mcp: str = typer.Option(
        "all",
        "--mcp",
        help="MCP servers to install: none, all, or a comma-separated list",
    ),
    catalog_path: Path | None = CatalogOption,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be generated without writing files",
    ),
) -> None:
    """Translate the source tree and write it into the target directory."""
    try:
        catalog = load_catalog(catalog_path)
        ctx = _resolve_target(target_dir, catalog)
        options = SyncOptions(
            ctx=ctx,
            prefix=_resolve_prefix(prefix, no_prefix, catalog),
            categories=category or list(Category),
            languages=lang or "auto",
            mcp_selection=parse_selection(mcp),
            dry_run=dry_run,
            source_path=source,
            repository=repo or catalog.defaults.repository,
            branch=branch or catalog.defaults.branch,
        )

        if dry_run:
            console.print("[bold blue]Dry run - no files will be written.[/bold blue]")
        console.print(f"Target: {ctx.cursor_dir}")
        if source is None:
            console.print(f"Cloning {options.repository} ({options.branch})...")

        result = run_sync(options, catalog)
    except Ecc2CursorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if result.sha:
        console.print(f"At commit {result.sha[:8]}")

    table = Table(title="Sync Summary")
    table.add_column("Category", style="cyan")
    table.add_column("Files", style="green", justify="right")
    for name, count in result.counts.items():
        table.add_row(name, str(count))
    table.add_row("total", str(result.total_files))
    console.print(table)

    if dry_run:
        console.print("Dry run complete. No files were written.")
    else:
        console.print("[green]✓[/green] Sync complete. Restart Cursor to pick up changes.")
        if not options.prefix:
            console.print(
                "[yellow]Note:[/yellow] installed without a prefix; "
                "status and clean cannot find these files.",
            )


@app.command()
def status(
    target_dir: Path | None = DirOption,
    prefix: str | None = PrefixOption,
    no_prefix: bool = NoPrefixOption,
    catalog_path: Path | None = CatalogOption,
) -> None:
    """Show installed (prefixed) skills, agents and commands."""
    try:
        catalog = load_catalog(catalog_path)
        resolved = _resolve_prefix(prefix, no_prefix, catalog)
        policy = NamingPolicy(resolved)
    except Ecc2CursorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(f"ecc2cursor status ({policy.mode}: {resolved or 'no prefix'})\n")
    if not policy.tracks_installs:
        _print_untracked_notice("detect installed files")
        return

    if target_dir is not None:
        results = [scan_directory(target_dir.expanduser(), resolved)]
        results = [r for r in results if r.total_files > 0]
    else:
        results = scan_all(resolved)

    if not results:
        console.print(f"  No {resolved}-* files found.")
        console.print("  Run `ecc2cursor sync` to get started.")
        return

    for result in results:
        _print_scan_details(result)


@app.command()
def clean(
    target_dir: Path | None = DirOption,
    prefix: str | None = PrefixOption,
    no_prefix: bool = NoPrefixOption,
    catalog_path: Path | None = CatalogOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove every prefixed skill, agent and command. MCP servers are kept."""
    try:
        catalog = load_catalog(catalog_path)
        resolved = _resolve_prefix(prefix, no_prefix, catalog)
        policy = NamingPolicy(resolved)
        ctx = _resolve_target(target_dir, catalog)
    except Ecc2CursorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if not policy.tracks_installs:
        _print_untracked_notice("clean")
        return

    found = scan_directory(ctx.cursor_dir, resolved)
    if found.total_files == 0:
        console.print(f"No {resolved}-* files found in {ctx.cursor_dir}")
        return

    if not yes and not typer.confirm(f"Remove {found.total_files} {resolved}-* entries?"):
        console.print("Clean cancelled")
        return

    result = run_clean(ctx, resolved)
    for label, entries in (
        ("skill dir(s)", result.skills),
        ("agent file(s)", result.agents),
        ("command file(s)", result.commands),
    ):
        if entries:
            console.print(f"  Removed {len(entries)} {label}:")
            for entry in entries:
                console.print(f"    - {entry}")

    console.print(f"[green]✓[/green] Removed {result.total_removed} entries")
    console.print(f"Note: MCP servers were not removed. Edit {ctx.mcp_file} manually if needed.")


@app.command()
def mcp(
    target_dir: Path | None = DirOption,
    source: Path | None = SourceOption,
    repo: str | None = RepoOption,
    branch: str | None = BranchOption,
    catalog_path: Path | None = CatalogOption,
    install: str | None = typer.Option(
        None,
        "--install",
        help="Install servers: all, or a comma-separated list",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Count without writing"),
) -> None:
    """List credential-free MCP servers and optionally install them."""
    try:
        catalog = load_catalog(catalog_path)
        ctx = _resolve_target(target_dir, catalog)
        installed = installed_server_names(ctx.mcp_file)

        with open_source(
            source,
            repo or catalog.defaults.repository,
            branch or catalog.defaults.branch,
        ) as tree:
            available = get_available_servers(tree.root, catalog)

        if not available:
            console.print("No installable MCP servers found.")
            return

        table = Table(title=f"MCP Servers ({len(available)} token-free)")
        table.add_column("Name", style="cyan")
        table.add_column("Status", style="green")
        table.add_column("Description")
        for server in available:
            state = "installed" if server.name in installed else "available"
            table.add_row(server.name, state, server.description)
        console.print(table)

        if install is not None:
            selected = resolve_selection(available, parse_selection(install))
            added, skipped = merge_servers(ctx.mcp_file, selected, dry_run, catalog)
            console.print(f"MCP: {added} added, {skipped} already present")
    except Ecc2CursorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def version() -> None:
    """Show ecc2cursor version information."""
    console.print(f"ecc2cursor version {_get_version_string()}")


def main() -> None:
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
