"""relnotes CLI — Typer application for rendering and publishing release notes."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from relnotes import __version__

app = typer.Typer(
    name="relnotes",
    help="Build GitHub release notes from commits, changelog, and word diffs.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from relnotes.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _load(root: Path, config: Optional[str]):
    from relnotes.config.loader import ConfigError, load_config

    try:
        return load_config(root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        console.print(f"[bold red]Cannot read {path}:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _emit(text: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]✓[/green] Wrote {output}")
    else:
        sys.stdout.write(text)


# ── render-diff ───────────────────────────────────────────────────────────────


@app.command("render-diff")
def render_diff(
    source: str = typer.Argument("-", help="Word-diff file, or '-' for stdin"),
    base: Optional[str] = typer.Option(None, "--base", help="Diff this revision instead of reading input"),
    head: str = typer.Option("HEAD", "--head", help="Head revision used with --base"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .relnotes.toml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write Markdown to file"),
) -> None:
    """Render `git diff --word-diff=porcelain` output as Markdown."""
    from relnotes.diff.markdown import render_diff_markdown
    from relnotes.git.adapter import GitError, get_word_diff

    if base:
        root = _resolve_repo_root()
        try:
            diff_text = get_word_diff(root, base, head)
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc
    else:
        root = Path.cwd()
        diff_text = _read_input(source)

    cfg = _load(root, config)
    _emit(render_diff_markdown(diff_text, cfg.render.options()), output)


# ── render-commits ────────────────────────────────────────────────────────────


@app.command("render-commits")
def render_commits(
    source: str = typer.Argument("-", help="`git log` output file, or '-' for stdin"),
    since: Optional[str] = typer.Option(None, "--since", help="Read `git log <since>..` instead of input"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .relnotes.toml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write Markdown to file"),
) -> None:
    """Render `git log` output as Markdown headings."""
    from relnotes.git.adapter import GitError, get_commit_log
    from relnotes.release.commits import render_commit_log

    if since:
        root = _resolve_repo_root()
        try:
            log_text = get_commit_log(root, since)
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc
    else:
        root = Path.cwd()
        log_text = _read_input(source)

    cfg = _load(root, config)
    _emit(
        render_commit_log(
            log_text,
            collapse_after=cfg.commits.collapse_after,
            utc_offset_hours=cfg.commits.utc_offset_hours,
            time_label=cfg.commits.time_label,
        ),
        output,
    )


# ── body ──────────────────────────────────────────────────────────────────────


@app.command()
def body(
    base: str = typer.Option(..., "--base", help="Revision the release notes start from"),
    head: str = typer.Option("HEAD", "--head", help="Revision the release points at"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .relnotes.toml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the body to file"),
    full: bool = typer.Option(False, "--full", help="Emit the untruncated body"),
) -> None:
    """Assemble the release body locally without touching GitHub."""
    from relnotes.git.adapter import GitError
    from relnotes.release.publisher import prepare_body

    root = _resolve_repo_root()
    cfg = _load(root, config)
    try:
        release_body = prepare_body(root, cfg, base, head)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if release_body.truncated and not full:
        console.print(
            f"[yellow]⚠[/yellow]  Body truncated to {len(release_body.body)} of "
            f"{len(release_body.full_body)} characters"
        )
    _emit(release_body.full_body if full else release_body.body, output)


# ── publish ───────────────────────────────────────────────────────────────────


@app.command()
def publish(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .relnotes.toml"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve the tag and build the body only"),
) -> None:
    """Create the next tagged GitHub release for this CI run."""
    from relnotes.git.adapter import GitError
    from relnotes.output import json_report, terminal
    from relnotes.release.context import RunContext
    from relnotes.release.errors import GitHubError, ReleaseError
    from relnotes.release.github import GitHubClient
    from relnotes.release.publisher import publish as run_publish

    if format not in ("terminal", "json"):
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=2)

    root = _resolve_repo_root()
    cfg = _load(root, config)

    try:
        ctx = RunContext.from_env()
    except ReleaseError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    try:
        with GitHubClient(
            ctx.repo,
            ctx.token,
            api_url=cfg.github.api_url,
            timeout=cfg.github.timeout,
        ) as client:
            result = run_publish(ctx, cfg, client, root, dry_run=dry_run)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except (GitHubError, ReleaseError) as exc:
        console.print(f"[bold red]Release failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    if format == "json":
        print(json_report.render(result))
    else:
        terminal.render(result, console=console)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .relnotes.toml in the repo root."""
    from relnotes.config.defaults import DEFAULT_TOML
    from relnotes.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"relnotes {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """relnotes — release notes from commits, changelog, and word diffs."""
    _setup_logging(verbose)
