"""Rich terminal summary of a publish run."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from relnotes.release.publisher import PublishResult


def render(result: PublishResult, *, console: Console | None = None) -> None:
    """Print the publish outcome and uploaded assets."""
    console = console or Console(stderr=True)

    console.print()
    if result.dry_run:
        console.print(f"[bold yellow]Dry run — would create {result.tag_name}[/bold yellow]")
    else:
        console.print(f"[bold green]✅ {result.release_name}[/bold green]")
        if result.release_url:
            console.print(f"[dim]URL:[/dim]          {result.release_url}")

    console.print(f"[dim]Previous tag:[/dim] {result.previous_tag or '-'}")
    console.print(f"[dim]Base commit:[/dim]  {result.base_sha[:12]}")
    body_note = " [yellow](truncated)[/yellow]" if result.truncated else ""
    console.print(
        f"[dim]Body:[/dim]         {result.body_length} / {result.full_body_length} chars{body_note}"
    )
    if result.body_path is not None:
        console.print(f"[dim]Full body:[/dim]    {result.body_path}")

    if result.assets:
        table = Table(title="Release Assets", title_style="bold", border_style="dim")
        table.add_column("Asset", style="cyan")
        table.add_column("Size", justify="right", style="green")
        for asset in result.assets:
            table.add_row(asset.name, f"{asset.size:,}")
        console.print()
        console.print(table)

    console.print(f"[dim]Duration:[/dim]     {result.duration_ms:.0f}ms")
