"""Report generation for CLI output."""

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .blueprints import ExportResult
from .board import Tasks, group_by_quadrant
from .markdown import headings, normalize_markdown
from .models import QUADRANT_INFO, SavedBlueprint, Segment

console = Console()


def print_board(tasks: Tasks):
    """Print the four quadrants with their tasks."""
    if not tasks:
        console.print("[yellow]No tasks yet. Add one with 'desk add'.[/yellow]")
        return

    for quadrant, items in group_by_quadrant(tasks).items():
        info = QUADRANT_INFO[quadrant]
        table = Table(
            title=f"[bold {info.style}]{info.title}[/bold {info.style}] [dim]{info.subtitle}[/dim]",
            title_justify="left",
            show_header=False,
            expand=True,
        )
        table.add_column("ID", style="dim", width=14, justify="right")
        table.add_column("Task", style=info.style)

        if not items:
            table.add_row("", "[dim]-[/dim]")
        for task in items:
            table.add_row(task.id, escape(task.text))

        console.print(table)


def print_classification(text: str, quadrant: str, urgent: list[str], important: list[str]):
    """Explain how a piece of text was classified."""
    info = QUADRANT_INFO[quadrant]
    console.print(f"[{info.style}]{info.title}[/{info.style}] ({quadrant})")
    console.print(f"  Text: {escape(text)}")
    console.print(f"  Urgency keywords: {', '.join(urgent) if urgent else '[dim]none[/dim]'}")
    console.print(f"  Importance keywords: {', '.join(important) if important else '[dim]none[/dim]'}")


def print_blueprints(saved: tuple[SavedBlueprint, ...]):
    """Print saved blueprints."""
    if not saved:
        console.print("[yellow]No saved blueprints. Create one with 'desk save'.[/yellow]")
        return

    table = Table(title="Saved Blueprints")
    table.add_column("Name", style="cyan")
    table.add_column("IR Chars", justify="right")
    table.add_column("KCS Chars", justify="right")
    table.add_column("Format", style="magenta")

    for entry in saved:
        table.add_row(
            escape(entry.name),
            f"{len(entry.data.instructional_ruleset):,}",
            f"{len(entry.data.knowledge_compendium):,}",
            entry.data.kcs_format.value,
        )

    console.print(table)


def print_blueprint_detail(entry: SavedBlueprint):
    """Print a blueprint with its normalized IR and KCS excerpt."""
    blueprint = entry.data
    ir = normalize_markdown(blueprint.instructional_ruleset)

    console.print()
    console.print(Panel(f"[bold cyan]{escape(entry.name)}[/bold cyan]", subtitle=f"KCS format: {blueprint.kcs_format.value}"))

    outline = headings(ir)
    if outline:
        console.print("\n[bold]Outline:[/bold]")
        for level, title in outline:
            console.print(f"{'  ' * level}{escape(title)}")

    console.print("\n[bold]Instructional Ruleset:[/bold]")
    console.print(Markdown(ir))

    kcs = blueprint.knowledge_compendium
    console.print("\n[bold]Knowledge Compendium:[/bold]")
    if not kcs.strip():
        console.print("[dim](empty)[/dim]")
    elif len(kcs) > 500:
        console.print(escape(kcs[:500]) + "...")
        console.print(f"[dim]({len(kcs):,} characters total)[/dim]")
    else:
        console.print(escape(kcs))


def print_segments(segments: list[Segment]):
    """Print a preview of chunked segments."""
    if not segments:
        console.print("[yellow]Knowledge compendium is empty; no segments.[/yellow]")
        return

    table = Table(title=f"KCS Segments ({len(segments)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Chars", justify="right", no_wrap=True)
    table.add_column("Keywords", style="magenta")
    table.add_column("Preview")

    for segment in segments:
        preview = segment.content.replace("\n", " ")
        if len(preview) > 80:
            preview = preview[:80] + "..."
        table.add_row(
            segment.id,
            str(segment.metadata.character_count),
            ", ".join(segment.metadata.keywords),
            escape(preview),
        )

    console.print(table)


def print_board_stats(stats: dict[str, int]):
    table = Table(title="Board")
    table.add_column("Quadrant", style="cyan")
    table.add_column("Tasks", style="green", justify="right")

    for quadrant, count in stats.items():
        info = QUADRANT_INFO[quadrant]
        table.add_row(f"{info.title} ({info.subtitle})", str(count))
    table.add_row("[bold]Total[/bold]", f"[bold]{sum(stats.values())}[/bold]")

    console.print(table)


def print_blueprint_stats(name: str, stats: dict):
    """Print size statistics for a blueprint."""
    table = Table(title=f"Blueprint: {escape(name)}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("IR Characters", f"{stats['ir_characters']:,}")
    table.add_row("IR Tokens", f"{stats['ir_tokens']:,}")
    table.add_row("KCS Characters", f"{stats['kcs_characters']:,}")
    table.add_row("KCS Tokens", f"{stats['kcs_tokens']:,}")
    table.add_row("Estimated Chunks", str(stats["kcs_estimated_chunks"]))
    table.add_row("Actual Chunks", str(stats["kcs_chunks"]))
    table.add_row("KCS Format", stats["kcs_format"])

    console.print(table)


def print_export(result: ExportResult):
    console.print(f"[green]Exported IR to {result.ir_path}[/green]")
    console.print(f"[green]Exported KCS to {result.kcs_path}[/green] ({len(result.segments)} segments)")
