"""CLI entry point for priority desk."""

from pathlib import Path

import click
from rich.console import Console

from .blueprints import (
    BlueprintNameError,
    delete_blueprint,
    export_blueprint,
    import_text,
    load_blueprint,
    render_kcs,
    save_blueprint,
)
from .board import add_task, delete_task, find_task, move_task
from .chunker import DEFAULT_CHUNK_SIZE
from .classifier import classify_task, matched_keywords
from .db import BLUEPRINTS_KEY, TASKS_KEY, Store, StoredDataError
from .markdown import normalize_markdown
from .models import QUADRANT_INFO, QUADRANTS, Blueprint, KcsFormat
from .reports import (
    print_blueprint_detail,
    print_blueprint_stats,
    print_blueprints,
    print_board,
    print_board_stats,
    print_classification,
    print_export,
    print_segments,
)
from .stats import blueprint_stats, board_stats

console = Console()

DEFAULT_DB = Path.home() / ".priority-desk" / "desk.db"

FORMAT_CHOICES = [f.value for f in KcsFormat]


def print_stored_error(e: StoredDataError):
    console.print(f"[red]{e}[/red]")
    record = "tasks" if e.key == TASKS_KEY else "blueprints"
    console.print(f"[dim]Inspect the store or clear it with: desk reset {record} --yes[/dim]")


@click.group()
@click.option(
    "--db",
    type=click.Path(dir_okay=False),
    default=str(DEFAULT_DB),
    envvar="PRIORITY_DESK_DB",
    show_envvar=True,
    help="Path to SQLite store",
)
@click.pass_context
def cli(ctx, db):
    """Eisenhower task board and AI blueprint organizer."""
    ctx.ensure_object(dict)
    db_path = Path(db)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    ctx.obj["db_path"] = db_path


# -------------------- task board --------------------


@cli.command()
@click.argument("text", nargs=-1, required=True)
@click.pass_context
def add(ctx, text):
    """Add a task; its quadrant is picked from its keywords."""
    text = " ".join(text)

    with Store(ctx.obj["db_path"]) as store:
        try:
            tasks = store.load_tasks()
        except StoredDataError as e:
            print_stored_error(e)
            return

        tasks, task = add_task(tasks, text)
        if task is None:
            console.print("[yellow]Task text is empty; nothing added.[/yellow]")
            return

        store.save_tasks(tasks)

    info = QUADRANT_INFO[task.quadrant]
    console.print(f"[green]Added[/green] #{task.id} to [{info.style}]{info.title}[/{info.style}]")


@cli.command()
@click.pass_context
def board(ctx):
    """Show tasks grouped by quadrant."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            tasks = store.load_tasks()
        except StoredDataError as e:
            print_stored_error(e)
            return

    print_board(tasks)


@cli.command()
@click.argument("task_id")
@click.argument("quadrant", type=click.Choice(QUADRANTS))
@click.pass_context
def move(ctx, task_id, quadrant):
    """Move a task to another quadrant."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            tasks = store.load_tasks()
        except StoredDataError as e:
            print_stored_error(e)
            return

        if find_task(tasks, task_id) is None:
            console.print(f"[yellow]Task #{task_id} not found[/yellow]")
            return

        store.save_tasks(move_task(tasks, task_id, quadrant))

    console.print(f"[green]Moved[/green] #{task_id} to {QUADRANT_INFO[quadrant].title}")


@cli.command()
@click.argument("task_id")
@click.pass_context
def delete(ctx, task_id):
    """Delete a task."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            tasks = store.load_tasks()
        except StoredDataError as e:
            print_stored_error(e)
            return

        if find_task(tasks, task_id) is None:
            console.print(f"[yellow]Task #{task_id} not found[/yellow]")
            return

        store.save_tasks(delete_task(tasks, task_id))

    console.print(f"[green]Deleted[/green] #{task_id}")


@cli.command()
@click.argument("text", nargs=-1, required=True)
def classify(text):
    """Show which quadrant some text would land in, without saving."""
    text = " ".join(text)
    urgent, important = matched_keywords(text)
    print_classification(text, classify_task(text), urgent, important)


# -------------------- blueprints --------------------


@cli.command()
@click.argument("name")
@click.option("--ir", "ir_file", type=click.Path(path_type=Path), help="Import instructional ruleset from file")
@click.option("--kcs", "kcs_file", type=click.Path(path_type=Path), help="Import knowledge compendium from file")
@click.option("--format", "kcs_format", type=click.Choice(FORMAT_CHOICES), help="KCS export format")
@click.pass_context
def save(ctx, name, ir_file, kcs_file, kcs_format):
    """Save a blueprint, updating the one with the same name if it exists."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            saved = store.load_blueprints()
        except StoredDataError as e:
            print_stored_error(e)
            return

        existing = load_blueprint(saved, name)
        blueprint = existing.data if existing else Blueprint()

        for field, path in (("ir", ir_file), ("kcs", kcs_file)):
            if path is not None and not path.is_file():
                console.print(f"[dim]No file at {path}; {field.upper()} left unchanged[/dim]")
            blueprint = import_text(blueprint, field, path)

        if kcs_format:
            blueprint = blueprint.with_format(KcsFormat(kcs_format))

        try:
            saved = save_blueprint(saved, name, blueprint)
        except BlueprintNameError as e:
            console.print(f"[red]{e}[/red]")
            return

        store.save_blueprints(saved)

    console.print(f"[green]Blueprint '{name}' saved successfully![/green]")


@cli.command("import-file")
@click.argument("name")
@click.argument("field", type=click.Choice(["ir", "kcs"]))
@click.argument("file", type=click.Path(path_type=Path))
@click.pass_context
def import_file(ctx, name, field, file):
    """Replace one field of a saved blueprint with a file's contents."""
    if not file.is_file():
        console.print(f"[dim]No file at {file}; nothing imported[/dim]")
        return

    with Store(ctx.obj["db_path"]) as store:
        try:
            saved = store.load_blueprints()
        except StoredDataError as e:
            print_stored_error(e)
            return

        entry = load_blueprint(saved, name)
        if entry is None:
            console.print(f"[yellow]Blueprint '{name}' not found[/yellow]")
            return

        try:
            saved = save_blueprint(saved, name, import_text(entry.data, field, file))
        except BlueprintNameError as e:
            console.print(f"[red]{e}[/red]")
            return

        store.save_blueprints(saved)

    console.print(f"[green]Imported {file} into {field.upper()} of '{name}'[/green]")


@cli.command()
@click.pass_context
def blueprints(ctx):
    """List saved blueprints."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            saved = store.load_blueprints()
        except StoredDataError as e:
            print_stored_error(e)
            return

    print_blueprints(saved)


@cli.command()
@click.argument("name")
@click.pass_context
def show(ctx, name):
    """Show a saved blueprint."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            saved = store.load_blueprints()
        except StoredDataError as e:
            print_stored_error(e)
            return

    entry = load_blueprint(saved, name)
    if entry is None:
        console.print(f"[yellow]Blueprint '{name}' not found[/yellow]")
        return

    print_blueprint_detail(entry)


@cli.command()
@click.argument("name")
@click.pass_context
def remove(ctx, name):
    """Remove a saved blueprint."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            saved = store.load_blueprints()
        except StoredDataError as e:
            print_stored_error(e)
            return

        if load_blueprint(saved, name) is None:
            console.print(f"[yellow]Blueprint '{name}' not found[/yellow]")
            return

        store.save_blueprints(delete_blueprint(saved, name))

    console.print(f"[green]Removed blueprint '{name}'[/green]")


@cli.command()
@click.argument("name")
@click.option("--out", "out_dir", type=click.Path(file_okay=False, path_type=Path), default=".", help="Output directory")
@click.option("--chunk-size", default=DEFAULT_CHUNK_SIZE, type=click.IntRange(min=1), help="Soft limit on segment size")
@click.pass_context
def export(ctx, name, out_dir, chunk_size):
    """Export <name>-IR.md and <name>-KCS.<format> for a saved blueprint."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            saved = store.load_blueprints()
        except StoredDataError as e:
            print_stored_error(e)
            return

    entry = load_blueprint(saved, name)
    if entry is None:
        console.print(f"[yellow]Blueprint '{name}' not found[/yellow]")
        return

    console.print(f"[cyan]Exporting '{name}' to {out_dir}...[/cyan]")
    result = export_blueprint(entry.data, entry.name, out_dir, chunk_size=chunk_size)
    print_export(result)


@cli.command()
@click.argument("name")
@click.option("--chunk-size", default=DEFAULT_CHUNK_SIZE, type=click.IntRange(min=1), help="Soft limit on segment size")
@click.pass_context
def chunks(ctx, name, chunk_size):
    """Preview how a blueprint's knowledge compendium will be segmented."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            saved = store.load_blueprints()
        except StoredDataError as e:
            print_stored_error(e)
            return

    entry = load_blueprint(saved, name)
    if entry is None:
        console.print(f"[yellow]Blueprint '{name}' not found[/yellow]")
        return

    segments, _ = render_kcs(entry.data, chunk_size)
    print_segments(segments)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def normalize(file):
    """Print a text file as normalized Markdown."""
    click.echo(normalize_markdown(file.read_bytes().decode("utf-8", errors="replace")))


@cli.command()
@click.argument("name", required=False)
@click.option("--chunk-size", default=DEFAULT_CHUNK_SIZE, type=click.IntRange(min=1), help="Soft limit on segment size")
@click.pass_context
def stats(ctx, name, chunk_size):
    """Show board statistics, and blueprint statistics when NAME is given."""
    with Store(ctx.obj["db_path"]) as store:
        try:
            tasks = store.load_tasks()
            saved = store.load_blueprints() if name else ()
        except StoredDataError as e:
            print_stored_error(e)
            return

    print_board_stats(board_stats(tasks))

    if name:
        entry = load_blueprint(saved, name)
        if entry is None:
            console.print(f"[yellow]Blueprint '{name}' not found[/yellow]")
            return
        console.print()
        print_blueprint_stats(entry.name, blueprint_stats(entry.data, chunk_size))


@cli.command()
@click.argument("record", type=click.Choice(["tasks", "blueprints", "all"]))
@click.option("--yes", is_flag=True, help="Confirm clearing the stored record")
@click.pass_context
def reset(ctx, record, yes):
    """Clear stored tasks and/or blueprints."""
    if not yes:
        console.print("[yellow]Refusing to clear data without --yes[/yellow]")
        return

    keys = {"tasks": [TASKS_KEY], "blueprints": [BLUEPRINTS_KEY], "all": [TASKS_KEY, BLUEPRINTS_KEY]}[record]

    with Store(ctx.obj["db_path"]) as store:
        for key in keys:
            store.delete_record(key)

    console.print(f"[yellow]Cleared {record}[/yellow]")


if __name__ == "__main__":
    cli()
