"""Blueprint snapshots, file import and IR/KCS export."""

import re
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Literal

from .chunker import DEFAULT_CHUNK_SIZE, chunk_text
from .markdown import normalize_markdown
from .models import Blueprint, KcsFormat, SavedBlueprint, Segment

Field = Literal["ir", "kcs"]
SavedBlueprints = tuple[SavedBlueprint, ...]

DEFAULT_EXPORT_NAME = "blueprint"


class BlueprintNameError(ValueError):
    """Raised when saving a blueprint without a usable name."""


@dataclass
class ExportResult:
    """Paths and segments produced by an export."""

    ir_path: Path
    kcs_path: Path
    segments: list[Segment]


def save_blueprint(saved: SavedBlueprints, name: str, blueprint: Blueprint) -> SavedBlueprints:
    """Store blueprint under name, replacing any snapshot with the same name."""
    if not name.strip():
        raise BlueprintNameError("Please enter a blueprint name")

    kept = tuple(b for b in saved if b.name != name)
    return (*kept, SavedBlueprint(name=name, data=blueprint))


def load_blueprint(saved: SavedBlueprints, name: str) -> SavedBlueprint | None:
    for entry in saved:
        if entry.name == name:
            return entry
    return None


def delete_blueprint(saved: SavedBlueprints, name: str) -> SavedBlueprints:
    return tuple(b for b in saved if b.name != name)


def import_text(blueprint: Blueprint, field: Field, path: Path | None) -> Blueprint:
    """Replace one text field with a file's contents.

    A missing or unselected file leaves the blueprint as it was.
    """
    if path is None or not Path(path).is_file():
        return blueprint

    content = Path(path).read_bytes().decode("utf-8", errors="replace")
    if field == "ir":
        return replace(blueprint, instructional_ruleset=content)
    if field == "kcs":
        return replace(blueprint, knowledge_compendium=content)
    raise ValueError(f"Unknown blueprint field: {field!r}")


def render_ir(blueprint: Blueprint) -> str:
    return normalize_markdown(blueprint.instructional_ruleset)


def render_kcs(
    blueprint: Blueprint,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    now: datetime | None = None,
) -> tuple[list[Segment], str]:
    """Chunk the knowledge compendium and serialize it in the blueprint's format."""
    segments = chunk_text(blueprint.knowledge_compendium, chunk_size, now=now)
    return segments, blueprint.kcs_format.dumps(segments)


def export_filenames(name: str, kcs_format: KcsFormat) -> tuple[str, str]:
    """File names for the IR and KCS artifacts."""
    base = name if name.strip() else DEFAULT_EXPORT_NAME
    base = re.sub(r"[\\/]", "_", base)
    return f"{base}-IR.md", f"{base}-KCS.{kcs_format.extension}"


def export_blueprint(
    blueprint: Blueprint,
    name: str,
    out_dir: str | Path,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    now: datetime | None = None,
) -> ExportResult:
    """Write the normalized IR document and the KCS segment file to out_dir."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    ir_name, kcs_name = export_filenames(name, blueprint.kcs_format)
    segments, kcs_data = render_kcs(blueprint, chunk_size, now=now)

    ir_path = out_dir / ir_name
    kcs_path = out_dir / kcs_name
    ir_path.write_text(render_ir(blueprint), encoding="utf-8")
    kcs_path.write_text(kcs_data, encoding="utf-8")

    return ExportResult(ir_path=ir_path, kcs_path=kcs_path, segments=segments)


def read_segments(path: str | Path) -> list[Segment]:
    """Parse an exported KCS file, choosing the format from its extension."""
    path = Path(path)
    try:
        kcs_format = KcsFormat(path.suffix.lstrip(".").lower())
    except ValueError:
        raise ValueError(f"Not a KCS export (expected .json or .jsonl): {path.name}") from None
    return kcs_format.loads(path.read_text(encoding="utf-8"))
