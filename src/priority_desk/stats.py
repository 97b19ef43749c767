"""Size and token statistics for boards and blueprints."""

import math

import tiktoken

from .board import Tasks, group_by_quadrant
from .chunker import DEFAULT_CHUNK_SIZE, chunk_text
from .models import Blueprint


def count_tokens(text: str, model: str = "cl100k_base") -> int:
    """Count tokens in text using tiktoken."""
    try:
        enc = tiktoken.get_encoding(model)
        return len(enc.encode(text))
    except Exception:
        # Fallback: rough estimate
        return len(text) // 4


def estimate_chunks(text: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """Rough chunk count from length alone, before paragraph boundaries are known."""
    return math.ceil(len(text) / chunk_size)


def blueprint_stats(blueprint: Blueprint, chunk_size: int = DEFAULT_CHUNK_SIZE) -> dict:
    """Get size statistics for both blueprint fields."""
    ir = blueprint.instructional_ruleset
    kcs = blueprint.knowledge_compendium
    return {
        "ir_characters": len(ir),
        "ir_tokens": count_tokens(ir),
        "kcs_characters": len(kcs),
        "kcs_tokens": count_tokens(kcs),
        "kcs_estimated_chunks": estimate_chunks(kcs, chunk_size),
        "kcs_chunks": len(chunk_text(kcs, chunk_size)),
        "kcs_format": blueprint.kcs_format.value,
    }


def board_stats(tasks: Tasks) -> dict[str, int]:
    """Get task count per quadrant."""
    return {quadrant: len(items) for quadrant, items in group_by_quadrant(tasks).items()}
