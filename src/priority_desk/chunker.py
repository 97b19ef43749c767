"""Paragraph-aware chunking of knowledge text with keyword tagging."""

import re
from collections import Counter
from datetime import datetime, timezone

from .models import Segment, SegmentMetadata

DEFAULT_CHUNK_SIZE = 1000
KEYWORD_LIMIT = 10

PARAGRAPH_SPLIT_RE = re.compile(r"\n\n+")
WORD_RE = re.compile(r"\b\w{4,}\b", re.ASCII)


def extract_keywords(text: str, limit: int = KEYWORD_LIMIT) -> list[str]:
    """Return the most frequent words of four or more characters.

    Ties keep the order in which words were first seen.
    """
    words = WORD_RE.findall(text.lower())
    frequency = Counter(words)
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[:limit]]


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2025-01-02T03:04:05.678Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _close_segment(buffer: str, index: int, now: datetime | None) -> Segment:
    return Segment(
        id=f"chunk-{index}",
        content=buffer.strip(),
        metadata=SegmentMetadata(
            chunk_index=index,
            total_chunks=0,  # stamped once all segments exist
            timestamp=format_timestamp(now or datetime.now(timezone.utc)),
            character_count=len(buffer),
            keywords=extract_keywords(buffer),
        ),
    )


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, keeping order."""
    return PARAGRAPH_SPLIT_RE.split(text)


def chunk_text(
    text: str, chunk_size: int = DEFAULT_CHUNK_SIZE, now: datetime | None = None
) -> list[Segment]:
    """Split text into paragraph-bounded segments of roughly chunk_size characters.

    The size is only checked between paragraphs, so a single paragraph longer
    than chunk_size becomes one oversized segment rather than being cut.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    segments: list[Segment] = []
    buffer = ""

    for paragraph in split_paragraphs(text):
        if len(buffer) + len(paragraph) > chunk_size and buffer:
            if buffer.strip():
                segments.append(_close_segment(buffer, len(segments), now))
            buffer = paragraph
        else:
            buffer += ("\n\n" if buffer else "") + paragraph

    if buffer.strip():
        segments.append(_close_segment(buffer, len(segments), now))

    for segment in segments:
        segment.metadata.total_chunks = len(segments)

    return segments
