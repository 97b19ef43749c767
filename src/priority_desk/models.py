"""Data models for priority desk."""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Literal

Quadrant = Literal[
    "urgent-important",
    "not-urgent-important",
    "urgent-not-important",
    "not-urgent-not-important",
]

QUADRANTS: tuple[Quadrant, ...] = (
    "urgent-important",
    "not-urgent-important",
    "urgent-not-important",
    "not-urgent-not-important",
)


@dataclass(frozen=True)
class QuadrantInfo:
    """Display configuration for a quadrant."""

    key: Quadrant
    title: str
    subtitle: str
    style: str


QUADRANT_INFO: dict[str, QuadrantInfo] = {
    "urgent-important": QuadrantInfo("urgent-important", "DO FIRST", "Urgent & Important", "red"),
    "not-urgent-important": QuadrantInfo(
        "not-urgent-important", "SCHEDULE", "Not Urgent & Important", "green"
    ),
    "urgent-not-important": QuadrantInfo(
        "urgent-not-important", "DELEGATE", "Urgent & Not Important", "yellow"
    ),
    "not-urgent-not-important": QuadrantInfo(
        "not-urgent-not-important", "ELIMINATE", "Not Urgent & Not Important", "white"
    ),
}


@dataclass(frozen=True)
class Task:
    """A task on the board."""

    id: str
    text: str
    quadrant: Quadrant

    def to_dict(self) -> dict:
        return {"id": self.id, "text": self.text, "quadrant": self.quadrant}

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        quadrant = data["quadrant"]
        if quadrant not in QUADRANTS:
            raise ValueError(f"Unknown quadrant: {quadrant!r}")
        return cls(id=str(data["id"]), text=str(data["text"]), quadrant=quadrant)


@dataclass
class SegmentMetadata:
    """Positional, temporal and keyword metadata for a segment."""

    chunk_index: int
    total_chunks: int
    timestamp: str
    character_count: int
    keywords: list[str] = field(default_factory=list)


@dataclass
class Segment:
    """A bounded-size excerpt of a knowledge compendium."""

    id: str
    content: str
    metadata: SegmentMetadata

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "metadata": {
                "chunkIndex": self.metadata.chunk_index,
                "totalChunks": self.metadata.total_chunks,
                "timestamp": self.metadata.timestamp,
                "characterCount": self.metadata.character_count,
                "keywords": list(self.metadata.keywords),
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Segment":
        meta = data["metadata"]
        return cls(
            id=str(data["id"]),
            content=str(data["content"]),
            metadata=SegmentMetadata(
                chunk_index=int(meta["chunkIndex"]),
                total_chunks=int(meta["totalChunks"]),
                timestamp=str(meta["timestamp"]),
                character_count=int(meta["characterCount"]),
                keywords=[str(k) for k in meta.get("keywords", [])],
            ),
        )


class KcsFormat(Enum):
    """Serialization strategy for an exported segment list."""

    JSON = "json"
    JSONL = "jsonl"

    @property
    def extension(self) -> str:
        return self.value

    def dumps(self, segments: list[Segment]) -> str:
        """Serialize segments in this format."""
        records = [s.to_dict() for s in segments]
        if self is KcsFormat.JSON:
            return json.dumps(records, indent=2, ensure_ascii=False)
        return "\n".join(json.dumps(r, separators=(",", ":"), ensure_ascii=False) for r in records)

    def loads(self, text: str) -> list[Segment]:
        """Parse segments previously written by dumps()."""
        if self is KcsFormat.JSON:
            records = json.loads(text) if text.strip() else []
            if not isinstance(records, list):
                raise ValueError("Expected a JSON array of segments")
        else:
            records = [json.loads(line) for line in text.splitlines() if line.strip()]
        return [Segment.from_dict(r) for r in records]


@dataclass(frozen=True)
class Blueprint:
    """Instructional ruleset and knowledge compendium pair."""

    instructional_ruleset: str = ""
    knowledge_compendium: str = ""
    kcs_format: KcsFormat = KcsFormat.JSON

    def with_format(self, kcs_format: KcsFormat) -> "Blueprint":
        return replace(self, kcs_format=kcs_format)

    def to_dict(self) -> dict:
        return {
            "instructionalRuleset": self.instructional_ruleset,
            "knowledgeCompendium": self.knowledge_compendium,
            "kcsFormat": self.kcs_format.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Blueprint":
        return cls(
            instructional_ruleset=str(data.get("instructionalRuleset", "")),
            knowledge_compendium=str(data.get("knowledgeCompendium", "")),
            kcs_format=KcsFormat(data.get("kcsFormat", "json")),
        )


@dataclass(frozen=True)
class SavedBlueprint:
    """A blueprint snapshot stored under a user-chosen name."""

    name: str
    data: Blueprint

    def to_dict(self) -> dict:
        return {"name": self.name, "data": self.data.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "SavedBlueprint":
        return cls(name=str(data["name"]), data=Blueprint.from_dict(data["data"]))
