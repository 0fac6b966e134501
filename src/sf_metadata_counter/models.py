"""Data models for sf-metadata-counter"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Literal, Mapping, Optional, Tuple

Layout = Literal["modern", "legacy"]


@dataclass(frozen=True)
class SourceRoot:
    """The metadata tree chosen for one counting run.

    ``path`` is ``<project>/force-app/main/default`` for the modern layout
    and ``<project>/src`` for the legacy one.
    """

    project_root: Path
    path: Path
    layout: Layout


@dataclass(frozen=True)
class CandidateFile:
    """A file found under the source root.

    ``posix`` is the path relative to the source root with forward slashes;
    every classification rule matches against it so the absolute location
    of the project never influences the result.
    """

    path: Path
    posix: str

    @classmethod
    def from_path(cls, path: Path, source_root: Path) -> "CandidateFile":
        try:
            relative = path.relative_to(source_root)
        except ValueError:
            relative = path
        return cls(path=path, posix=relative.as_posix())

    @property
    def segments(self) -> Tuple[str, ...]:
        return tuple(self.posix.split("/"))

    @property
    def name(self) -> str:
        return self.segments[-1]


@dataclass(frozen=True)
class Classification:
    """Outcome of running the rule chain on one file.

    ``type_name`` is None when the file is absorbed into a component that
    is counted elsewhere. ``key`` identifies the logical component; two
    files with the same key are counted once.
    """

    rule: str
    key: str
    type_name: Optional[str] = None

    @property
    def counted(self) -> bool:
        return self.type_name is not None


@dataclass(frozen=True)
class MetadataReport:
    """Component count per metadata type.

    Zero counts are never stored, so an absent type means zero.
    """

    counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        cleaned: Dict[str, int] = {}
        for type_name, count in self.counts.items():
            if count < 0:
                raise ValueError(f"negative count for {type_name}: {count}")
            if count:
                cleaned[type_name] = count
        object.__setattr__(self, "counts", dict(sorted(cleaned.items())))

    @classmethod
    def from_counter(cls, counter: Counter) -> "MetadataReport":
        return cls(dict(counter))

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def type_count(self) -> int:
        return len(self.counts)

    def get(self, type_name: str) -> int:
        return self.counts.get(type_name, 0)

    def breakdown(self) -> List[Tuple[str, int]]:
        """Rows sorted alphabetically by type name (case-insensitive)."""
        return sorted(self.counts.items(), key=lambda item: (item[0].lower(), item[0]))

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "types": self.type_count,
            "report": dict(self.breakdown()),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetadataReport):
            return NotImplemented
        return dict(self.counts) == dict(other.counts)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.counts.items())))


@dataclass(frozen=True)
class CountContext:
    """What formatters need to know besides the report itself."""

    source_root: Optional[SourceRoot] = None

    @property
    def layout(self) -> str:
        return self.source_root.layout if self.source_root else "unknown"
