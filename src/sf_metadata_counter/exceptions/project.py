"""Project discovery and scanning exceptions."""

from pathlib import Path
from typing import Sequence

from .base import MetadataCounterError


class ProjectError(MetadataCounterError):
    """Base class for errors resolving the project being counted."""

    pass


class ProjectNotFoundError(ProjectError):
    """Raised when no candidate directory looks like a Salesforce project."""

    def __init__(self, candidates: Sequence[Path]):
        super().__init__(
            "No Salesforce project found",
            details={"candidates": ", ".join(str(c) for c in candidates) or "<none>"},
        )
        self.candidates = list(candidates)


class SourceDirectoryNotFoundError(ProjectError):
    """Raised when a project qualifies but has neither known source layout."""

    def __init__(self, project_root: Path):
        super().__init__(
            f"Salesforce source directory not found under {project_root}",
            details={"expected": "force-app/main/default or src"},
        )
        self.project_root = project_root


class ScanError(MetadataCounterError):
    """Raised when the source tree cannot be traversed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot scan directory: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason
