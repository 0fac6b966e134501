"""Project discovery for sf-metadata-counter.

A directory is treated as a Salesforce project when any marker exists
directly under it. The first qualifying candidate wins; roots are never
merged.

Example:
    >>> source = locate_source_root([Path("/work/my-org")])
    >>> source.layout
    'modern'
    >>> source.path
    PosixPath('/work/my-org/force-app/main/default')
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .exceptions import ProjectNotFoundError, SourceDirectoryNotFoundError
from .logging_config import get_logger
from .models import SourceRoot

logger = get_logger(__name__)

PROJECT_MANIFEST = "sfdx-project.json"
MODERN_SOURCE = ("force-app", "main", "default")
LEGACY_SOURCE = ("src",)

# Checked in this order; any single hit qualifies the directory.
PROJECT_MARKERS: tuple[tuple[str, ...], ...] = (
    (PROJECT_MANIFEST,),
    MODERN_SOURCE,
    ("src", "package.xml"),
    (".forceignore",),
)

PathLike = Union[str, Path]


def _is_project_dir(directory: Path) -> bool:
    for marker in PROJECT_MARKERS:
        if directory.joinpath(*marker).exists():
            logger.debug("%s qualifies via %s", directory, "/".join(marker))
            return True
    return False


def find_project_root(candidate_dirs: Iterable[PathLike]) -> Optional[Path]:
    """Return the first candidate that looks like a Salesforce project."""
    for candidate in candidate_dirs:
        directory = Path(candidate).expanduser().resolve()
        if directory.is_dir() and _is_project_dir(directory):
            return directory
    return None


def is_salesforce_project(candidate_dirs: Iterable[PathLike]) -> bool:
    return find_project_root(candidate_dirs) is not None


def locate_project_root(candidate_dirs: Sequence[PathLike]) -> Path:
    """Return the first qualifying project root.

    Raises:
        ProjectNotFoundError: If no candidate qualifies
    """
    root = find_project_root(candidate_dirs)
    if root is None:
        raise ProjectNotFoundError([Path(c) for c in candidate_dirs])
    return root


def source_root_for(project_root: Path) -> SourceRoot:
    """Pick the source tree inside an already-qualified project.

    Raises:
        SourceDirectoryNotFoundError: If neither layout is present
    """
    modern = project_root.joinpath(*MODERN_SOURCE)
    if modern.is_dir():
        return SourceRoot(project_root=project_root, path=modern, layout="modern")

    legacy = project_root.joinpath(*LEGACY_SOURCE)
    if legacy.is_dir():
        return SourceRoot(project_root=project_root, path=legacy, layout="legacy")

    raise SourceDirectoryNotFoundError(project_root)


def locate_source_root(candidate_dirs: Sequence[PathLike]) -> SourceRoot:
    """Resolve the source root used for enumeration.

    Raises:
        ProjectNotFoundError: If no candidate qualifies
        SourceDirectoryNotFoundError: If the project has no source tree
    """
    source = source_root_for(locate_project_root(candidate_dirs))
    logger.debug("Using %s source root %s", source.layout, source.path)
    return source
