"""Exception hierarchy for sf-metadata-counter."""

from .base import MetadataCounterError
from .config import ConfigurationError, InvalidConfigError
from .project import (
    ProjectError,
    ProjectNotFoundError,
    ScanError,
    SourceDirectoryNotFoundError,
)

__all__ = [
    "MetadataCounterError",
    "ProjectError",
    "ProjectNotFoundError",
    "SourceDirectoryNotFoundError",
    "ScanError",
    "ConfigurationError",
    "InvalidConfigError",
]
