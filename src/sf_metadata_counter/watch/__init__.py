"""Live recounting: report ownership and debounced file watching."""

from .state import ReportState, diff_reports
from .watcher import WATCHED_EXTENSIONS, MetadataFilter, MetadataWatcher

__all__ = [
    "ReportState",
    "diff_reports",
    "MetadataWatcher",
    "MetadataFilter",
    "WATCHED_EXTENSIONS",
]
