"""Debounced file watcher that recounts metadata on source changes."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Collection, Optional

from watchfiles import Change, watch

from ..classification import classify
from ..config import DEFAULT_CONFIG, CounterConfig
from ..logging_config import get_logger
from ..models import MetadataReport, SourceRoot
from .state import ReportState

logger = get_logger(__name__)

# Mirrors the **/*.{xml,cls,trigger,js,html} glob beneath the source root
WATCHED_EXTENSIONS = frozenset({".xml", ".cls", ".trigger", ".js", ".html"})

# watchfiles polls for further changes at least this often (its own default)
MIN_QUIET_MS = 50

# A burst that never goes quiet is still flushed after this many quiet periods
MAX_BATCH_PERIODS = 5


class MetadataFilter:
    """watchfiles filter: metadata-shaped files and folders below the source root.

    A new bundle or type folder is often reported as a single added
    directory with no events for the files inside it, so folder additions
    and deletions are let through as well.
    """

    def __init__(self, root: Path, exclude_dirs: Collection[str] = ()) -> None:
        self.root = Path(root)
        self.exclude_dirs = frozenset(exclude_dirs)

    def __call__(self, change: Change, path: str) -> bool:
        p = Path(path)
        try:
            parts = p.relative_to(self.root).parts
        except ValueError:
            return False

        if not parts or any(part in self.exclude_dirs for part in parts[:-1]):
            return False

        suffix = p.suffix.lower()
        if suffix in WATCHED_EXTENSIONS:
            return True

        if change == Change.modified or parts[-1] in self.exclude_dirs:
            return False
        # Deleted folders can no longer be stat-ed; a suffix-less name stands in
        return not suffix or p.is_dir()


class MetadataWatcher:
    """Watches a source root and refreshes a ReportState on changes.

    Uses ``watchfiles`` (Rust-backed) for efficient file monitoring. A
    recount starts only once the tree has been quiet for
    ``debounce_seconds``, so a burst of saves becomes a single scan. Scans
    run in a background thread so the caller stays free to render
    notifications.
    """

    def __init__(
        self,
        source_root: SourceRoot,
        state: ReportState,
        config: Optional[CounterConfig] = None,
        scan: Optional[Callable[[], MetadataReport]] = None,
    ) -> None:
        self.source_root = source_root
        self.state = state
        self.config = config or DEFAULT_CONFIG
        self._scan = scan or (lambda: classify(self.source_root, self.config))

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def enabled(self) -> bool:
        return self.config.auto_refresh

    def start(self) -> None:
        """Start the watcher thread (no-op when auto refresh is off)."""
        if not self.enabled:
            logger.info("Auto refresh disabled; not watching %s", self.source_root.path)
            return
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="sf-metadata-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop."""
        logger.debug("Stopping watcher thread...")
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            if self._thread.is_alive():
                logger.warning(
                    "Watcher thread did not exit cleanly within 5 seconds (may be stuck in a scan)"
                )
            else:
                logger.debug("Watcher thread stopped successfully")

    def run_scan(self) -> Optional[MetadataReport]:
        """Run one count and publish it. Can be called directly for the initial run."""
        return self.state.refresh(self._scan)

    def watch_options(self) -> dict:
        """Keyword arguments for ``watchfiles.watch``.

        ``step`` is the quiet period watchfiles waits for before yielding;
        ``debounce`` only caps how long one batch may keep growing.
        """
        quiet_ms = max(self.config.debounce_ms, MIN_QUIET_MS)
        return {
            "step": quiet_ms,
            "debounce": quiet_ms * MAX_BATCH_PERIODS,
            "rust_timeout": 5000,
        }

    def _watch_loop(self) -> None:
        """Background thread: watch files, debounce changes, recount."""
        root = self.source_root.path
        logger.info("Watching %s for changes", root)

        for changes in watch(
            root,
            stop_event=self._stop_event,
            watch_filter=MetadataFilter(root, self.config.exclude_dirs),
            **self.watch_options(),
        ):
            if self._stop_event.is_set():
                break

            logger.info("Detected %d changed file(s), recounting...", len(changes))
            try:
                self.run_scan()
            except Exception:
                logger.exception("Recount failed")

            # Cooldown to avoid rapid re-triggers
            if self._stop_event.wait(self.config.cooldown_seconds):
                break
