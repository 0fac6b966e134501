"""Thread-safe holder for the last good count report."""

from __future__ import annotations

import queue
import threading
from typing import Any, Callable, Optional

from ..exceptions import MetadataCounterError
from ..logging_config import get_logger
from ..models import MetadataReport

logger = get_logger(__name__)


def diff_reports(
    previous: Optional[MetadataReport], current: MetadataReport
) -> Optional[dict[str, Any]]:
    """Per-type deltas between two reports, or None when nothing changed."""
    old = dict(previous.counts) if previous is not None else {}
    new = dict(current.counts)

    deltas: dict[str, int] = {}
    for type_name in sorted(set(old) | set(new)):
        delta = new.get(type_name, 0) - old.get(type_name, 0)
        if delta:
            deltas[type_name] = delta

    if not deltas:
        return None
    return {
        "deltas": deltas,
        "total_delta": sum(deltas.values()),
    }


class ReportState:
    """Owns the latest report and serializes the scans that replace it.

    Only one scan runs at a time: a caller arriving while a scan is in
    flight waits for it and then runs its own. A failed scan never replaces
    the last good report; listeners receive an ``error`` message instead.

    Listeners are queue-like objects with ``put_nowait``. They receive
    ``{"type": "report", ...}`` whenever the report changes,
    ``{"type": "error", ...}`` when a scan fails and
    ``{"type": "progress", ...}`` while a scan is running.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._scan_lock = threading.Lock()
        self._report: Optional[MetadataReport] = None
        self._previous: Optional[MetadataReport] = None
        self._last_error: Optional[str] = None
        self._listeners: list[Any] = []

    def refresh(self, scan: Callable[[], MetadataReport]) -> Optional[MetadataReport]:
        """Run ``scan`` and publish its report.

        Returns the new report, or None when the scan failed (the previous
        report stays available through :meth:`get_report`).
        """
        with self._scan_lock:
            self.send_progress("Counting metadata...")
            try:
                report = scan()
            except MetadataCounterError as exc:
                logger.warning("Count failed: %s", exc)
                msg = {"type": "error", **exc.to_dict(), "message": str(exc)}
                with self._lock:
                    self._last_error = str(exc)
                    listeners = list(self._listeners)
                for listener in listeners:
                    self._send(listener, msg, is_report=False)
                return None

            self.update(report)
            return report

    def update(self, report: MetadataReport) -> None:
        """Replace the current report and notify listeners if it changed."""
        with self._lock:
            changes = diff_reports(self._report, report)
            if self._report is not None and changes is None:
                self._last_error = None
                return
            self._previous = self._report
            self._report = report
            self._last_error = None
            listeners = list(self._listeners)

        msg: dict[str, Any] = {"type": "report", "report": report.to_dict()}
        if changes:
            msg["changes"] = changes
        for listener in listeners:
            self._send(listener, msg, is_report=True)

    def _send(self, listener: Any, msg: dict[str, Any], is_report: bool) -> bool:
        """Deliver a message, draining stale messages for report updates."""
        try:
            listener.put_nowait(msg)
            return True
        except queue.Full:
            if not is_report:
                logger.debug("Listener queue full, dropping %s message", msg["type"])
                return False

        # Intermediate reports are useless once a newer one exists
        drained = 0
        while True:
            try:
                listener.get_nowait()
                drained += 1
            except queue.Empty:
                break
        if drained:
            logger.debug("Drained %d stale message(s) from listener queue", drained)
        try:
            listener.put_nowait(msg)
            return True
        except queue.Full:
            logger.warning("Listener queue still full after drain; report dropped")
            return False

    def get_report(self) -> Optional[MetadataReport]:
        with self._lock:
            return self._report

    def get_previous_report(self) -> Optional[MetadataReport]:
        with self._lock:
            return self._previous

    def get_last_error(self) -> Optional[str]:
        with self._lock:
            return self._last_error

    @property
    def is_scanning(self) -> bool:
        return self._scan_lock.locked()

    def add_listener(self, listener: Any) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Any) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    def send_progress(self, message: str) -> None:
        msg = {"type": "progress", "message": message}
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            self._send(listener, msg, is_report=False)
