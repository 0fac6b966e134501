"""Source tree enumeration.

Lists every file under a source root, pruning excluded directories and
auxiliary files. Top-level folders may be walked concurrently; the result
is always sorted so callers never observe arrival order.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Collection, List, Optional

from ..config import DEFAULT_CONFIG, CounterConfig
from ..exceptions import ScanError
from ..logging_config import get_logger
from ..models import CandidateFile

logger = get_logger(__name__)


def _raise_scan_error(error: OSError) -> None:
    path = Path(error.filename) if error.filename else Path(".")
    raise ScanError(path, error.strerror or str(error))


def _walk(
    directory: Path,
    exclude_dirs: Collection[str],
    exclude_file_names: Collection[str],
) -> List[Path]:
    files: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(directory, onerror=_raise_scan_error):
        dirnames[:] = [d for d in dirnames if d not in exclude_dirs]
        base = Path(dirpath)
        files.extend(base / name for name in filenames if name not in exclude_file_names)
    return files


def _walk_parallel(
    root: Path,
    exclude_dirs: Collection[str],
    exclude_file_names: Collection[str],
    workers: int,
) -> List[Path]:
    files: List[Path] = []
    subdirs: List[Path] = []
    try:
        with os.scandir(root) as entries:
            for entry in entries:
                # os.walk lists a directory symlink under dirnames and never descends
                if entry.is_symlink() and entry.is_dir():
                    continue
                if entry.is_dir(follow_symlinks=False):
                    if entry.name not in exclude_dirs:
                        subdirs.append(Path(entry.path))
                elif entry.name not in exclude_file_names:
                    files.append(Path(entry.path))
    except OSError as e:
        _raise_scan_error(e)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_walk, subdir, exclude_dirs, exclude_file_names) for subdir in subdirs
        ]
        # result() re-raises ScanError from the worker thread
        for future in futures:
            files.extend(future.result())
    return files


def enumerate_files(
    source_root: Path, config: Optional[CounterConfig] = None
) -> List[CandidateFile]:
    """List candidate files under ``source_root`` in a stable order.

    Raises:
        ScanError: If the root or any directory below it cannot be listed
    """
    config = config or DEFAULT_CONFIG
    root = Path(source_root)
    if not root.is_dir():
        raise ScanError(root, "not a directory")

    exclude_dirs = frozenset(config.exclude_dirs)
    exclude_file_names = frozenset(config.exclude_file_names)

    if config.workers and config.workers > 1:
        paths = _walk_parallel(root, exclude_dirs, exclude_file_names, config.workers)
    else:
        paths = _walk(root, exclude_dirs, exclude_file_names)

    candidates = sorted(
        (CandidateFile.from_path(path, root) for path in paths),
        key=lambda candidate: candidate.posix,
    )
    logger.debug("Enumerated %d file(s) under %s", len(candidates), root)
    return candidates
