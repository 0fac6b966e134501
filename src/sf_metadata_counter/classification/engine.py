"""Classification and aggregation engine.

The engine is a pure function of (source root, file list) -> report:

    files = enumerate_files(root)          # filesystem, may raise ScanError
    report = count_files(files, root)      # pure fold, never touches disk

The fold keeps a set of consumed component keys and increments a counter
only for keys it has not seen, so a component backed by several physical
files (an Apex class and its descriptor, an LWC bundle) is counted once and
the result does not depend on the order files arrive in.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from ..config import DEFAULT_CONFIG, CounterConfig
from ..logging_config import get_logger
from ..models import CandidateFile, Classification, MetadataReport, SourceRoot
from .enumeration import enumerate_files
from .rules import RuleContext, build_type_map, classify_file, unit_extension

logger = get_logger(__name__)

FileLike = Union[CandidateFile, Path, str]


def _as_candidate(file: FileLike, root: Path) -> CandidateFile:
    if isinstance(file, CandidateFile):
        return file
    path = Path(file)
    if not path.is_absolute():
        path = root / path
    return CandidateFile.from_path(path, root)


def _root_path(source_root: Union[SourceRoot, Path, str]) -> Path:
    if isinstance(source_root, SourceRoot):
        return source_root.path
    return Path(source_root)


class MetadataClassifier:
    """Classifies a complete file set and folds it into a report.

    Example:
        >>> classifier = MetadataClassifier(type_overrides={"botVersion": "BotVersion"})
        >>> report = classifier.count(files)
        >>> report.total
        42
    """

    def __init__(self, type_overrides: Optional[Mapping[str, str]] = None):
        self.type_map = build_type_map(type_overrides)

    def context_for(self, files: Iterable[CandidateFile]) -> RuleContext:
        units = frozenset(f.posix for f in files if unit_extension(f) is not None)
        return RuleContext(unit_paths=units, type_map=self.type_map)

    def classify_all(self, files: Iterable[CandidateFile]) -> list[tuple[CandidateFile, Classification]]:
        """Classify every file; non-metadata files are left out."""
        files = list(files)
        ctx = self.context_for(files)
        results = []
        for file in files:
            classification = classify_file(file, ctx)
            if classification is None:
                continue
            logger.debug("%s -> %s (%s)", file.posix, classification.type_name, classification.rule)
            results.append((file, classification))
        return results

    def count(self, files: Iterable[CandidateFile]) -> MetadataReport:
        counter: Counter = Counter()
        consumed: set[str] = set()
        for _file, classification in self.classify_all(files):
            if not classification.counted or classification.key in consumed:
                continue
            consumed.add(classification.key)
            counter[classification.type_name] += 1
        return MetadataReport.from_counter(counter)


def count_files(
    files: Iterable[FileLike],
    source_root: Union[SourceRoot, Path, str],
    type_overrides: Optional[Mapping[str, str]] = None,
) -> MetadataReport:
    """Fold an explicit file list into a report without touching the disk.

    Relative paths are taken relative to ``source_root``.
    """
    root = _root_path(source_root)
    candidates = [_as_candidate(f, root) for f in files]
    return MetadataClassifier(type_overrides).count(candidates)


def classify(
    source_root: Union[SourceRoot, Path, str],
    config: Optional[CounterConfig] = None,
) -> MetadataReport:
    """Scan ``source_root`` and count its metadata components.

    Raises:
        ScanError: If the tree cannot be traversed; no partial report is
            returned
    """
    config = config or DEFAULT_CONFIG
    root = _root_path(source_root)
    files = enumerate_files(root, config)
    report = MetadataClassifier(config.type_overrides).count(files)
    logger.info(
        "Counted %d component(s) across %d type(s) in %s",
        report.total,
        report.type_count,
        root,
    )
    return report


def count_metadata(
    source_root: Union[SourceRoot, Path, str],
    config: Optional[CounterConfig] = None,
) -> int:
    """Total number of components under ``source_root``."""
    return classify(source_root, config).total
