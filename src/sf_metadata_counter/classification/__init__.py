"""Classification and aggregation of Salesforce metadata files."""

from .engine import MetadataClassifier, classify, count_files, count_metadata
from .enumeration import enumerate_files
from .rules import (
    BUNDLE_TYPES,
    DEFAULT_TYPE_MAP,
    OBJECT_CHILD_TYPES,
    UNIT_TYPES,
    build_type_map,
    classify_file,
    descriptor_token,
)

__all__ = [
    "MetadataClassifier",
    "classify",
    "count_files",
    "count_metadata",
    "enumerate_files",
    "classify_file",
    "descriptor_token",
    "build_type_map",
    "DEFAULT_TYPE_MAP",
    "OBJECT_CHILD_TYPES",
    "BUNDLE_TYPES",
    "UNIT_TYPES",
]
