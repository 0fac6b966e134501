"""
sf-metadata-counter - Salesforce metadata component counting

Classifies every file of an sfdx (force-app/main/default) or legacy (src/)
source tree into a metadata type and counts logical components, merging
Apex classes with their descriptors and bundle folders into one component.
"""

__version__ = "0.1.0"

from .classification import classify, count_files, count_metadata
from .locator import is_salesforce_project, locate_project_root, locate_source_root
from .models import MetadataReport, SourceRoot

__all__ = [
    "classify",  # Main entry point
    "count_files",  # Pure fold over an explicit file list
    "count_metadata",
    "locate_source_root",
    "locate_project_root",
    "is_salesforce_project",
    "MetadataReport",
    "SourceRoot",
]
