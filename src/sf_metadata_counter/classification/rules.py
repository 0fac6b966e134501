"""Classification rules: the single source of truth for metadata type names.

Every rule receives a CandidateFile and the RuleContext of the current run
and either returns a Classification or None to let the next rule try.
DESCRIPTOR_RULES is evaluated in order and the first hit wins, so the
folder-shaped rules must stay ahead of the suffix rules.

Adding a new metadata type:
  1. Add its suffix token to DEFAULT_TYPE_MAP below (or to the ``[types]``
     table of a config file).
  2. That's it. Dispatch never needs to change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from ..models import CandidateFile, Classification

MANIFEST_NAME = "package.xml"
META_SUFFIX = "-meta.xml"
DESCRIPTOR_EXTENSION = ".xml"

# Unit files always ship with a ``<name>.<ext>-meta.xml`` descriptor.
UNIT_TYPES: dict[str, str] = {
    "cls": "ApexClass",
    "trigger": "ApexTrigger",
}

# Folder segment -> type for component bundles. One bundle = one component.
BUNDLE_TYPES: dict[str, str] = {
    "aura": "AuraDefinitionBundle",
    "lwc": "LightningComponentBundle",
}

OBJECTS_FOLDER = "objects"

# Sub-folders of ``objects/<Object>/``.
OBJECT_CHILD_TYPES: dict[str, str] = {
    "fields": "CustomField",
    "listViews": "ListView",
    "validationRules": "ValidationRule",
    "recordTypes": "RecordType",
    "webLinks": "WebLink",
    "businessProcesses": "BusinessProcess",
    "compactLayouts": "CompactLayout",
    "fieldSets": "FieldSet",
}

# Double-extension token -> metadata type (``layout`` in Foo.layout-meta.xml).
# Not exhaustive: unknown tokens fall back to the raw token.
DEFAULT_TYPE_MAP: dict[str, str] = {
    "app": "CustomApplication",
    "approvalProcess": "ApprovalProcess",
    "assignmentRules": "AssignmentRules",
    "autoResponseRules": "AutoResponseRules",
    "cls": "ApexClass",
    "component": "ApexComponent",
    "connectedApp": "ConnectedApp",
    "cspTrustedSite": "CspTrustedSite",
    "customPermission": "CustomPermission",
    "dashboard": "Dashboard",
    "duplicateRule": "DuplicateRule",
    "email": "EmailTemplate",
    "flexipage": "FlexiPage",
    "flow": "Flow",
    "globalValueSet": "GlobalValueSet",
    "group": "Group",
    "labels": "CustomLabels",
    "layout": "Layout",
    "md": "CustomMetadata",
    "namedCredential": "NamedCredential",
    "object": "CustomObject",
    "page": "ApexPage",
    "permissionset": "PermissionSet",
    "permissionsetgroup": "PermissionSetGroup",
    "profile": "Profile",
    "queue": "Queue",
    "quickAction": "QuickAction",
    "remoteSite": "RemoteSiteSetting",
    "report": "Report",
    "reportType": "ReportType",
    "resource": "StaticResource",
    "role": "Role",
    "sharingRules": "SharingRules",
    "standardValueSet": "StandardValueSet",
    "tab": "CustomTab",
    "trigger": "ApexTrigger",
    "weblink": "CustomPageWebLink",
    "workflow": "Workflow",
}


def build_type_map(overrides: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Return the default suffix table with ``overrides`` applied on top."""
    type_map = dict(DEFAULT_TYPE_MAP)
    if overrides:
        type_map.update(overrides)
    return type_map


@dataclass(frozen=True)
class RuleContext:
    """Facts about the whole file set that single-file rules need."""

    unit_paths: frozenset[str] = field(default_factory=frozenset)
    type_map: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_TYPE_MAP))


Rule = Callable[[CandidateFile, RuleContext], Optional[Classification]]


# ── Path helpers ───────────────────────────────────────────────


def is_descriptor(file: CandidateFile) -> bool:
    return file.name.lower().endswith(DESCRIPTOR_EXTENSION)


def unit_extension(file: CandidateFile) -> Optional[str]:
    """Return ``cls``/``trigger`` for unit files, otherwise None."""
    _, dot, ext = file.name.rpartition(".")
    if dot and ext.lower() in UNIT_TYPES:
        return ext.lower()
    return None


def descriptor_token(name: str) -> str:
    """Type token of a descriptor file name.

    ``Foo.layout-meta.xml`` -> ``layout``, ``Foo.Bar.md-meta.xml`` -> ``md``,
    ``Foo.workflow.xml`` -> ``workflow``, ``Foo.xml`` -> ``xml``.
    """
    if name.endswith(META_SUFFIX):
        stem = name[: -len(META_SUFFIX)]
    elif name.lower().endswith(DESCRIPTOR_EXTENSION):
        stem = name[: -len(DESCRIPTOR_EXTENSION)]
    else:
        _, dot, ext = name.rpartition(".")
        return ext if dot else name

    _, dot, token = stem.rpartition(".")
    return token if dot and token else "xml"


def _file_key(file: CandidateFile) -> str:
    return f"file:{file.posix}"


def _unit_key(posix: str) -> str:
    return f"unit:{posix}"


# ── Rules ──────────────────────────────────────────────────────


def paired_descriptor(file: CandidateFile, ctx: RuleContext) -> Optional[Classification]:
    """Absorb ``Foo.cls-meta.xml`` when ``Foo.cls`` exists; the unit counts."""
    if not file.posix.endswith(META_SUFFIX):
        return None
    unit = file.posix[: -len(META_SUFFIX)]
    if unit in ctx.unit_paths:
        return Classification(rule="paired-descriptor", key=_unit_key(unit))
    return None


def bundle_folder(file: CandidateFile, ctx: RuleContext) -> Optional[Classification]:
    """Every file inside ``aura/<bundle>/`` or ``lwc/<bundle>/`` is one component."""
    segments = file.segments
    # The bundle folder must be a directory, never the file itself.
    for index, segment in enumerate(segments[:-2]):
        type_name = BUNDLE_TYPES.get(segment)
        if type_name is not None:
            bundle = "/".join(segments[: index + 2])
            return Classification(rule="bundle", key=f"bundle:{bundle}", type_name=type_name)
    return None


def object_child(file: CandidateFile, ctx: RuleContext) -> Optional[Classification]:
    """Files below ``objects/``: the object itself or one of its children."""
    segments = file.segments
    folders = segments[:-1]
    if OBJECTS_FOLDER not in folders:
        return None

    start = folders.index(OBJECTS_FOLDER)
    below = folders[start + 1 :]
    key = _file_key(file)

    if len(below) == 1 and file.name == f"{below[0]}.object{META_SUFFIX}":
        return Classification(rule="custom-object", key=key, type_name="CustomObject")

    for folder in reversed(below):
        type_name = OBJECT_CHILD_TYPES.get(folder)
        if type_name is not None:
            return Classification(rule="object-child", key=key, type_name=type_name)

    nearest = below[-1] if below else OBJECTS_FOLDER
    return Classification(rule="object-folder", key=key, type_name=nearest)


def suffix_map(file: CandidateFile, ctx: RuleContext) -> Optional[Classification]:
    type_name = ctx.type_map.get(descriptor_token(file.name))
    if type_name is None:
        return None
    return Classification(rule="suffix", key=_file_key(file), type_name=type_name)


def fallback(file: CandidateFile, ctx: RuleContext) -> Optional[Classification]:
    return Classification(rule="fallback", key=_file_key(file), type_name=descriptor_token(file.name))


def unit_file(file: CandidateFile, ctx: RuleContext) -> Optional[Classification]:
    ext = unit_extension(file)
    if ext is None:
        return None
    return Classification(rule="unit", key=_unit_key(file.posix), type_name=UNIT_TYPES[ext])


DESCRIPTOR_RULES: tuple[Rule, ...] = (
    paired_descriptor,
    bundle_folder,
    object_child,
    suffix_map,
    fallback,
)


def classify_file(file: CandidateFile, ctx: RuleContext) -> Optional[Classification]:
    """Run the rule chain for one file.

    Returns None for files that are not metadata at all (neither unit,
    descriptor nor bundle member).
    """
    if file.name == MANIFEST_NAME:
        return None

    unit = unit_file(file, ctx)
    if unit is not None:
        return unit

    if is_descriptor(file):
        for rule in DESCRIPTOR_RULES:
            result = rule(file, ctx)
            if result is not None:
                return result

    # Bundles also own their .js/.html/.css/.cmp files.
    return bundle_folder(file, ctx)
