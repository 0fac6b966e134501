"""Shared test fixtures for sf-metadata-counter."""

from pathlib import Path
from typing import Iterable

import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def write_files(root: Path, paths: Iterable[str]) -> Path:
    """Create empty files (and parents) below ``root``."""
    for rel in paths:
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("<x/>\n" if rel.endswith(".xml") else "// stub\n", encoding="utf-8")
    return root


SAMPLE_SOURCE_FILES = [
    "classes/AccountService.cls",
    "classes/AccountService.cls-meta.xml",
    "classes/AccountServiceTest.cls",
    "classes/AccountServiceTest.cls-meta.xml",
    "triggers/AccountTrigger.trigger",
    "triggers/AccountTrigger.trigger-meta.xml",
    "lwc/accountCard/accountCard.html",
    "lwc/accountCard/accountCard.js",
    "lwc/accountCard/accountCard.js-meta.xml",
    "lwc/jsconfig.json",
    "aura/AccountPanel/AccountPanel.cmp",
    "aura/AccountPanel/AccountPanel.cmp-meta.xml",
    "aura/AccountPanel/AccountPanelController.js",
    "objects/Account/Account.object-meta.xml",
    "objects/Account/fields/Region__c.field-meta.xml",
    "objects/Account/fields/Tier__c.field-meta.xml",
    "objects/Account/listViews/AllAccounts.listView-meta.xml",
    "layouts/Account-Account Layout.layout-meta.xml",
    "permissionsets/Sales.permissionset-meta.xml",
    "labels/CustomLabels.labels-meta.xml",
    "staticresources/logo.resource-meta.xml",
    "staticresources/logo.png",
]

SAMPLE_EXPECTED = {
    "ApexClass": 2,
    "ApexTrigger": 1,
    "AuraDefinitionBundle": 1,
    "CustomField": 2,
    "CustomLabels": 1,
    "CustomObject": 1,
    "Layout": 1,
    "LightningComponentBundle": 1,
    "ListView": 1,
    "PermissionSet": 1,
    "StaticResource": 1,
}


@pytest.fixture
def sfdx_project(tmp_path):
    """A modern-layout project with a representative source tree."""
    project = tmp_path / "org"
    source = project / "force-app" / "main" / "default"
    write_files(source, SAMPLE_SOURCE_FILES)
    (project / "sfdx-project.json").write_text('{"packageDirectories": []}\n', encoding="utf-8")
    (source / "package.xml").write_text("<Package/>\n", encoding="utf-8")
    return project


@pytest.fixture
def sfdx_source(sfdx_project):
    return sfdx_project / "force-app" / "main" / "default"


@pytest.fixture
def legacy_project(tmp_path):
    """A metadata API (src/) project."""
    project = tmp_path / "legacy"
    write_files(
        project / "src",
        [
            "package.xml",
            "classes/Legacy.cls",
            "classes/Legacy.cls-meta.xml",
            "tabs/Invoice__c.tab-meta.xml",
        ],
    )
    return project


@pytest.fixture
def make_tree():
    """Return the helper that writes files below a root."""
    return write_files


@pytest.fixture
def sample_expected():
    return dict(SAMPLE_EXPECTED)
