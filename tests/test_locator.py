"""Tests for project and source root discovery."""

import pytest

from sf_metadata_counter.exceptions import ProjectNotFoundError, SourceDirectoryNotFoundError
from sf_metadata_counter.locator import (
    find_project_root,
    is_salesforce_project,
    locate_project_root,
    locate_source_root,
    source_root_for,
)


class TestProjectMarkers:
    def test_manifest_marks_project(self, tmp_path):
        (tmp_path / "sfdx-project.json").write_text("{}")
        assert find_project_root([tmp_path]) == tmp_path.resolve()

    def test_force_app_marks_project(self, tmp_path):
        (tmp_path / "force-app" / "main" / "default").mkdir(parents=True)
        assert is_salesforce_project([tmp_path])

    def test_legacy_package_xml_marks_project(self, tmp_path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "package.xml").write_text("<Package/>")
        assert is_salesforce_project([tmp_path])

    def test_forceignore_marks_project(self, tmp_path):
        (tmp_path / ".forceignore").write_text("**/jsconfig.json\n")
        assert is_salesforce_project([tmp_path])

    def test_plain_directory_is_not_a_project(self, tmp_path):
        (tmp_path / "src").mkdir()
        assert not is_salesforce_project([tmp_path])

    def test_missing_candidate_is_skipped(self, tmp_path):
        assert find_project_root([tmp_path / "nope"]) is None


class TestCandidateOrder:
    def test_first_qualifying_candidate_wins(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()
        first = tmp_path / "first"
        second = tmp_path / "second"
        for project in (first, second):
            project.mkdir()
            (project / ".forceignore").write_text("")

        assert locate_project_root([plain, first, second]) == first.resolve()
        assert locate_project_root([second, first]) == second.resolve()

    def test_no_candidates_raises_project_not_found(self, tmp_path):
        with pytest.raises(ProjectNotFoundError) as exc_info:
            locate_project_root([tmp_path])
        assert exc_info.value.candidates == [tmp_path]

    def test_empty_candidate_list(self):
        with pytest.raises(ProjectNotFoundError):
            locate_source_root([])


class TestSourceRoot:
    def test_modern_layout(self, sfdx_project):
        source = locate_source_root([sfdx_project])
        assert source.layout == "modern"
        assert source.path == sfdx_project.resolve() / "force-app" / "main" / "default"
        assert source.project_root == sfdx_project.resolve()

    def test_legacy_layout(self, legacy_project):
        source = locate_source_root([legacy_project])
        assert source.layout == "legacy"
        assert source.path.name == "src"

    def test_modern_layout_preferred_over_legacy(self, tmp_path):
        (tmp_path / "force-app" / "main" / "default").mkdir(parents=True)
        (tmp_path / "src").mkdir()
        assert source_root_for(tmp_path).layout == "modern"

    def test_forceignore_only_reports_missing_source(self, tmp_path):
        (tmp_path / ".forceignore").write_text("")
        with pytest.raises(SourceDirectoryNotFoundError) as exc_info:
            locate_source_root([tmp_path])
        assert exc_info.value.project_root == tmp_path.resolve()

    def test_missing_source_is_distinct_from_missing_project(self, tmp_path):
        (tmp_path / "sfdx-project.json").write_text("{}")
        with pytest.raises(SourceDirectoryNotFoundError):
            locate_source_root([tmp_path])
        assert not issubclass(SourceDirectoryNotFoundError, ProjectNotFoundError)
