"""Tests for workflow template installation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from release_kit.exceptions import InstallError
from release_kit.project.installer import (
    FileMapping,
    copy_template,
    find_conflicts,
    get_file_mappings,
    install_files,
    validate_project,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestGetFileMappings:
    """Tests for get_file_mappings()."""

    def test_workflows_are_packaged(self):
        """Every mapped template exists in the package."""
        mappings = get_file_mappings()

        assert [m.dest for m in mappings] == [
            ".github/workflows/ci.yml",
            ".github/workflows/release.yml",
            ".github/workflows/publish.yml",
        ]
        for mapping in mappings:
            assert mapping.source.is_file()
            assert "on:" in mapping.source.read_text(encoding="utf-8")

    def test_release_workflow_uses_cli(self):
        """The release workflow relies on the meta and changelog commands."""
        release = next(m for m in get_file_mappings() if m.dest.endswith("release.yml"))
        content = release.source.read_text(encoding="utf-8")

        assert "release-kit meta" in content
        assert "release-kit changelog get" in content


class TestValidateProject:
    """Tests for validate_project()."""

    def test_deno_json(self, deno_project: Path):
        assert validate_project(deno_project).name == "deno.json"

    def test_deno_jsonc(self, tmp_path: Path):
        (tmp_path / "deno.jsonc").write_text("// comment\n{}\n")

        assert validate_project(tmp_path).name == "deno.jsonc"

    def test_not_a_deno_project(self, tmp_path: Path):
        with pytest.raises(InstallError, match="not a Deno project"):
            validate_project(tmp_path)


class TestInstallFiles:
    """Tests for find_conflicts() and install_files()."""

    def test_install_into_empty_project(self, deno_project: Path):
        """All templates are copied and reported."""
        installed = []
        mappings = get_file_mappings()

        report = install_files(deno_project, mappings, on_installed=installed.append)

        assert report.ok
        assert report.installed == [m.dest for m in mappings]
        assert installed == mappings
        for mapping in mappings:
            copied = deno_project / mapping.dest
            assert copied.read_text(encoding="utf-8") == mapping.source.read_text(
                encoding="utf-8"
            )

    def test_conflicts(self, deno_project: Path):
        """Existing destinations are reported as conflicts."""
        mappings = get_file_mappings()
        ci = deno_project / ".github" / "workflows" / "ci.yml"
        ci.parent.mkdir(parents=True)
        ci.write_text("name: mine\n")

        assert find_conflicts(deno_project, mappings) == [".github/workflows/ci.yml"]

    def test_failures_are_collected(self, deno_project: Path):
        """A missing template is reported without stopping the rest."""
        good = get_file_mappings()[0]
        bad = FileMapping(
            dest="tools/missing.yml",
            source=deno_project / "does-not-exist.yml",
            description="missing",
        )

        report = install_files(deno_project, [bad, good])

        assert not report.ok
        assert list(report.failed) == ["tools/missing.yml"]
        assert report.installed == [good.dest]

    def test_copy_template_creates_directories(self, tmp_path: Path):
        source = tmp_path / "template.yml"
        source.write_text("on: push\n")
        target = tmp_path / "target"

        dest = copy_template(FileMapping("a/b/c.yml", source, "nested"), target)

        assert dest.read_text() == "on: push\n"
