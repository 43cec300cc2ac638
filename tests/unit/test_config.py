"""Tests for configuration loading and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from release_kit.config.loader import (
    extract_release_config,
    find_manifest,
    find_project_root,
    load_config,
    load_manifest,
)
from release_kit.config.models import GitConfig, ReleaseKitConfig
from release_kit.exceptions import ConfigNotFoundError, ConfigValidationError


class TestReleaseKitConfig:
    """Tests for ReleaseKitConfig model."""

    def test_default_config(self):
        """Default configuration has sensible values."""
        config = ReleaseKitConfig()

        assert config.manifest_path == Path("deno.json")
        assert config.changelog_path == Path("CHANGELOG.md")
        assert config.tag_prefix == "v"
        assert config.check_command == ["deno", "task", "check"]
        assert config.default_entry_point == "./src/main.ts"

    def test_nested_defaults(self):
        """Nested git configuration has defaults."""
        config = ReleaseKitConfig()

        assert config.git.remote == "origin"
        assert config.git.push is True

    def test_tag_for(self):
        """tag_for applies the tag prefix."""
        assert ReleaseKitConfig().tag_for("1.2.3") == "v1.2.3"
        assert ReleaseKitConfig(tag_prefix="release-").tag_for("1.2.3") == "release-1.2.3"

    def test_commit_subject(self):
        """The commit template substitutes version and tag."""
        assert ReleaseKitConfig().commit_subject("1.2.3") == "chore: release v1.2.3"

        config = ReleaseKitConfig(commit_message="release {version} ({tag})")
        assert config.commit_subject("2.0.0") == "release 2.0.0 (v2.0.0)"

    def test_unknown_keys_rejected(self):
        """Typos in configuration keys are reported."""
        with pytest.raises(ValueError):
            ReleaseKitConfig.model_validate({"tag_prefx": "v"})


class TestGitConfig:
    """Tests for GitConfig model."""

    def test_custom(self):
        config = GitConfig(remote="upstream", push=False)

        assert config.remote == "upstream"
        assert config.push is False


class TestFindManifest:
    """Tests for find_manifest()."""

    def test_find_in_current_dir(self, deno_project: Path):
        """Find deno.json in the given directory."""
        assert find_manifest(deno_project).name == "deno.json"

    def test_find_in_parent_dir(self, deno_project: Path):
        """Find deno.json in a parent directory."""
        subdir = deno_project / "src" / "lib"
        subdir.mkdir(parents=True)

        assert find_manifest(subdir) == (deno_project / "deno.json").resolve()

    def test_find_jsonc(self, tmp_path: Path):
        """deno.jsonc is recognised."""
        (tmp_path / "deno.jsonc").write_text("{}\n")

        assert find_manifest(tmp_path).name == "deno.jsonc"

    def test_not_found_raises(self, tmp_path: Path):
        """Raises ConfigNotFoundError when no manifest exists."""
        with pytest.raises(ConfigNotFoundError):
            find_manifest(tmp_path)


class TestFindProjectRoot:
    """Tests for find_project_root()."""

    def test_explicit_path(self, tmp_path: Path):
        assert find_project_root(str(tmp_path)) == tmp_path

    def test_discovers_from_subdirectory(
        self, deno_project: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Without a path the nearest manifest directory is used."""
        monkeypatch.chdir(deno_project / "src")

        assert find_project_root() == deno_project.resolve()

    def test_no_manifest(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigNotFoundError):
            find_project_root()


class TestLoadManifest:
    """Tests for load_manifest()."""

    def test_load_valid(self, deno_project: Path):
        data = load_manifest(deno_project / "deno.json")

        assert data["name"] == "@acme/widget"

    def test_missing_raises(self, tmp_path: Path):
        with pytest.raises(ConfigNotFoundError):
            load_manifest(tmp_path / "deno.json")

    def test_invalid_json_raises(self, tmp_path: Path):
        path = tmp_path / "deno.json"
        path.write_text("{ not json")

        with pytest.raises(ConfigValidationError, match="Failed to parse"):
            load_manifest(path)

    def test_non_object_raises(self, tmp_path: Path):
        path = tmp_path / "deno.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigValidationError):
            load_manifest(path)


class TestExtractReleaseConfig:
    """Tests for extract_release_config()."""

    def test_extract_existing_config(self):
        """Extract the release object."""
        manifest = {"name": "x", "release": {"tag_prefix": ""}}

        assert extract_release_config(manifest) == {"tag_prefix": ""}

    def test_extract_missing_config(self):
        """Extract returns empty dict when config missing."""
        assert extract_release_config({"name": "x"}) == {}

    def test_non_object_raises(self):
        with pytest.raises(ConfigValidationError):
            extract_release_config({"release": "yes"})


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_defaults_when_no_config(self, deno_project: Path):
        """Load defaults when the manifest has no release object."""
        config = load_config(deno_project)

        assert isinstance(config, ReleaseKitConfig)
        assert config.tag_prefix == "v"

    def test_load_defaults_without_manifest(self, tmp_path: Path):
        assert load_config(tmp_path) == ReleaseKitConfig()

    def test_load_with_config(self, tmp_path: Path):
        """Values from the release object override defaults."""
        manifest = {
            "name": "x",
            "version": "1.0.0",
            "release": {
                "check_command": ["deno", "test"],
                "git": {"push": False},
            },
        }
        (tmp_path / "deno.json").write_text(json.dumps(manifest))

        config = load_config(tmp_path)

        assert config.check_command == ["deno", "test"]
        assert config.git.push is False
        assert config.git.remote == "origin"

    def test_invalid_config_raises(self, tmp_path: Path):
        """Validation errors become ConfigValidationError."""
        manifest = {"release": {"check_command": "deno task check", "bogus": 1}}
        (tmp_path / "deno.json").write_text(json.dumps(manifest))

        with pytest.raises(ConfigValidationError, match="Invalid release configuration"):
            load_config(tmp_path)
