"""Tests for configuration loading and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from semver_release.config.loader import (
    build_config,
    extract_tool_config,
    find_pyproject_toml,
    load_config,
    load_config_file,
    load_json_config,
    load_properties_config,
    load_pyproject_toml,
    merge_config,
    parse_properties,
)
from semver_release.config.models import (
    CleanRule,
    GitMessageConfig,
    GitRepoConfig,
    GitTagConfig,
    SemverReleaseConfig,
    VersionConfig,
)
from semver_release.core.version import Increment, Semver
from semver_release.exceptions import ConfigNotFoundError, ConfigValidationError


class TestSemverReleaseConfig:
    """Tests for SemverReleaseConfig model."""

    def test_default_config(self):
        """Default configuration has sensible values."""
        config = SemverReleaseConfig()

        assert config.git.repo.directory == Path(".")
        assert config.git.repo.remote_name == "origin"
        assert config.git.repo.clean_rule == CleanRule.TRACKED
        assert config.tag_prefix == "v"

    def test_nested_defaults(self):
        """Nested configurations have defaults."""
        config = SemverReleaseConfig()

        assert config.git.message.major == "[major]"
        assert config.git.message.pre_release == "[pre release]"
        assert config.git.message.ignore_case is False
        assert config.version.initial_version == Semver(0, 1, 0)
        assert config.version.default_increment == Increment.MINOR
        assert config.version.use_snapshots is False

    def test_tag_prefix_with_separator(self):
        """The tag prefix joins prefix and separator."""
        config = SemverReleaseConfig.model_validate(
            {"git": {"tag": {"prefix": "release", "separator": "-"}}}
        )

        assert config.tag_prefix == "release-"
        assert config.tag_name(Semver.parse("1.2.3-rc.1")) == "release-1.2.3-rc.1"

    def test_camel_case_aliases(self):
        """camelCase keys are accepted alongside snake_case."""
        config = SemverReleaseConfig.model_validate(
            {
                "git": {
                    "repo": {"remoteName": "upstream", "cleanRule": "ALL"},
                    "message": {"ignoreCase": True, "preRelease": "[rc]"},
                },
                "version": {"initialVersion": "1.0.0", "defaultIncrement": "patch"},
            }
        )

        assert config.git.repo.remote_name == "upstream"
        assert config.git.repo.clean_rule == CleanRule.ALL
        assert config.git.message.ignore_case is True
        assert config.git.message.pre_release == "[rc]"
        assert config.version.initial_version == Semver(1, 0, 0)
        assert config.version.default_increment == Increment.PATCH

    def test_unknown_key_rejected(self):
        """Unknown keys are errors, not silently ignored."""
        with pytest.raises(ValidationError):
            SemverReleaseConfig.model_validate({"git": {"tags": {}}})

    def test_frozen(self):
        """Configuration is immutable."""
        config = SemverReleaseConfig()
        with pytest.raises(ValidationError):
            config.git = None  # type: ignore[assignment]

    def test_dump_renders_versions(self):
        """Versions and increments serialize as strings."""
        data = SemverReleaseConfig().model_dump()

        assert data["version"]["initial_version"] == "0.1.0"
        assert data["version"]["default_increment"] == "minor"


class TestGitRepoConfig:
    """Tests for GitRepoConfig model."""

    @pytest.mark.parametrize("value", ["all", "ALL", " Tracked ", "none"])
    def test_clean_rule_case_insensitive(self, value: str):
        """Clean rules are matched case-insensitively."""
        assert GitRepoConfig(clean_rule=value).clean_rule == CleanRule(value.strip().lower())

    def test_invalid_clean_rule(self):
        """Unknown clean rules are rejected."""
        with pytest.raises(ValidationError):
            GitRepoConfig(clean_rule="sometimes")


class TestGitTagConfig:
    """Tests for GitTagConfig model."""

    def test_defaults(self):
        """Default tag naming."""
        config = GitTagConfig()

        assert config.prefix == "v"
        assert config.separator == ""
        assert config.message == ""


class TestGitMessageConfig:
    """Tests for GitMessageConfig model."""

    def test_custom_keywords(self):
        """Keywords can be configured."""
        config = GitMessageConfig(major="BREAKING", minor="feat:")

        assert config.major == "BREAKING"
        assert config.minor == "feat:"
        assert config.patch == "[patch]"


class TestVersionConfig:
    """Tests for VersionConfig model."""

    def test_defaults(self):
        """Default version configuration."""
        config = VersionConfig()

        assert config.placeholder_version == Semver(0, 0, 0)
        assert config.pre_release_id == "rc"
        assert config.initial_pre_release == 1
        assert str(config.initial_pre_release_id) == "rc.1"
        assert config.snapshot_suffix == "SNAPSHOT"

    @pytest.mark.parametrize("value", ["pre_release", "default", "none"])
    def test_default_increment_must_be_normal(self, value: str):
        """Only major, minor and patch are valid default increments."""
        with pytest.raises(ValidationError, match="default_increment"):
            VersionConfig(default_increment=value)

    def test_invalid_initial_version(self):
        """Versions are validated."""
        with pytest.raises(ValidationError):
            VersionConfig(initial_version="1.0")

    def test_invalid_pre_release_id(self):
        """The pre-release identifier must form a valid pre-release."""
        with pytest.raises(ValidationError):
            VersionConfig(pre_release_id="r_c")

    def test_negative_initial_pre_release(self):
        """The initial pre-release number cannot be negative."""
        with pytest.raises(ValidationError):
            VersionConfig(initial_pre_release=-1)


# =============================================================================
# Loading
# =============================================================================


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml()."""

    def test_find_in_current_dir(self, tmp_path: Path):
        """Find pyproject.toml in the start directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'demo'\n")

        assert find_pyproject_toml(tmp_path) == pyproject

    def test_find_in_parent_dir(self, tmp_path: Path):
        """Find pyproject.toml in a parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'demo'\n")
        subdir = tmp_path / "src" / "demo"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir) == pyproject


class TestLoadPyprojectToml:
    """Tests for load_pyproject_toml()."""

    def test_load_valid_toml(self, tmp_path: Path):
        """Load a valid pyproject.toml."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.semver-release.git.tag]\nprefix = "release-"\n')

        data = load_pyproject_toml(pyproject)

        assert extract_tool_config(data) == {"git": {"tag": {"prefix": "release-"}}}

    def test_missing_file(self, tmp_path: Path):
        """Missing files raise ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_pyproject_toml(tmp_path / "pyproject.toml")

    def test_invalid_toml(self, tmp_path: Path):
        """Invalid TOML raises ConfigValidationError."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool\n")

        with pytest.raises(ConfigValidationError, match="Invalid TOML"):
            load_pyproject_toml(pyproject)

    def test_no_tool_table(self):
        """Without a tool table the configuration is empty."""
        assert extract_tool_config({"project": {"name": "demo"}}) == {}


class TestLoadJsonConfig:
    """Tests for load_json_config()."""

    def test_load(self, tmp_path: Path):
        """Load a JSON object."""
        path = tmp_path / "semantic-versioning.json"
        path.write_text(json.dumps({"version": {"useSnapshots": True}}))

        assert load_json_config(path) == {"version": {"useSnapshots": True}}

    def test_invalid_json(self, tmp_path: Path):
        """Invalid JSON raises ConfigValidationError."""
        path = tmp_path / "config.json"
        path.write_text("{")

        with pytest.raises(ConfigValidationError, match="Invalid JSON"):
            load_json_config(path)

    def test_not_an_object(self, tmp_path: Path):
        """The top-level JSON value must be an object."""
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigValidationError, match="JSON object"):
            load_json_config(path)


class TestParseProperties:
    """Tests for parse_properties()."""

    def test_dotted_keys(self):
        """Dotted keys become nested tables."""
        text = "git.tag.prefix=release-\ngit.message.ignoreCase = true\nversion.preReleaseId: beta\n"

        assert parse_properties(text) == {
            "git": {"tag": {"prefix": "release-"}, "message": {"ignoreCase": "true"}},
            "version": {"preReleaseId": "beta"},
        }

    def test_comments_and_blank_lines(self):
        """Comments and blank lines are skipped."""
        text = "# comment\n! also a comment\n\ngit.tag.prefix=v\n"

        assert parse_properties(text) == {"git": {"tag": {"prefix": "v"}}}

    def test_value_may_contain_separator(self):
        """Only the first separator splits key and value."""
        assert parse_properties("git.tag.message=Release: v1") == {
            "git": {"tag": {"message": "Release: v1"}}
        }

    def test_missing_separator(self):
        """Lines without a separator are errors."""
        with pytest.raises(ConfigValidationError, match="Line 1"):
            parse_properties("git.tag.prefix")

    def test_conflicting_keys(self):
        """A value cannot also be a table."""
        with pytest.raises(ConfigValidationError, match="conflicts"):
            parse_properties("git.tag=v\ngit.tag.prefix=v\n")

    def test_properties_validate(self, tmp_path: Path):
        """String values from properties files validate into typed fields."""
        path = tmp_path / "release.properties"
        path.write_text(
            "git.message.ignoreCase=true\nversion.initialPreRelease=0\nversion.useSnapshots=false\n"
        )

        config = build_config(load_properties_config(path))

        assert config.git.message.ignore_case is True
        assert config.version.initial_pre_release == 0


class TestLoadConfigFile:
    """Tests for load_config_file()."""

    def test_bare_toml(self, tmp_path: Path):
        """A TOML file without a tool table is the configuration itself."""
        path = tmp_path / "release.toml"
        path.write_text('[git.tag]\nprefix = "r"\n')

        assert load_config_file(path) == {"git": {"tag": {"prefix": "r"}}}

    def test_pyproject_style_toml(self, tmp_path: Path):
        """A TOML file with a tool table uses that table."""
        path = tmp_path / "other.toml"
        path.write_text('[tool.semver-release.git.tag]\nprefix = "r"\n')

        assert load_config_file(path) == {"git": {"tag": {"prefix": "r"}}}

    def test_unsupported_suffix(self, tmp_path: Path):
        """Unknown file types are rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("git: {}\n")

        with pytest.raises(ConfigValidationError, match="Unsupported"):
            load_config_file(path)


class TestMergeConfig:
    """Tests for merge_config()."""

    def test_deep_merge(self):
        """Nested tables are merged key by key."""
        base = {"git": {"tag": {"prefix": "v", "separator": ""}, "message": {"major": "M"}}}
        override = {"git": {"tag": {"prefix": "r"}}}

        assert merge_config(base, override) == {
            "git": {"tag": {"prefix": "r", "separator": ""}, "message": {"major": "M"}}
        }

    def test_inputs_untouched(self):
        """Merging does not modify its inputs."""
        base = {"git": {"tag": {"prefix": "v"}}}
        merge_config(base, {"git": {"tag": {"prefix": "r"}}})

        assert base == {"git": {"tag": {"prefix": "v"}}}


class TestBuildConfig:
    """Tests for build_config()."""

    def test_no_sources(self):
        """Without sources the defaults apply."""
        assert build_config() == SemverReleaseConfig()

    def test_later_sources_win(self):
        """Later sources override earlier ones."""
        config = build_config(
            {"version": {"preReleaseId": "alpha", "defaultIncrement": "patch"}},
            {"version": {"preReleaseId": "beta"}},
        )

        assert config.version.pre_release_id == "beta"
        assert config.version.default_increment == Increment.PATCH

    def test_invalid_config(self):
        """Validation errors are reported as ConfigValidationError."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration"):
            build_config({"version": {"defaultIncrement": "pre_release"}})


class TestLoadConfig:
    """Tests for load_config()."""

    def test_pyproject(self, tmp_path: Path):
        """Configuration is read from pyproject.toml."""
        (tmp_path / "pyproject.toml").write_text(
            '[tool.semver-release.version]\ndefaultIncrement = "patch"\n'
        )

        config = load_config(tmp_path)

        assert config.version.default_increment == Increment.PATCH

    def test_precedence(self, tmp_path: Path):
        """json overrides pyproject.toml; an explicit file overrides both."""
        (tmp_path / "pyproject.toml").write_text(
            "[tool.semver-release.git.tag]\n"
            'prefix = "py"\n'
            'separator = "-"\n'
            'message = "from pyproject"\n'
        )
        (tmp_path / "semantic-versioning.json").write_text(
            json.dumps({"git": {"tag": {"prefix": "json", "message": "from json"}}})
        )
        explicit = tmp_path / "release.properties"
        explicit.write_text("git.tag.message=from properties\n")

        config = load_config(tmp_path)
        assert config.git.tag.prefix == "json"
        assert config.git.tag.separator == "-"
        assert config.git.tag.message == "from json"

        config = load_config(tmp_path, explicit)
        assert config.git.tag.prefix == "json"
        assert config.git.tag.message == "from properties"

    def test_missing_explicit_file(self, tmp_path: Path):
        """A missing explicit file is an error."""
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'demo'\n")

        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path, tmp_path / "missing.json")

    def test_invalid_values(self, tmp_path: Path):
        """Invalid values raise ConfigValidationError."""
        (tmp_path / "semantic-versioning.json").write_text(
            json.dumps({"version": {"initialVersion": "one"}})
        )
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'demo'\n")

        with pytest.raises(ConfigValidationError):
            load_config(tmp_path)
