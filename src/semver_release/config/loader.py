"""Configuration loading.

Configuration is layered. Every source is parsed into a plain nested dict
and the dicts are deep-merged on top of the model defaults, lowest to
highest precedence:

1. ``[tool.semver-release]`` in the nearest ``pyproject.toml``
2. ``semantic-versioning.json`` in the project directory
3. An explicit configuration file (``.json``, ``.toml`` or ``.properties``)
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from semver_release.config.models import SemverReleaseConfig
from semver_release.exceptions import ConfigNotFoundError, ConfigValidationError
from semver_release.logging import get_logger

log = get_logger(__name__)

TOOL_NAME = "semver-release"
JSON_CONFIG_NAME = "semantic-versioning.json"


def find_pyproject_toml(start_path: Path | None = None) -> Path:
    """Find pyproject.toml by searching up the directory tree.

    Args:
        start_path: Directory to start searching from (defaults to cwd)

    Returns:
        Path to pyproject.toml

    Raises:
        ConfigNotFoundError: If pyproject.toml cannot be found
    """
    current = (start_path or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"Could not find pyproject.toml in {current} or any parent directory")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Load and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file doesn't exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_tool_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.semver-release]`` table, or an empty dict."""
    return dict(pyproject.get("tool", {}).get(TOOL_NAME, {}))


def load_json_config(path: Path) -> dict[str, Any]:
    """Load a JSON configuration file.

    Raises:
        ConfigNotFoundError: If the file doesn't exist
        ConfigValidationError: If the file is not a valid JSON object
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"Expected a JSON object in {path}")
    return data


def parse_properties(text: str) -> dict[str, Any]:
    """Parse ``key=value`` properties with dotted keys into a nested dict.

    ``git.tag.prefix=v`` becomes ``{"git": {"tag": {"prefix": "v"}}}``.
    Lines starting with ``#`` or ``!`` are comments; ``:`` may be used
    instead of ``=``.
    """
    result: dict[str, Any] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line[0] in "#!":
            continue

        positions = [i for i in (line.find("="), line.find(":")) if i != -1]
        if not positions:
            raise ConfigValidationError(f"Line {lineno}: expected 'key=value', got {raw!r}")
        sep = min(positions)
        key, value = line[:sep].strip(), line[sep + 1 :].strip()
        if not key:
            raise ConfigValidationError(f"Line {lineno}: empty property key")

        *parents, leaf = key.split(".")
        node = result
        for part in parents:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise ConfigValidationError(f"Line {lineno}: '{key}' conflicts with '{part}'")
            node = child
        node[leaf] = value
    return result


def load_properties_config(path: Path) -> dict[str, Any]:
    """Load a Java-style properties configuration file.

    Raises:
        ConfigNotFoundError: If the file doesn't exist
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")
    return parse_properties(path.read_text())


def load_config_file(path: Path) -> dict[str, Any]:
    """Load an explicit configuration file, dispatching on its suffix.

    A ``.toml`` file may be a pyproject.toml (with a ``[tool.semver-release]``
    table) or a bare configuration table.
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_json_config(path)
    if suffix == ".properties":
        return load_properties_config(path)
    if suffix == ".toml":
        data = load_pyproject_toml(path)
        return extract_tool_config(data) if "tool" in data else data
    raise ConfigValidationError(
        f"Unsupported configuration file type '{path.suffix}'. Use .json, .toml or .properties"
    )


def merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two configuration dicts; values in ``override`` win."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_config(current, value)
        else:
            merged[key] = value
    return merged


def build_config(*sources: dict[str, Any]) -> SemverReleaseConfig:
    """Merge configuration sources over the defaults and validate them.

    Raises:
        ConfigValidationError: If the merged configuration is invalid
    """
    merged: dict[str, Any] = {}
    for source in sources:
        merged = merge_config(merged, source)

    try:
        return SemverReleaseConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e


def load_config(
    path: Path | None = None,
    config_file: Path | None = None,
) -> SemverReleaseConfig:
    """Load configuration for the project at ``path``.

    Missing sources are skipped; with no sources at all the defaults are
    returned.

    Args:
        path: Project directory (defaults to cwd)
        config_file: Explicit configuration file with the highest precedence

    Raises:
        ConfigNotFoundError: If ``config_file`` is given but doesn't exist
        ConfigValidationError: If any source is malformed or invalid
    """
    project_path = (path or Path.cwd()).resolve()
    sources: list[dict[str, Any]] = []

    try:
        pyproject_path = find_pyproject_toml(project_path)
    except ConfigNotFoundError:
        log.debug("no pyproject.toml found", path=str(project_path))
    else:
        tool_config = extract_tool_config(load_pyproject_toml(pyproject_path))
        if tool_config:
            log.debug("using pyproject.toml configuration", file=str(pyproject_path))
            sources.append(tool_config)

    json_path = project_path / JSON_CONFIG_NAME
    if json_path.is_file():
        log.debug("using json configuration", file=str(json_path))
        sources.append(load_json_config(json_path))

    if config_file is not None:
        log.debug("using explicit configuration", file=str(config_file))
        sources.append(load_config_file(config_file))

    return build_config(*sources)
