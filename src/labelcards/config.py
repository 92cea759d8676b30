"""Configuration loading and directive validation for labelcards."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

import yaml

from labelcards.kanban.client import DEFAULT_API_URL

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


class LabelAction(str, Enum):
    """Direction of a label mutation."""

    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class ColumnIdTarget:
    """A column identified directly by its id."""

    column_id: int


@dataclass(frozen=True)
class ColumnNameTarget:
    """A column identified by project name and column name."""

    project_name: str
    column_name: str


ColumnTarget = Union[ColumnIdTarget, ColumnNameTarget]


@dataclass(frozen=True)
class Directive:
    """One validated "column + labels" instruction."""

    target: ColumnTarget
    labels: tuple[str, ...]
    action: LabelAction = LabelAction.ADD

    def describe(self) -> str:
        """Human-readable summary for log lines."""
        if isinstance(self.target, ColumnIdTarget):
            where = f"column {self.target.column_id}"
        else:
            where = f"column '{self.target.column_name}' of project '{self.target.project_name}'"
        return f"{self.action.value} {list(self.labels)} on {where}"


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def _parse_column_id(value: Any) -> int | None:
    """Return a positive column id, or None if value is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        if not (text.isascii() and text.isdecimal()):
            return None
        parsed = int(text)
        return parsed if parsed > 0 else None
    return None


def _filter_labels(labels: list[Any], index: int) -> tuple[str, ...]:
    valid = []
    for position, label in enumerate(labels):
        if not _is_non_empty_string(label):
            logger.warning(
                "Directive %d: dropping label at position %d, expected a non empty string, got %r",
                index,
                position,
                label,
            )
            continue
        valid.append(label.lower())
    return tuple(valid)


def _parse_target(entry: dict[str, Any], index: int) -> ColumnTarget | None:
    if "column_id" in entry:
        column_id = _parse_column_id(entry["column_id"])
        if column_id is not None:
            return ColumnIdTarget(column_id=column_id)
        logger.warning(
            "Directive %d: column_id %r is not a positive integer", index, entry["column_id"]
        )

    project_name = entry.get("project_name")
    column_name = entry.get("column_name")
    if _is_non_empty_string(project_name) and _is_non_empty_string(column_name):
        return ColumnNameTarget(project_name=project_name, column_name=column_name)

    return None


def _parse_action(entry: dict[str, Any], index: int) -> LabelAction | None:
    raw = entry.get("action", LabelAction.ADD.value)
    if isinstance(raw, str):
        try:
            return LabelAction(raw.lower())
        except ValueError:
            pass
    logger.warning(
        "Directive %d: action %r is not one of %s",
        index,
        raw,
        [action.value for action in LabelAction],
    )
    return None


def _parse_directive(entry: Any, index: int) -> Directive | None:
    if not isinstance(entry, dict):
        logger.warning("Directive %d: expected an object, got %s", index, type(entry).__name__)
        return None

    if "labels" not in entry:
        logger.warning("Directive %d: missing key 'labels'", index)
        return None

    if not isinstance(entry["labels"], list):
        logger.warning("Directive %d: 'labels' must be an array", index)
        return None

    target = _parse_target(entry, index)
    if target is None:
        logger.warning(
            "Directive %d: needs a positive 'column_id' or both 'column_name' and 'project_name'",
            index,
        )
        return None

    action = _parse_action(entry, index)
    if action is None:
        return None

    labels = _filter_labels(entry["labels"], index)
    if not labels:
        logger.warning("Directive %d: no valid labels", index)
        return None

    return Directive(target=target, labels=labels, action=action)


def validate_directives(raw: Any) -> list[Directive]:
    """Validate and normalize the user supplied directive list.

    Invalid entries and labels are logged and skipped; the run only fails
    when nothing usable is left.

    Args:
        raw: JSON text, or an already decoded list of directive objects.

    Returns:
        Valid directives in input order.

    Raises:
        ConfigError: If the payload is not a list or yields no valid directive.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Column label data is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise ConfigError(f"Column label data must be an array, got {type(raw).__name__}")

    directives = []
    for index, entry in enumerate(raw):
        directive = _parse_directive(entry, index)
        if directive is not None:
            directives.append(directive)

    if not directives:
        raise ConfigError("No valid column label directives found")

    return directives


def load_directives_file(config_path: Path | str) -> list[Any]:
    """Load the raw directive list from a YAML (or JSON) file.

    The file must be a mapping with a ``columns_labels`` list.

    Raises:
        ConfigError: If the file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    if "columns_labels" not in data:
        raise ConfigError(f"Missing required field 'columns_labels' in {config_path}")

    columns_labels: list[Any] = data["columns_labels"]
    return columns_labels


@dataclass(frozen=True)
class ActionConfig:
    """Settings for one run, built once at process entry."""

    token: str
    repository: str
    columns_labels: Any
    api_url: str = DEFAULT_API_URL

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigError("A GitHub token is required")
        parts = self.repository.split("/") if self.repository else []
        if len(parts) != 2 or not all(parts):
            raise ConfigError(f"Repository must be in 'owner/repo' format, got {self.repository!r}")

    @property
    def owner(self) -> str:
        return self.repository.split("/")[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/")[1]

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ActionConfig:
        """Build the configuration from GitHub Actions environment variables.

        Reads INPUT_TOKEN (falling back to GITHUB_TOKEN), INPUT_COLUMNS_LABELS,
        GITHUB_REPOSITORY and GITHUB_API_URL.

        Raises:
            ConfigError: If a required value is missing.
        """
        env = os.environ if environ is None else environ

        columns_labels = env.get("INPUT_COLUMNS_LABELS")
        if not columns_labels:
            raise ConfigError("Input 'columns_labels' is required")

        return cls(
            token=env.get("INPUT_TOKEN") or env.get("GITHUB_TOKEN", ""),
            repository=env.get("GITHUB_REPOSITORY", ""),
            columns_labels=columns_labels,
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        )
