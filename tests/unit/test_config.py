"""Unit tests for configuration loading and directive validation."""

import json
import logging
from pathlib import Path
from textwrap import dedent

import pytest

from labelcards.config import (
    ActionConfig,
    ColumnIdTarget,
    ColumnNameTarget,
    ConfigError,
    Directive,
    LabelAction,
    load_directives_file,
    validate_directives,
)


@pytest.mark.unit
class TestValidateDirectivesPayload:
    """Tests for the overall payload shape."""

    def test_invalid_json_is_fatal(self) -> None:
        with pytest.raises(ConfigError, match="not valid JSON"):
            validate_directives("[{")

    def test_non_array_is_fatal(self) -> None:
        with pytest.raises(ConfigError, match="must be an array"):
            validate_directives('{"column_id": 1, "labels": ["a"]}')

    def test_empty_array_is_fatal(self) -> None:
        with pytest.raises(ConfigError, match="No valid"):
            validate_directives("[]")

    def test_all_invalid_entries_is_fatal(self) -> None:
        with pytest.raises(ConfigError, match="No valid"):
            validate_directives([1, "x", {"column_id": 3}])

    def test_accepts_decoded_list(self) -> None:
        directives = validate_directives([{"column_id": 42, "labels": ["Help Wanted"]}])

        assert directives == [
            Directive(target=ColumnIdTarget(42), labels=("help wanted",), action=LabelAction.ADD)
        ]

    def test_accepts_json_text(self) -> None:
        raw = json.dumps([{"column_name": "To Do", "project_name": "Board", "labels": ["bug"]}])

        directives = validate_directives(raw)

        assert directives[0].target == ColumnNameTarget(project_name="Board", column_name="To Do")
        assert directives[0].labels == ("bug",)

    def test_preserves_input_order(self) -> None:
        directives = validate_directives(
            [
                {"column_id": 3, "labels": ["c"]},
                {"column_id": "nope", "labels": ["skip"]},
                {"column_id": 1, "labels": ["a"]},
                {"column_id": 2, "labels": ["b"]},
            ]
        )

        assert [d.target.column_id for d in directives] == [3, 1, 2]


@pytest.mark.unit
class TestValidateDirectiveEntries:
    """Tests for per-entry validation."""

    def test_skips_non_object_entries(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="labelcards"):
            directives = validate_directives([["column_id", 1], {"column_id": 1, "labels": ["a"]}])

        assert len(directives) == 1
        assert "Directive 0: expected an object" in caplog.text

    def test_skips_entry_without_labels(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="labelcards"):
            directives = validate_directives([{"column_id": 1}, {"column_id": 2, "labels": ["a"]}])

        assert [d.target.column_id for d in directives] == [2]
        assert "missing key 'labels'" in caplog.text

    def test_skips_entry_with_non_array_labels(self) -> None:
        directives = validate_directives(
            [{"column_id": 1, "labels": "bug"}, {"column_id": 2, "labels": ["a"]}]
        )

        assert [d.target.column_id for d in directives] == [2]

    def test_skips_entry_without_column(self) -> None:
        directives = validate_directives(
            [
                {"labels": ["a"]},
                {"column_name": "To Do", "labels": ["a"]},
                {"project_name": "Board", "column_name": "", "labels": ["a"]},
                {"column_id": 9, "labels": ["a"]},
            ]
        )

        assert [d.target for d in directives] == [ColumnIdTarget(9)]

    def test_skips_entry_when_no_labels_survive(self) -> None:
        directives = validate_directives(
            [{"column_id": 1, "labels": ["", 5, None]}, {"column_id": 2, "labels": ["ok"]}]
        )

        assert [d.target.column_id for d in directives] == [2]

    @pytest.mark.parametrize(
        "column_id", [0, -4, True, 1.5, "abc", "", None, "²", "٤٢", "+7", "4_2", "-3"]
    )
    def test_rejects_invalid_column_id(self, column_id: object) -> None:
        directives = validate_directives(
            [{"column_id": column_id, "labels": ["a"]}, {"column_id": 7, "labels": ["b"]}]
        )

        assert [d.target.column_id for d in directives] == [7]

    def test_numeric_string_column_id_is_coerced(self) -> None:
        directives = validate_directives([{"column_id": "42", "labels": ["a"]}])

        assert directives[0].target == ColumnIdTarget(42)

    def test_column_id_takes_precedence_over_names(self) -> None:
        directives = validate_directives(
            [{"column_id": 5, "column_name": "To Do", "project_name": "Board", "labels": ["a"]}]
        )

        assert directives[0].target == ColumnIdTarget(5)

    def test_invalid_column_id_falls_back_to_names(self) -> None:
        directives = validate_directives(
            [{"column_id": -1, "column_name": "To Do", "project_name": "Board", "labels": ["a"]}]
        )

        assert directives[0].target == ColumnNameTarget(project_name="Board", column_name="To Do")

    def test_remove_action(self) -> None:
        directives = validate_directives([{"column_id": 1, "labels": ["a"], "action": "Remove"}])

        assert directives[0].action is LabelAction.REMOVE

    def test_unknown_action_skips_entry(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="labelcards"):
            directives = validate_directives(
                [{"column_id": 1, "labels": ["a"], "action": "toggle"}, {"column_id": 2, "labels": ["b"]}]
            )

        assert [d.target.column_id for d in directives] == [2]
        assert "action 'toggle'" in caplog.text


@pytest.mark.unit
class TestLabelFiltering:
    """Tests for label normalization."""

    def test_labels_are_lower_cased(self) -> None:
        directives = validate_directives([{"column_id": 1, "labels": ["Bug", "HELP Wanted"]}])

        assert directives[0].labels == ("bug", "help wanted")

    def test_invalid_labels_dropped_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="labelcards"):
            directives = validate_directives(
                [{"column_id": 1, "labels": ["Bug", "", 3, None, {"name": "x"}, "Docs"]}]
            )

        assert directives[0].labels == ("bug", "docs")
        assert caplog.text.count("dropping label") == 4

    def test_duplicates_are_kept(self) -> None:
        directives = validate_directives([{"column_id": 1, "labels": ["Bug", "bug"]}])

        assert directives[0].labels == ("bug", "bug")

    def test_only_non_empty_lower_case_strings(self) -> None:
        raw = [{"column_id": 1, "labels": ["A", "", "b", 0, False, "MiXeD", [], "c"]}]

        labels = validate_directives(raw)[0].labels

        assert all(isinstance(label, str) and label and label == label.lower() for label in labels)


@pytest.mark.unit
class TestDirectiveDescribe:
    """Tests for Directive.describe."""

    def test_describe_column_id(self) -> None:
        directive = Directive(target=ColumnIdTarget(42), labels=("bug",))

        assert directive.describe() == "add ['bug'] on column 42"

    def test_describe_column_name(self) -> None:
        directive = Directive(
            target=ColumnNameTarget(project_name="Board", column_name="Done"),
            labels=("bug",),
            action=LabelAction.REMOVE,
        )

        assert directive.describe() == "remove ['bug'] on column 'Done' of project 'Board'"


@pytest.mark.unit
class TestLoadDirectivesFile:
    """Tests for load_directives_file."""

    def test_loads_yaml_list(self, tmp_path: Path) -> None:
        config_path = tmp_path / "labels.yaml"
        config_path.write_text(
            dedent("""
                columns_labels:
                  - column_id: 42
                    labels: [Help Wanted]
                  - project_name: Board
                    column_name: Done
                    labels: [stale]
                    action: remove
            """).strip()
        )

        raw = load_directives_file(config_path)
        directives = validate_directives(raw)

        assert len(directives) == 2
        assert directives[1].action is LabelAction.REMOVE

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_directives_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "labels.yaml"
        config_path.write_text("columns_labels: [unclosed")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_directives_file(config_path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        config_path = tmp_path / "labels.yaml"
        config_path.write_text("- column_id: 1\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_directives_file(config_path)

    def test_missing_columns_labels(self, tmp_path: Path) -> None:
        config_path = tmp_path / "labels.yaml"
        config_path.write_text("other: 1\n")

        with pytest.raises(ConfigError, match="columns_labels"):
            load_directives_file(config_path)


@pytest.mark.unit
class TestActionConfig:
    """Tests for ActionConfig."""

    def test_owner_and_repo(self) -> None:
        config = ActionConfig(token="t", repository="octo/widgets", columns_labels="[]")

        assert config.owner == "octo"
        assert config.repo == "widgets"

    def test_requires_token(self) -> None:
        with pytest.raises(ConfigError, match="token"):
            ActionConfig(token="", repository="octo/widgets", columns_labels="[]")

    @pytest.mark.parametrize("repository", ["", "octo", "octo/", "/widgets", "a/b/c"])
    def test_rejects_malformed_repository(self, repository: str) -> None:
        with pytest.raises(ConfigError, match="owner/repo"):
            ActionConfig(token="t", repository=repository, columns_labels="[]")

    def test_from_env(self) -> None:
        config = ActionConfig.from_env(
            {
                "INPUT_TOKEN": "input-token",
                "GITHUB_TOKEN": "env-token",
                "INPUT_COLUMNS_LABELS": '[{"column_id": 1, "labels": ["a"]}]',
                "GITHUB_REPOSITORY": "octo/widgets",
                "GITHUB_API_URL": "https://ghe.example.com/api/v3",
            }
        )

        assert config.token == "input-token"
        assert config.repository == "octo/widgets"
        assert config.api_url == "https://ghe.example.com/api/v3"

    def test_from_env_token_fallback_and_default_url(self) -> None:
        config = ActionConfig.from_env(
            {
                "GITHUB_TOKEN": "env-token",
                "INPUT_COLUMNS_LABELS": "[]",
                "GITHUB_REPOSITORY": "octo/widgets",
            }
        )

        assert config.token == "env-token"
        assert config.api_url == "https://api.github.com"

    def test_from_env_requires_columns_labels(self) -> None:
        with pytest.raises(ConfigError, match="columns_labels"):
            ActionConfig.from_env({"INPUT_TOKEN": "t", "GITHUB_REPOSITORY": "octo/widgets"})
