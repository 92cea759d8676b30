"""CLI entry point for labelcards.

Options fall back to the environment variables GitHub Actions sets for a
step, so the action runs the command without arguments.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from labelcards.config import ActionConfig, ConfigError, load_directives_file
from labelcards.kanban import DEFAULT_API_URL, ProjectsClient
from labelcards.logging import sanitize_for_log, setup_logging
from labelcards.orchestrator import Orchestrator, RunSummary


async def _run(config: ActionConfig) -> RunSummary:
    async with ProjectsClient(
        owner=config.owner,
        repo=config.repo,
        token=config.token,
        base_url=config.api_url,
    ) as client:
        return await Orchestrator(client).run(config.columns_labels)


@click.command()
@click.version_option()
@click.option(
    "--token",
    envvar=["INPUT_TOKEN", "GITHUB_TOKEN"],
    default="",
    show_envvar=True,
    help="GitHub token with access to the repository projects and issues",
)
@click.option(
    "--columns-labels",
    "columns_labels",
    envvar="INPUT_COLUMNS_LABELS",
    default=None,
    show_envvar=True,
    help="JSON array of column/labels directives",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with a columns_labels list (instead of --columns-labels)",
)
@click.option(
    "--repository",
    envvar="GITHUB_REPOSITORY",
    default="",
    show_envvar=True,
    help="Repository in owner/repo format",
)
@click.option(
    "--api-url",
    envvar="GITHUB_API_URL",
    default=DEFAULT_API_URL,
    show_envvar=True,
    help="GitHub REST API URL",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Also write a rotating log file to this directory",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
def main(
    token: str,
    columns_labels: str | None,
    config_path: Path | None,
    repository: str,
    api_url: str,
    log_dir: Path | None,
    verbose: bool,
) -> None:
    """Add or remove labels on the issues in GitHub project columns."""
    setup_logging(log_dir=log_dir, level="DEBUG" if verbose else None)

    try:
        if config_path is not None:
            raw = load_directives_file(config_path)
        elif columns_labels:
            raw = columns_labels
        else:
            raise ConfigError("Provide --columns-labels (INPUT_COLUMNS_LABELS) or --config")

        config = ActionConfig(
            token=token,
            repository=repository,
            columns_labels=raw,
            api_url=api_url,
        )
        summary = asyncio.run(_run(config))

    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(sanitize_for_log(str(e)) or type(e).__name__, err=True)
        sys.exit(1)

    click.echo(
        f"Labeled {summary.labeled} issue(s) across {len(summary.results)} directive(s), "
        f"{summary.skipped} skipped"
    )


if __name__ == "__main__":
    main()
