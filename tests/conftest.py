"""Shared pytest fixtures for wfdocs tests.

Fixtures are organized by category:
- Repository fixtures: Temporary repositories with workflow files
- Document fixtures: README text with generated-region markers
- Record fixtures: Pre-built workflow records for renderer tests
"""

import logging
import shutil
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from tests.fixtures import WORKFLOW_REPO_PATH
from wfdocs.models import NO_DESCRIPTION, WorkflowParameter, WorkflowRecord
from wfdocs.utils.logging import ROOT_LOGGER

# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers the CLI attached so later tests never log to a closed stream."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def workflow_repo(tmp_path: Path) -> Path:
    """Copy the sample workflow repository into a temporary directory."""
    target = tmp_path / "workflow_repo"
    shutil.copytree(WORKFLOW_REPO_PATH, target)
    return target


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    """Create a repository with an empty workflows directory."""
    (tmp_path / ".github" / "workflows").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def write_workflow(empty_repo: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes a workflow file into ``empty_repo``."""

    def _write(file_name: str, content: str) -> Path:
        path = empty_repo / ".github" / "workflows" / file_name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# =============================================================================
# Document Fixtures
# =============================================================================


@pytest.fixture
def marked_readme() -> str:
    """Return README text containing both marker pairs."""
    return (
        "# Project\n"
        "\n"
        "Intro paragraph.\n"
        "\n"
        "<!-- BEGIN AUTO-GENERATED: WORKFLOWS -->\n"
        "old table\n"
        "<!-- END AUTO-GENERATED: WORKFLOWS -->\n"
        "\n"
        "## Between\n"
        "\n"
        "<!-- BEGIN AUTO-GENERATED: FOLDER-STRUCTURE -->\n"
        "old tree\n"
        "<!-- END AUTO-GENERATED: FOLDER-STRUCTURE -->\n"
        "\n"
        "## Footer\n"
    )


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def make_record() -> Callable[..., WorkflowRecord]:
    """Return a factory for workflow records with sensible defaults."""

    def _make(
        name: str = "Sample",
        file_name: str = "sample.yml",
        description: str = NO_DESCRIPTION,
        is_reusable: bool = True,
        **params: Any,
    ) -> WorkflowRecord:
        def _mapping(keys: list[str] | None) -> dict[str, WorkflowParameter] | None:
            if keys is None:
                return None
            return {key: WorkflowParameter() for key in keys}

        return WorkflowRecord(
            name=name,
            description=description,
            file_path=f".github/workflows/{file_name}",
            file_name=file_name,
            inputs=_mapping(params.get("inputs")),
            outputs=_mapping(params.get("outputs")),
            secrets=_mapping(params.get("secrets")),
            is_reusable=is_reusable,
        )

    return _make
