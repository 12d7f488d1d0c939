"""Workflow definition scanning.

Reads every ``*.yml``/``*.yaml`` file directly inside the workflows directory,
parses it with PyYAML and extracts the documented interface:
- name (declared ``name`` minus a leading "Reusable" qualifier, else the file stem)
- description (leading comment block, GitHub has no description key)
- workflow_call inputs, outputs and secrets
- whether the workflow is reusable at all

A file that cannot be read or parsed is logged and skipped; the scan never
aborts because of a single bad file.
"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from wfdocs.models import NO_DESCRIPTION, ScanError, ScanResult, WorkflowParameter, WorkflowRecord

logger = logging.getLogger(__name__)

DEFAULT_WORKFLOWS_DIR = ".github/workflows"
WORKFLOW_PATTERNS = ("*.yml", "*.yaml")
CALLABLE_TRIGGER = "workflow_call"

_REUSABLE_PREFIX_RE = re.compile(r"^\s*reusable[ .]\s*", re.IGNORECASE)


def find_workflow_files(workflows_dir: Path) -> list[Path]:
    """List workflow definition files, sorted by file name.

    Args:
        workflows_dir: Directory holding the workflow files

    Returns:
        Matching files (empty if the directory does not exist)
    """
    if not workflows_dir.is_dir():
        return []

    files: set[Path] = set()
    for pattern in WORKFLOW_PATTERNS:
        files.update(p for p in workflows_dir.glob(pattern) if p.is_file())

    return sorted(files, key=lambda p: p.name)


def extract_description(raw: str) -> str:
    """Extract a description from the leading comment block of a file.

    Workflow files have no description key, so the first non-empty comment
    before any YAML content is used instead. Blank lines and empty comments
    are skipped; the first content line ends the search.

    Args:
        raw: Raw file text

    Returns:
        Description text, or the "No description provided." sentinel
    """
    for line in raw.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if not stripped.startswith("#"):
            break
        comment = stripped[1:].strip()
        if comment:
            return comment
    return NO_DESCRIPTION


def display_name(declared: Any, file_path: Path) -> str:
    """Derive the display name of a workflow.

    Args:
        declared: Value of the top-level ``name`` key (may be missing)
        file_path: Path of the workflow file

    Returns:
        Declared name without the "Reusable" qualifier, or the file stem
    """
    if declared is not None:
        name = _REUSABLE_PREFIX_RE.sub("", str(declared), count=1).strip()
        if name:
            return name
    return file_path.stem


def get_triggers(document: dict[str, Any]) -> Any:
    """Return the ``on:`` section of a parsed workflow.

    PyYAML follows YAML 1.1, where a bare ``on`` key loads as boolean True.
    """
    if "on" in document:
        return document["on"]
    return document.get(True)


def is_callable(triggers: Any) -> bool:
    """Check whether a trigger section declares a workflow_call trigger.

    Handles all three GitHub trigger forms: a mapping of events, a list of
    event names, or a single event name.
    """
    if isinstance(triggers, dict):
        return CALLABLE_TRIGGER in triggers
    if isinstance(triggers, list):
        return CALLABLE_TRIGGER in triggers
    if isinstance(triggers, str):
        return triggers == CALLABLE_TRIGGER
    return False


def _parameters(call: dict[str, Any], section: str) -> dict[str, WorkflowParameter] | None:
    """Extract one workflow_call sub-map, preserving declaration order."""
    declared = call.get(section)
    if declared is None:
        return None
    if not isinstance(declared, dict):
        raise ValueError(f"'on.{CALLABLE_TRIGGER}.{section}' must be a mapping")
    if not declared:
        return None
    return {str(key): WorkflowParameter.from_mapping(value) for key, value in declared.items()}


def parse_workflow(raw: str, file_path: Path, relative_path: str) -> WorkflowRecord:
    """Parse a workflow file's text into a record.

    Args:
        raw: Raw file text
        file_path: Path of the file (used for the fallback name)
        relative_path: Repository-relative path stored on the record

    Returns:
        WorkflowRecord

    Raises:
        yaml.YAMLError: If the text is not valid YAML
        ValueError: If the document does not have the shape of a workflow
    """
    document = yaml.safe_load(raw)
    if not isinstance(document, dict):
        kind = "empty document" if document is None else type(document).__name__
        raise ValueError(f"expected a mapping at the top level, got {kind}")

    triggers = get_triggers(document)
    reusable = is_callable(triggers)

    inputs = outputs = secrets = None
    if reusable and isinstance(triggers, dict):
        call = triggers.get(CALLABLE_TRIGGER) or {}
        if not isinstance(call, dict):
            raise ValueError(f"'on.{CALLABLE_TRIGGER}' must be a mapping")
        inputs = _parameters(call, "inputs")
        outputs = _parameters(call, "outputs")
        secrets = _parameters(call, "secrets")

    return WorkflowRecord(
        name=display_name(document.get("name"), file_path),
        description=extract_description(raw),
        file_path=relative_path,
        file_name=file_path.name,
        inputs=inputs,
        outputs=outputs,
        secrets=secrets,
        is_reusable=reusable,
    )


class WorkflowScanner:
    """Collects workflow records from a repository.

    Usage:
        scanner = WorkflowScanner()
        result = scanner.scan(Path("."))
        for workflow in result.workflows:
            print(workflow.name)
    """

    def __init__(self, workflows_dir: str = DEFAULT_WORKFLOWS_DIR) -> None:
        """Initialize the scanner.

        Args:
            workflows_dir: Workflows directory, relative to the repository root
        """
        self.workflows_dir = workflows_dir

    def scan(self, repo_root: Path) -> ScanResult:
        """Scan the workflows directory of a repository.

        Args:
            repo_root: Repository root directory

        Returns:
            ScanResult with records sorted by file name and skipped files
        """
        result = ScanResult()
        directory = repo_root / self.workflows_dir

        files = find_workflow_files(directory)
        if not files:
            logger.info("No workflow files found in %s", directory)

        for file_path in files:
            relative = _relative_path(file_path, repo_root)
            try:
                raw = file_path.read_text(encoding="utf-8")
                record = parse_workflow(raw, file_path, relative)
            except Exception as e:
                logger.warning(
                    "Failed to parse workflow file %s: %s",
                    relative,
                    e,
                    extra={"file_path": relative},
                )
                result.errors.append(ScanError(file_path=relative, message=str(e)))
                continue

            logger.debug(
                "Parsed %s: %s (%s)",
                relative,
                record.name,
                "reusable" if record.is_reusable else "internal",
            )
            result.workflows.append(record)

        return result


def _relative_path(file_path: Path, repo_root: Path) -> str:
    try:
        return file_path.relative_to(repo_root).as_posix()
    except ValueError:
        return file_path.as_posix()


def collect(repo_root: Path, workflows_dir: str = DEFAULT_WORKFLOWS_DIR) -> ScanResult:
    """Scan a repository's workflows directory.

    Args:
        repo_root: Repository root directory
        workflows_dir: Workflows directory, relative to the repository root

    Returns:
        ScanResult
    """
    return WorkflowScanner(workflows_dir).scan(repo_root)


def scan_workflows(repo_root: Path, workflows_dir: str = DEFAULT_WORKFLOWS_DIR) -> list[WorkflowRecord]:
    """Return only the parsed records of a repository's workflows."""
    return collect(repo_root, workflows_dir).workflows
