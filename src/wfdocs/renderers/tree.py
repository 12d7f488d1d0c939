"""Folder-tree rendering for the README.

Lists the ``.github`` layout as a box-drawing tree:

    .github/
    ├── workflows/          # GitHub Actions Workflows
    │   # 🧪 Testing
    │   ├── test-e2e.yml (reusable)
    │   └── test-unit.yml (reusable)
    │
    │   # 🚀 Deployment
    │   └── deploy-prod.yml (internal)
    └── actions/            # Custom Composite Actions
        └── setup-node/
            └── action.yml

Workflow files are re-enumerated from disk rather than taken from parsed
records, so files that failed to parse still show up in the tree.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from wfdocs.categories import Category, Classifier
from wfdocs.scanner import CALLABLE_TRIGGER, DEFAULT_WORKFLOWS_DIR, find_workflow_files

logger = logging.getLogger(__name__)

DEFAULT_ACTIONS_DIR = ".github/actions"
ACTION_FILES = ("action.yml", "action.yaml")

BRANCH = "├── "
LAST = "└── "
PIPE = "│   "
SPACE = "    "

WORKFLOWS_LABEL = "workflows/          # GitHub Actions Workflows"
ACTIONS_LABEL = "actions/            # Custom Composite Actions"


@dataclass(frozen=True)
class TreeEntry:
    """A workflow file as shown in the tree.

    Attributes:
        file_name: Base name of the file
        category: Category computed from the file name
        kind: "reusable", "internal", or None if the file was unreadable
    """

    file_name: str
    category: Category
    kind: str | None


def workflow_kind(file_path: Path) -> str | None:
    """Return "reusable" or "internal" from a raw-text check of the file.

    This is a containment check for the callable trigger, not a parse.
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read workflow file %s: %s", file_path, e)
        return None
    return "reusable" if CALLABLE_TRIGGER in content else "internal"


def find_action_dirs(actions_dir: Path) -> list[Path]:
    """List composite action directories, sorted by name."""
    if not actions_dir.is_dir():
        return []
    return sorted((p for p in actions_dir.iterdir() if p.is_dir()), key=lambda p: p.name)


def action_file_name(action_dir: Path) -> str:
    """Return the definition file name of a composite action."""
    for candidate in ACTION_FILES:
        if (action_dir / candidate).is_file():
            return candidate
    return ACTION_FILES[0]


def _group_entries(entries: list[TreeEntry]) -> list[list[TreeEntry]]:
    """Split sorted entries into runs of the same category."""
    groups: list[list[TreeEntry]] = []
    for entry in entries:
        if groups and groups[-1][-1].category == entry.category:
            groups[-1].append(entry)
        else:
            groups.append([entry])
    return groups


def _workflow_lines(entries: list[TreeEntry], indent: str) -> list[str]:
    lines: list[str] = []
    for index, group in enumerate(_group_entries(entries)):
        if index > 0:
            lines.append(indent.rstrip())
        lines.append(f"{indent}# {group[0].category.title}")
        for position, entry in enumerate(group):
            connector = LAST if position == len(group) - 1 else BRANCH
            suffix = f" ({entry.kind})" if entry.kind else ""
            lines.append(f"{indent}{connector}{entry.file_name}{suffix}")
    return lines


def _action_lines(action_dirs: list[Path], indent: str) -> list[str]:
    lines: list[str] = []
    for position, action_dir in enumerate(action_dirs):
        is_last = position == len(action_dirs) - 1
        connector = LAST if is_last else BRANCH
        child_indent = indent + (SPACE if is_last else PIPE)
        lines.append(f"{indent}{connector}{action_dir.name}/")
        lines.append(f"{child_indent}{LAST}{action_file_name(action_dir)}")
    return lines


def build_tree(
    repo_root: Path,
    classifier: Classifier | None = None,
    workflows_dir: str = DEFAULT_WORKFLOWS_DIR,
    actions_dir: str = DEFAULT_ACTIONS_DIR,
    names: Mapping[str, str] | None = None,
) -> list[str]:
    """Build the tree lines (without the code fence).

    Args:
        repo_root: Repository root directory
        classifier: Classifier used for category headers
        workflows_dir: Workflows directory, relative to the repository root
        actions_dir: Composite actions directory, relative to the repository root
        names: Display names by file name, so a file lands in the same
            category as in the table; files without one use their stem

    Returns:
        Tree lines, starting with ``.github/``
    """
    classifier = classifier or Classifier()
    names = names or {}

    entries = [
        TreeEntry(
            file_name=path.name,
            category=classifier.classify_name(path.name, names.get(path.name, path.stem)),
            kind=workflow_kind(path),
        )
        for path in find_workflow_files(repo_root / workflows_dir)
    ]
    action_dirs = find_action_dirs(repo_root / actions_dir)

    lines = [".github/"]

    if entries:
        workflows_last = not action_dirs
        lines.append(f"{LAST if workflows_last else BRANCH}{WORKFLOWS_LABEL}")
        lines.extend(_workflow_lines(entries, SPACE if workflows_last else PIPE))

    if action_dirs:
        lines.append(f"{LAST}{ACTIONS_LABEL}")
        lines.extend(_action_lines(action_dirs, SPACE))

    return lines


def render_folder_tree(
    repo_root: Path,
    classifier: Classifier | None = None,
    workflows_dir: str = DEFAULT_WORKFLOWS_DIR,
    actions_dir: str = DEFAULT_ACTIONS_DIR,
    names: Mapping[str, str] | None = None,
) -> str:
    """Render the folder tree as a fenced markdown code block."""
    lines = build_tree(repo_root, classifier, workflows_dir, actions_dir, names)
    return "```text\n" + "\n".join(lines) + "\n```"
