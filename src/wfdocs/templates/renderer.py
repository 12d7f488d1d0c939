"""Template renderer for README generation.

Renders workflow records to markdown using Jinja2 templates. Output is
deterministic (no timestamps), so regenerating an unchanged repository
leaves the README byte-identical.
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    select_autoescape,
)

from wfdocs.categories import Classifier
from wfdocs.config import WfdocsConfig
from wfdocs.document import FOLDER_TREE_REGION, WORKFLOWS_REGION, Region, splice
from wfdocs.models import WorkflowRecord
from wfdocs.renderers.filters import description_cell, escape_cell, name_cell, param_list, wrap_text
from wfdocs.renderers.tree import render_folder_tree

logger = logging.getLogger(__name__)

WORKFLOWS_NOTICE = (
    "This section is automatically updated whenever workflows are added, modified, or removed.",
    "The documentation reflects the current state of all reusable workflows in this repository.",
)
FOLDER_TREE_NOTICE = (
    "This folder structure is automatically scanned and updated to reflect the current repository layout.",
    "It shows all workflows and actions with their types (reusable/internal).",
)


class DocumentRenderer:
    """Renders the generated README regions.

    Usage:
        renderer = DocumentRenderer(config)
        workflows_md, tree_md = renderer.render(records, repo_root)
        new_readme = renderer.render_document(readme_text, records, repo_root)
    """

    def __init__(self, config: WfdocsConfig | None = None) -> None:
        """Initialize the document renderer.

        Args:
            config: wfdocs configuration (defaults if None)
        """
        self.config = config or WfdocsConfig()
        self.classifier: Classifier = self.config.build_classifier()

        loaders: list[Any] = []
        if self.config.templates.dir:
            loaders.append(FileSystemLoader(self.config.templates.dir))
        loaders.append(PackageLoader("wfdocs", "templates"))

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._env.filters["wrap"] = wrap_text
        self._env.filters["escape_cell"] = escape_cell
        self._env.filters["param_list"] = param_list
        self._env.filters["description_cell"] = description_cell
        self._env.filters["name_cell"] = name_cell

    def _render_template(self, template_name: str, **context: Any) -> str:
        try:
            template = self._env.get_template(template_name)
        except Exception as e:
            logger.error("Failed to load template %s: %s", template_name, e)
            raise ValueError(f"Template not found: {template_name}") from e

        try:
            return template.render(**context)
        except Exception as e:
            logger.error("Template rendering failed: %s", e)
            raise ValueError(f"Template rendering failed: {e}") from e

    def render_workflows(self, records: list[WorkflowRecord]) -> str:
        """Render the categorized capability table.

        Only reusable workflows are listed. Categories appear in first-seen
        order and records keep the order they were given in.

        Args:
            records: Workflow records, typically sorted by file name

        Returns:
            Markdown tables, or a plain "No reusable workflows found." line
        """
        reusable = [r for r in records if r.is_reusable]
        groups = list(self.classifier.group(reusable).items())

        return self._render_template(
            "workflows.md.j2",
            groups=groups,
            name_width=self.config.table.name_width,
            description_width=self.config.table.description_width,
        ).rstrip("\n")

    def render_folder_tree(
        self,
        repo_root: Path,
        records: list[WorkflowRecord] | None = None,
    ) -> str:
        """Render the ``.github`` folder tree as a fenced code block.

        Parsed records supply display names, so each file gets the same
        category as in the capability table.
        """
        return render_folder_tree(
            repo_root,
            classifier=self.classifier,
            workflows_dir=self.config.paths.workflows,
            actions_dir=self.config.paths.actions,
            names={r.file_name: r.name for r in records or []},
        )

    def render(self, records: list[WorkflowRecord], repo_root: Path) -> tuple[str, str]:
        """Render both generated fragments.

        Returns:
            (capability table markdown, folder tree markdown)
        """
        return self.render_workflows(records), self.render_folder_tree(repo_root, records)

    def render_block(self, region: Region, body: str, notice: tuple[str, ...]) -> str:
        """Wrap a rendered fragment in its region markers.

        Args:
            region: Region the block belongs to
            body: Rendered fragment
            notice: Lines of the auto-generation callout

        Returns:
            Block text from the begin marker through the end marker
        """
        return self._render_template(
            "section.md.j2",
            region=region,
            body=body,
            notice=notice,
        ).rstrip("\n")

    def render_document(
        self,
        document: str,
        records: list[WorkflowRecord],
        repo_root: Path,
    ) -> str:
        """Render both regions and splice them into a document.

        Args:
            document: Current README text
            records: Workflow records
            repo_root: Repository root (for the folder tree)

        Returns:
            New README text

        Raises:
            MarkerNotFoundError: If a region's markers are missing
        """
        workflows_md, tree_md = self.render(records, repo_root)
        new_document = splice(
            document,
            self.render_block(WORKFLOWS_REGION, workflows_md, WORKFLOWS_NOTICE),
            self.render_block(FOLDER_TREE_REGION, tree_md, FOLDER_TREE_NOTICE),
        )
        logger.debug("Rendered README (%d characters)", len(new_document))
        return new_document

    def preview(self, document: str, max_lines: int = 50) -> str:
        """Return the first lines of a document with a truncation indicator."""
        lines = document.split("\n")

        if len(lines) <= max_lines:
            return document

        preview_lines = lines[:max_lines]
        preview_lines.append(f"\n... [{len(lines) - max_lines} more lines] ...")

        return "\n".join(preview_lines)
