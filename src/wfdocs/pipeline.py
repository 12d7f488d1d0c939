"""Generation pipeline: scan workflows, render regions, rewrite the README.

The README is only written once, after every step has succeeded. A missing
marker or a rendering failure leaves the file untouched.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wfdocs.config import WfdocsConfig
from wfdocs.document import read_document, write_document
from wfdocs.models import ScanError, ScanResult
from wfdocs.scanner import WorkflowScanner
from wfdocs.templates import DocumentRenderer

logger = logging.getLogger(__name__)


@dataclass
class GenerationOptions:
    """Options for controlling a generation run.

    Attributes:
        readme: README path override (relative to the repository root or absolute)
        dry_run: Render without writing
    """

    readme: Path | None = None
    dry_run: bool = False


@dataclass
class GenerationResult:
    """Outcome of a generation run.

    Attributes:
        readme_path: Document that was (or would have been) rewritten
        workflow_count: Workflow files parsed successfully
        reusable_count: Workflows listed in the capability table
        errors: Workflow files that were skipped
        changed: Whether the new document differs from the old one
        written: Whether the document was written
        content: The new document text
    """

    readme_path: Path
    workflow_count: int = 0
    reusable_count: int = 0
    errors: list[ScanError] = field(default_factory=list)
    changed: bool = False
    written: bool = False
    content: str = ""

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "readme_path": str(self.readme_path),
            "workflow_count": self.workflow_count,
            "reusable_count": self.reusable_count,
            "errors": [e.to_dict() for e in self.errors],
            "changed": self.changed,
            "written": self.written,
        }


class GenerationPipeline:
    """Sequences the scan and generate steps.

    Usage:
        pipeline = GenerationPipeline(config)
        result = pipeline.run(Path("."))
    """

    def __init__(self, config: WfdocsConfig | None = None) -> None:
        """Initialize the pipeline.

        Args:
            config: wfdocs configuration (uses defaults if None)
        """
        self.config = config or WfdocsConfig()
        self._scanner = WorkflowScanner(self.config.paths.workflows)
        self._renderer = DocumentRenderer(self.config)

    def scan(self, repo_root: Path) -> ScanResult:
        """Scan the repository's workflow files."""
        logger.info("Scanning for workflow files in %s", repo_root / self.config.paths.workflows)
        result = self._scanner.scan(repo_root)
        logger.info("Found %d workflow(s)", len(result.workflows))
        return result

    def readme_path(self, repo_root: Path, override: Path | None = None) -> Path:
        """Resolve the README location."""
        readme = override or Path(self.config.paths.readme)
        return readme if readme.is_absolute() else repo_root / readme

    def run(
        self,
        repo_root: Path,
        options: GenerationOptions | None = None,
    ) -> GenerationResult:
        """Execute scan + generate.

        Args:
            repo_root: Repository root directory
            options: Run options

        Returns:
            GenerationResult

        Raises:
            DocumentError: If the README is missing or lacks a marker region
        """
        options = options or GenerationOptions()
        readme = self.readme_path(repo_root, options.readme)

        scan_result = self.scan(repo_root)

        logger.info("Generating documentation...")
        original = read_document(readme)
        content = self._renderer.render_document(original, scan_result.workflows, repo_root)

        result = GenerationResult(
            readme_path=readme,
            workflow_count=len(scan_result.workflows),
            reusable_count=len(scan_result.reusable()),
            errors=list(scan_result.errors),
            changed=content != original,
            content=content,
        )

        if options.dry_run:
            logger.info("Dry run - %s not written", readme)
        elif not result.changed:
            logger.info("%s is already up to date", readme)
        else:
            write_document(readme, content)
            result.written = True

        return result

    def preview(self, result: GenerationResult, max_lines: int = 100) -> str:
        """Return a truncated preview of a generated document."""
        return self._renderer.preview(result.content, max_lines=max_lines)
