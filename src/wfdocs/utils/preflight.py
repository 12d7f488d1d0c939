"""Preflight validation.

Everything the generate step needs is checked before any file is touched:
the workflows directory, the README and both of its marker regions, and a
configured template directory. Missing required items fail the check; a
missing actions directory is only a warning.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wfdocs.config import WfdocsConfig
from wfdocs.document import (
    FOLDER_TREE_REGION,
    WORKFLOWS_REGION,
    DocumentError,
    MarkerNotFoundError,
    has_region,
    locate_regions,
    read_document,
)
from wfdocs.scanner import find_workflow_files


@dataclass
class CheckItem:
    """Result of a single preflight check.

    Attributes:
        name: Check name
        passed: Whether the check passed
        required: Whether a failure blocks generation
        path: File or directory the check looked at
        message: Status message (human-readable context)
    """

    name: str
    passed: bool
    required: bool = True
    path: str | None = None
    message: str = ""


@dataclass
class PreflightResult:
    """Result of preflight validation.

    Attributes:
        success: Whether all required checks passed
        checks: Individual check results
        errors: Messages for failed required checks
        warnings: Messages for failed optional checks
    """

    success: bool = True
    checks: list[CheckItem] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_check(self, check: CheckItem) -> None:
        """Add a check result."""
        self.checks.append(check)

        if not check.passed:
            if check.required:
                self.success = False
                self.errors.append(f"{check.name}: {check.message}")
            else:
                self.warnings.append(f"{check.name}: {check.message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "success": self.success,
            "checks": [
                {
                    "name": c.name,
                    "passed": c.passed,
                    "required": c.required,
                    "path": c.path,
                    "message": c.message,
                }
                for c in self.checks
            ],
            "errors": self.errors,
            "warnings": self.warnings,
        }


class PreflightChecker:
    """Validates a repository before generation.

    Usage:
        checker = PreflightChecker(config)
        result = checker.check_all(Path("."))
        if not result.success:
            sys.exit(1)
    """

    def __init__(self, config: WfdocsConfig | None = None) -> None:
        self.config = config or WfdocsConfig()

    def check_workflows_dir(self, repo_root: Path) -> CheckItem:
        directory = repo_root / self.config.paths.workflows
        if not directory.is_dir():
            return CheckItem(
                name="workflows",
                passed=False,
                path=str(directory),
                message="Workflows directory not found",
            )
        count = len(find_workflow_files(directory))
        return CheckItem(
            name="workflows",
            passed=True,
            path=str(directory),
            message=f"{count} workflow file(s)",
        )

    def check_actions_dir(self, repo_root: Path) -> CheckItem:
        directory = repo_root / self.config.paths.actions
        found = directory.is_dir()
        return CheckItem(
            name="actions",
            passed=found,
            required=False,
            path=str(directory),
            message="Actions directory found" if found else "Actions directory not found",
        )

    def check_readme(self, readme: Path) -> list[CheckItem]:
        """Check the README and both marker regions."""
        try:
            content = read_document(readme)
        except DocumentError as e:
            return [CheckItem(name="readme", passed=False, path=str(readme), message=str(e))]

        checks = [CheckItem(name="readme", passed=True, path=str(readme), message="README found")]
        for region in (WORKFLOWS_REGION, FOLDER_TREE_REGION):
            present = has_region(content, region)
            checks.append(
                CheckItem(
                    name=f"markers:{region.name.lower()}",
                    passed=present,
                    path=str(readme),
                    message=(
                        "Marker pair found"
                        if present
                        else f"Missing marker pair {region.begin} ... {region.end}"
                    ),
                )
            )

        if all(check.passed for check in checks[1:]):
            try:
                locate_regions(content, (WORKFLOWS_REGION, FOLDER_TREE_REGION))
            except MarkerNotFoundError as e:
                checks.append(
                    CheckItem(name="markers:layout", passed=False, path=str(readme), message=str(e))
                )
        return checks

    def check_templates_dir(self) -> CheckItem | None:
        if not self.config.templates.dir:
            return None
        directory = Path(self.config.templates.dir)
        found = directory.is_dir()
        return CheckItem(
            name="templates",
            passed=found,
            path=str(directory),
            message="Template directory found" if found else "Template directory not found",
        )

    def check_all(self, repo_root: Path, readme: Path | None = None) -> PreflightResult:
        """Run all checks.

        Args:
            repo_root: Repository root directory
            readme: README override (defaults to the configured path)

        Returns:
            PreflightResult
        """
        result = PreflightResult()

        result.add_check(self.check_workflows_dir(repo_root))
        result.add_check(self.check_actions_dir(repo_root))

        readme = readme or Path(self.config.paths.readme)
        if not readme.is_absolute():
            readme = repo_root / readme
        for check in self.check_readme(readme):
            result.add_check(check)

        templates_check = self.check_templates_dir()
        if templates_check is not None:
            result.add_check(templates_check)

        return result
