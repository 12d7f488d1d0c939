"""Workflow categorization.

Each workflow gets exactly one display category:
1. File-name prefix rules, in declaration order (``test-unit.yml`` -> Testing)
2. Keyword rules over the lower-cased display name, in the same priority order
3. The default category ("Miscellaneous")

Rules are plain immutable data owned by a Classifier instance, so custom rule
sets (from the config file) never touch the defaults.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from wfdocs.models import WorkflowRecord


@dataclass(frozen=True)
class Category:
    """Display category of a workflow.

    Attributes:
        label: Heading text (e.g., "Testing")
        icon: Emoji shown before the label
    """

    label: str
    icon: str = "📋"

    @property
    def title(self) -> str:
        """Return the icon and label joined for headings."""
        return f"{self.icon} {self.label}"


@dataclass(frozen=True)
class CategoryRule:
    """Maps file-name prefixes and name keywords to a category.

    Attributes:
        category: Category assigned when the rule matches
        prefixes: File-name prefixes, matched with ``str.startswith``
        keywords: Substrings matched against the lower-cased display name
    """

    category: Category
    prefixes: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    def matches_file(self, file_name: str) -> bool:
        return any(file_name.startswith(prefix) for prefix in self.prefixes)

    def matches_name(self, name: str) -> bool:
        lowered = name.lower()
        return any(keyword in lowered for keyword in self.keywords)


TESTING = Category("Testing", "🧪")
CODE_QUALITY = Category("Code Quality", "🔧")
DEPLOYMENT = Category("Deployment", "🚀")
SECURITY = Category("Security", "🔒")
UTILITIES = Category("Utilities", "🛠️")
DOCUMENTATION = Category("Documentation", "📚")
NOTIFICATIONS = Category("Notifications", "🔔")
MONITORING = Category("Monitoring", "📊")
MISCELLANEOUS = Category("Miscellaneous", "📦")

DEFAULT_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        TESTING,
        prefixes=("test-", "tests-", "unit-", "integration-", "e2e-"),
        keywords=("test", "unit", "integration", "e2e", "spec"),
    ),
    CategoryRule(
        CODE_QUALITY,
        prefixes=("lint-", "format-", "typecheck-", "quality-"),
        keywords=("format", "lint", "type", "quality", "prettier", "eslint"),
    ),
    CategoryRule(
        DEPLOYMENT,
        prefixes=("deploy-", "build-", "publish-", "release-"),
        keywords=("deploy", "build", "publish", "release", "dist"),
    ),
    CategoryRule(
        SECURITY,
        prefixes=("security-", "scan-", "audit-"),
        keywords=("security", "scan", "audit", "vulnerability", "cve"),
    ),
    CategoryRule(
        UTILITIES,
        prefixes=("util-", "utils-", "setup-"),
        keywords=(
            "util",
            "helper",
            "setup",
            "config",
            "tool",
            "assign",
            "label",
            "stale",
            "cleanup",
            "maintenance",
        ),
    ),
    CategoryRule(
        DOCUMENTATION,
        prefixes=("docs-", "doc-"),
        keywords=("doc", "readme", "changelog", "generate", "wiki"),
    ),
    CategoryRule(
        NOTIFICATIONS,
        prefixes=("notify-",),
        keywords=("notify", "slack", "discord", "email", "webhook", "alert"),
    ),
    CategoryRule(
        MONITORING,
        prefixes=("monitor-", "health-"),
        keywords=("monitor", "health", "check", "status", "ping", "uptime"),
    ),
)


class Classifier:
    """Assigns one category to each workflow.

    Usage:
        classifier = Classifier()
        category = classifier.classify(record)
    """

    def __init__(
        self,
        rules: Iterable[CategoryRule] = DEFAULT_RULES,
        default: Category = MISCELLANEOUS,
    ) -> None:
        """Initialize the classifier.

        Args:
            rules: Ordered rules; earlier rules win
            default: Category for workflows no rule matches
        """
        self.rules: tuple[CategoryRule, ...] = tuple(rules)
        self.default = default

    @property
    def categories(self) -> list[Category]:
        """Every category this classifier can return, in priority order."""
        seen: list[Category] = []
        for rule in self.rules:
            if rule.category not in seen:
                seen.append(rule.category)
        if self.default not in seen:
            seen.append(self.default)
        return seen

    def classify_name(self, file_name: str, name: str) -> Category:
        """Classify by file name first, then by display name keywords.

        Args:
            file_name: Base name of the workflow file
            name: Display name of the workflow

        Returns:
            The first matching category, or the default
        """
        for rule in self.rules:
            if rule.matches_file(file_name):
                return rule.category

        for rule in self.rules:
            if rule.matches_name(name):
                return rule.category

        return self.default

    def classify(self, record: WorkflowRecord) -> Category:
        """Classify a parsed workflow record."""
        return self.classify_name(record.file_name, record.name)

    def group(self, records: Sequence[WorkflowRecord]) -> dict[Category, list[WorkflowRecord]]:
        """Group records by category.

        Categories appear in first-seen order; records keep their input order.
        """
        groups: dict[Category, list[WorkflowRecord]] = {}
        for record in records:
            groups.setdefault(self.classify(record), []).append(record)
        return groups


def classify(record: WorkflowRecord) -> Category:
    """Classify a record with the default rules."""
    return Classifier().classify(record)
