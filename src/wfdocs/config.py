"""wfdocs configuration system.

Configuration is YAML-based with minimal CLI overrides (--repo, --readme, --ci).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.wfdocs/config.yaml
3. ./wfdocs.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from wfdocs.categories import DEFAULT_RULES, MISCELLANEOUS, Category, CategoryRule, Classifier

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class PathsConfig:
    """Repository-relative locations.

    Attributes:
        workflows: Directory holding workflow definition files
        actions: Directory holding composite action directories
        readme: Document whose generated regions are rewritten
    """

    workflows: str = ".github/workflows"
    actions: str = ".github/actions"
    readme: str = "README.md"


@dataclass
class TableConfig:
    """Capability table layout.

    Attributes:
        name_width: Wrap width for workflow names
        description_width: Wrap width for descriptions
    """

    name_width: int = 25
    description_width: int = 50

    def __post_init__(self) -> None:
        """Validate wrap widths."""
        for label, width in (("name_width", self.name_width), ("description_width", self.description_width)):
            if not isinstance(width, int) or width <= 0:
                raise ValueError(f"table.{label} must be a positive integer (got {width!r})")


@dataclass
class TemplatesConfig:
    """Template overrides.

    Attributes:
        dir: Directory searched before the packaged templates
    """

    dir: str | None = None


@dataclass
class CategoryConfig:
    """A user-defined category rule.

    Attributes:
        label: Category heading
        icon: Emoji shown before the label
        prefixes: File-name prefixes
        keywords: Display-name keywords
    """

    label: str
    icon: str = "📋"
    prefixes: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate category configuration."""
        if not self.label or not str(self.label).strip():
            raise ValueError("Category label must not be empty")
        if not self.prefixes and not self.keywords:
            raise ValueError(f"Category {self.label!r} needs at least one prefix or keyword")

    def to_rule(self) -> CategoryRule:
        """Convert to a classifier rule."""
        return CategoryRule(
            category=Category(self.label, self.icon),
            prefixes=tuple(self.prefixes),
            keywords=tuple(k.lower() for k in self.keywords),
        )


@dataclass
class CIConfig:
    """CI/CD-specific configuration.

    Attributes:
        fail_on_warning: Exit with status 2 if any workflow file was skipped
    """

    fail_on_warning: bool = False


@dataclass
class WfdocsConfig:
    """Top-level wfdocs configuration.

    Attributes:
        paths: Input and output locations
        table: Capability table layout
        templates: Template overrides
        categories: Custom category rules (empty means the built-in rules)
        ci: CI/CD settings
    """

    paths: PathsConfig = field(default_factory=PathsConfig)
    table: TableConfig = field(default_factory=TableConfig)
    templates: TemplatesConfig = field(default_factory=TemplatesConfig)
    categories: list[CategoryConfig] = field(default_factory=list)
    ci: CIConfig = field(default_factory=CIConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path

    def build_classifier(self) -> Classifier:
        """Create the classifier for this configuration."""
        if not self.categories:
            return Classifier(DEFAULT_RULES, MISCELLANEOUS)
        return Classifier([c.to_rule() for c in self.categories], MISCELLANEOUS)


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax, e.g. ``readme: "${DOCS_DIR}/README.md"``.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_VAR_RE.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.wfdocs/config.yaml
    2. ./wfdocs.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".wfdocs" / "config.yaml",
        start_path / "wfdocs.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a mapping")
    return value


def load_config_from_dict(data: dict[str, Any]) -> WfdocsConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        WfdocsConfig instance

    Raises:
        ValueError: If a section has the wrong shape or an invalid value
    """
    data = substitute_env_vars(data)

    config = WfdocsConfig()

    if "paths" in data:
        paths_data = _section(data, "paths")
        config.paths = PathsConfig(
            workflows=paths_data.get("workflows", config.paths.workflows),
            actions=paths_data.get("actions", config.paths.actions),
            readme=paths_data.get("readme", config.paths.readme),
        )

    if "table" in data:
        table_data = _section(data, "table")
        config.table = TableConfig(
            name_width=table_data.get("name_width", config.table.name_width),
            description_width=table_data.get("description_width", config.table.description_width),
        )

    if "templates" in data:
        templates_data = _section(data, "templates")
        config.templates = TemplatesConfig(dir=templates_data.get("dir"))

    if "categories" in data:
        categories = data["categories"] or []
        if not isinstance(categories, list):
            raise ValueError("Config section 'categories' must be a list")
        for entry in categories:
            if not isinstance(entry, dict):
                raise ValueError("Each category must be a mapping")
            config.categories.append(
                CategoryConfig(
                    label=entry.get("label", ""),
                    icon=entry.get("icon", "📋"),
                    prefixes=list(entry.get("prefixes") or []),
                    keywords=list(entry.get("keywords") or []),
                )
            )

    if "ci" in data:
        ci_data = _section(data, "ci")
        config.ci = CIConfig(
            fail_on_warning=bool(ci_data.get("fail_on_warning", False)),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> WfdocsConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        WfdocsConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
        ValueError: If the file content is invalid
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is None:
        return WfdocsConfig()

    with open(found_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {found_path}")

    config = load_config_from_dict(data)
    config._config_path = found_path
    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# wfdocs configuration

# Repository-relative locations
paths:
  workflows: ".github/workflows"
  actions: ".github/actions"
  readme: "README.md"

# Capability table layout
table:
  name_width: 25         # wrap workflow names after this many characters
  description_width: 50  # wrap descriptions after this many characters

# Template overrides (workflows.md.j2, section.md.j2)
templates:
  dir: null

# Custom categories replace the built-in ones; first match wins.
# categories:
#   - label: "Testing"
#     icon: "🧪"
#     prefixes: ["test-"]
#     keywords: ["test", "e2e"]

# CI/CD settings
ci:
  fail_on_warning: false
'''
