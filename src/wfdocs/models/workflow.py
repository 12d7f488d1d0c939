"""Workflow entities extracted from GitHub Actions definition files.

This module contains:
- WorkflowParameter: One declared input, output or secret of a callable workflow
- WorkflowRecord: The documented interface of a single workflow file
- ScanError: Non-fatal error encountered while scanning a workflow file
"""

from dataclasses import dataclass, field
from typing import Any

NO_DESCRIPTION = "No description provided."


@dataclass(frozen=True)
class WorkflowParameter:
    """A single entry of a workflow's inputs, outputs or secrets mapping.

    Attributes:
        description: Human description of the parameter
        required: Whether callers must supply it
        type: Type tag (string, number, boolean, choice); kept verbatim
        default: Default value if declared
        options: Allowed values for choice/enumerable types
        value: Expression an output maps to (outputs only)
    """

    description: str = ""
    required: bool = False
    type: str | None = None
    default: Any = None
    options: tuple[Any, ...] | None = None
    value: str | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "WorkflowParameter":
        """Build a parameter from its YAML mapping.

        A bare key (``inputs: {token: }``) yields an empty parameter.

        Raises:
            ValueError: If the declaration is neither a mapping nor empty
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"parameter declaration must be a mapping, got {type(data).__name__}")

        options = data.get("options")
        return cls(
            description=str(data.get("description") or ""),
            required=bool(data.get("required", False)),
            type=data.get("type"),
            default=data.get("default"),
            options=tuple(options) if isinstance(options, list) else None,
            value=data.get("value"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "description": self.description,
            "required": self.required,
            "type": self.type,
            "default": self.default,
            "options": list(self.options) if self.options is not None else None,
            "value": self.value,
        }


@dataclass(frozen=True)
class WorkflowRecord:
    """Documented interface of one workflow definition file.

    Records are immutable once built by the scanner; renderers only read them.

    Attributes:
        name: Display name (declared name minus the "Reusable" qualifier, or file stem)
        description: First non-empty comment of the file's leading comment block
        file_path: Repository-relative POSIX path of the file
        file_name: Base name of the file
        inputs: Declared workflow_call inputs, in declaration order
        outputs: Declared workflow_call outputs, in declaration order
        secrets: Declared workflow_call secrets, in declaration order
        is_reusable: Whether the workflow exposes a workflow_call trigger
    """

    name: str
    description: str
    file_path: str
    file_name: str
    inputs: dict[str, WorkflowParameter] | None = None
    outputs: dict[str, WorkflowParameter] | None = None
    secrets: dict[str, WorkflowParameter] | None = None
    is_reusable: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""

        def _params(params: dict[str, WorkflowParameter] | None) -> dict[str, Any] | None:
            if params is None:
                return None
            return {key: param.to_dict() for key, param in params.items()}

        return {
            "name": self.name,
            "description": self.description,
            "file_path": self.file_path,
            "file_name": self.file_name,
            "inputs": _params(self.inputs),
            "outputs": _params(self.outputs),
            "secrets": _params(self.secrets),
            "is_reusable": self.is_reusable,
        }


@dataclass
class ScanError:
    """Non-fatal error encountered while scanning a workflow file.

    Attributes:
        file_path: File that could not be read or parsed
        message: Error description
    """

    file_path: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"file_path": self.file_path, "message": self.message}


@dataclass
class ScanResult:
    """Outcome of scanning a workflows directory.

    Attributes:
        workflows: Successfully parsed records, sorted by file name
        errors: Files that were skipped, with the reason
    """

    workflows: list[WorkflowRecord] = field(default_factory=list)
    errors: list[ScanError] = field(default_factory=list)

    def reusable(self) -> list[WorkflowRecord]:
        """Return only the records that expose a workflow_call trigger."""
        return [w for w in self.workflows if w.is_reusable]

    def has_errors(self) -> bool:
        """Check if any file was skipped."""
        return len(self.errors) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "workflows": [w.to_dict() for w in self.workflows],
            "errors": [e.to_dict() for e in self.errors],
        }
