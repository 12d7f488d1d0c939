"""wfdocs data models.

This module exports the core entities used throughout the application:
- WorkflowParameter: Declared input, output or secret of a callable workflow
- WorkflowRecord: Documented interface of one workflow file
- ScanError: Non-fatal error encountered while scanning
- ScanResult: Parsed records plus skipped files
"""

from wfdocs.models.workflow import (
    NO_DESCRIPTION,
    ScanError,
    ScanResult,
    WorkflowParameter,
    WorkflowRecord,
)

__all__ = [
    "NO_DESCRIPTION",
    "ScanError",
    "ScanResult",
    "WorkflowParameter",
    "WorkflowRecord",
]
