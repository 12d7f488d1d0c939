"""wfdocs utility modules.

- logging: Standardized logging with human/verbose/JSON modes
- preflight: Repository checks run before generation
"""

from wfdocs.utils.logging import get_logger, setup_logging
from wfdocs.utils.preflight import PreflightChecker, PreflightResult

__all__ = [
    "get_logger",
    "setup_logging",
    "PreflightChecker",
    "PreflightResult",
]
