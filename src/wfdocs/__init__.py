"""wfdocs - README generator for reusable GitHub Actions workflows.

wfdocs scans a repository's workflow definition files, extracts their
callable interface (inputs, outputs, secrets) and keeps two generated
regions of the README current: a categorized capability table and a
folder-tree listing of workflows and composite actions.

Core principles:
- Reproducibility: Same repository produces a byte-identical README
- Region isolation: Text outside the generated markers is never touched
- Resilience: One malformed workflow file never aborts the run
- CI/CD Compatibility: No interactive prompts, meaningful exit codes
"""

__version__ = "0.1.0"
__author__ = "wfdocs Contributors"
