"""Test fixtures for wfdocs.

This package provides sample repositories for integration and end-to-end
testing.

Sample Repositories:
- sample_repos/workflow_repo: Reusable workflows, an internal CI workflow,
  one malformed file, two composite actions and a README with markers
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Path to sample repositories
SAMPLE_REPOS_DIR = FIXTURES_DIR / "sample_repos"

# Specific sample repository paths
WORKFLOW_REPO_PATH = SAMPLE_REPOS_DIR / "workflow_repo"
