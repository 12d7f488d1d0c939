"""Marker-based README splicing.

The README owns two generated regions, each bracketed by a literal marker
pair. Splicing replaces each region (markers included) with a fresh block
and leaves every other byte of the document untouched. The document is
never parsed as markdown.

A missing or misplaced marker is fatal: ``MarkerNotFoundError`` is raised and
nothing is written.
"""

import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Raised when the target document cannot be updated."""


class MarkerNotFoundError(DocumentError):
    """Raised when a generated region's markers are missing or misplaced."""


@dataclass(frozen=True)
class Region:
    """A generated region of the document.

    Attributes:
        name: Region identifier used in the marker comments
        heading: Markdown heading written at the top of the region
    """

    name: str
    heading: str

    @property
    def begin(self) -> str:
        return f"<!-- BEGIN AUTO-GENERATED: {self.name} -->"

    @property
    def end(self) -> str:
        return f"<!-- END AUTO-GENERATED: {self.name} -->"

    def skeleton(self) -> str:
        """Return an empty marker pair, used to seed a README."""
        return f"{self.begin}\n{self.end}"


WORKFLOWS_REGION = Region("WORKFLOWS", "## 📦 Available Workflows")
FOLDER_TREE_REGION = Region("FOLDER-STRUCTURE", "## 🏗️ Folder Structure")


def locate(document: str, region: Region) -> tuple[int, int]:
    """Find a region in the document.

    Args:
        document: Full document text
        region: Region to find

    Returns:
        (start, stop) offsets covering the begin marker through the end marker

    Raises:
        MarkerNotFoundError: If either marker is missing or the end marker
            does not follow the begin marker
    """
    start = document.find(region.begin)
    if start == -1:
        raise MarkerNotFoundError(f"Begin marker not found: {region.begin}")

    end = document.find(region.end, start + len(region.begin))
    if end == -1:
        if region.end in document:
            raise MarkerNotFoundError(f"End marker appears before begin marker: {region.end}")
        raise MarkerNotFoundError(f"End marker not found: {region.end}")

    return start, end + len(region.end)


def has_region(document: str, region: Region) -> bool:
    """Check whether a document contains a well-formed region."""
    try:
        locate(document, region)
    except MarkerNotFoundError:
        return False
    return True


def locate_regions(document: str, regions: Iterable[Region]) -> list[tuple[int, int, Region]]:
    """Find several regions and check that they do not overlap.

    Returns:
        (start, stop, region) spans in document order

    Raises:
        MarkerNotFoundError: If a region is missing or two regions overlap
    """
    spans = sorted(
        (locate(document, region) + (region,) for region in regions),
        key=lambda span: span[0],
    )

    for (_, prev_stop, prev), (start, _, region) in zip(spans, spans[1:], strict=False):
        if start < prev_stop:
            raise MarkerNotFoundError(
                f"Regions {prev.name} and {region.name} overlap"
            )

    return spans


def splice_regions(document: str, blocks: dict[Region, str]) -> str:
    """Replace several regions of a document.

    Args:
        document: Original document text
        blocks: Replacement text for each region (markers included)

    Returns:
        New document text

    Raises:
        MarkerNotFoundError: If a region is missing or two regions overlap
    """
    spans = locate_regions(document, blocks)

    parts: list[str] = []
    cursor = 0
    for start, stop, region in spans:
        parts.append(document[cursor:start])
        parts.append(blocks[region])
        cursor = stop
    parts.append(document[cursor:])

    return "".join(parts)


def splice(document: str, workflows_block: str, tree_block: str) -> str:
    """Replace both generated regions of the README.

    Args:
        document: Original README text
        workflows_block: Full capability-table block, markers included
        tree_block: Full folder-tree block, markers included

    Returns:
        New README text
    """
    return splice_regions(
        document,
        {WORKFLOWS_REGION: workflows_block, FOLDER_TREE_REGION: tree_block},
    )


def read_document(path: Path) -> str:
    """Read the target document with its line endings untouched.

    Raises:
        DocumentError: If the file does not exist or cannot be read
    """
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError as e:
        raise DocumentError(f"Document not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Failed to read {path}: {e}") from e


def _target_mode(path: Path) -> int:
    """Mode for the written file: the existing mode, else 0o666 minus the umask."""
    if path.exists():
        return path.stat().st_mode & 0o777
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_document(path: Path, content: str) -> Path:
    """Write the document atomically.

    The content goes to a temporary file in the same directory which then
    replaces the target, so readers never see a half-written file.
    """
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(temp_name, _target_mode(path))
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise

    logger.info("Wrote %s", path)
    return path
