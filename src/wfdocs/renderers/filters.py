"""Jinja2 filters for markdown table cells.

Table cells in GitHub markdown cannot contain raw newlines, so long text is
broken with ``<br>`` markers and parameter lists are stacked the same way.
"""

from collections.abc import Mapping
from typing import Any

from wfdocs.models import NO_DESCRIPTION

BREAK = "<br>"
NONE_PLACEHOLDER = "*None*"
NO_DESCRIPTION_CELL = "*No description provided*"


def wrap_text(text: str, width: int, marker: str = BREAK) -> str:
    """Insert line-break markers so no segment exceeds ``width``.

    Each cut is made just after the last whitespace character that fits in
    the current segment; the whitespace stays with that segment. A run with
    no whitespace is hard-cut at ``width``. Removing the markers restores the
    original text exactly.

    Args:
        text: Text to wrap
        width: Maximum segment length
        marker: Break marker inserted between segments

    Returns:
        Wrapped text

    Raises:
        ValueError: If width is not positive

    Examples:
        >>> wrap_text("Run the unit tests", 10)
        'Run the <br>unit tests'
        >>> wrap_text("abcdefghij", 4)
        'abcd<br>efgh<br>ij'
    """
    return marker.join(split_text(text, width))


def split_text(text: str, width: int) -> list[str]:
    """Split text into the segments ``wrap_text`` joins.

    Raises:
        ValueError: If width is not positive
    """
    if width <= 0:
        raise ValueError(f"wrap width must be positive (got {width})")

    segments: list[str] = []
    rest = text
    while len(rest) > width:
        cut = width
        for i in range(width - 1, -1, -1):
            if rest[i].isspace():
                cut = i + 1
                break
        segments.append(rest[:cut])
        rest = rest[cut:]
    segments.append(rest)

    return segments


def escape_cell(text: str) -> str:
    """Escape characters that would break a markdown table row.

    Angle brackets are escaped too, so text can never open an HTML comment
    or close a generated region early.
    """
    return (
        text.replace("|", "\\|")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\r", "")
        .replace("\n", " ")
    )


def _wrapped_cell(text: str, width: int) -> str:
    return BREAK.join(escape_cell(segment) for segment in split_text(text, width))


def param_list(params: Mapping[str, Any] | None) -> str:
    """Render parameter names as a stacked list of code spans.

    Args:
        params: Ordered mapping of parameter name to declaration

    Returns:
        ``\\`a\\`<br>\\`b\\``` in declaration order, or ``*None*`` when empty
    """
    if not params:
        return NONE_PLACEHOLDER
    return BREAK.join(f"`{escape_cell(str(key))}`" for key in params)


def description_cell(description: str, width: int) -> str:
    """Render a workflow description for the table."""
    if not description or description == NO_DESCRIPTION:
        return NO_DESCRIPTION_CELL
    return _wrapped_cell(description, width)


def name_cell(name: str, width: int) -> str:
    """Render a workflow name for the table (wrapped, bold-safe)."""
    return _wrapped_cell(name, width)
