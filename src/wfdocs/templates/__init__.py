"""wfdocs template rendering.

Jinja2-based rendering of the README's generated regions. Templates are
designed to produce identical output for identical input.
"""

from wfdocs.templates.renderer import DocumentRenderer

__all__ = ["DocumentRenderer"]
