"""Markdown fragment rendering.

- filters: Table-cell helpers (text wrapping, parameter lists), also registered as Jinja2 filters
- tree: Folder-tree listing of workflows and composite actions
"""

from wfdocs.renderers.filters import param_list, wrap_text
from wfdocs.renderers.tree import render_folder_tree

__all__ = ["param_list", "render_folder_tree", "wrap_text"]
