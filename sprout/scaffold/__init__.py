"""Project scaffolding: workspace model and file formatting."""

from .formatter import FormatError, FormatStyle, format_file
from .workspace import DependencyOptions, Workspace, WorkspaceError

__all__ = [
    "Workspace",
    "WorkspaceError",
    "DependencyOptions",
    "format_file",
    "FormatStyle",
    "FormatError",
]
