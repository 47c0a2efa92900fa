"""Report generation module - file output surfaces for cost estimates."""

from .markdown import generate_markdown, render_markdown
from .artifact import generate_artifacts

__all__ = [
    "generate_markdown",
    "render_markdown",
    "generate_artifacts",
]
