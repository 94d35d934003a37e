"""Dual-mode rendering: display fragments, edit forms, and the canvas."""

from .editing import EditSession
from .environment import RenderContext, TemplateRenderer, default_renderer
from .renderer import (
    RenderMode,
    SectionView,
    render_canvas,
    render_display,
    render_editor,
)

__all__ = [
    "EditSession",
    "RenderContext",
    "RenderMode",
    "SectionView",
    "TemplateRenderer",
    "default_renderer",
    "render_canvas",
    "render_display",
    "render_editor",
]
