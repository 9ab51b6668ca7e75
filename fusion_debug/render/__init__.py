"""Text renderers: ASCII reports and GraphViz DOT graphs."""

from fusion_debug.render.ascii import render_all_ascii, render_ascii, render_plans_ascii, render_summary
from fusion_debug.render.dot import render_dot, save_dot

__all__ = ["render_ascii", "render_all_ascii", "render_plans_ascii", "render_summary", "render_dot", "save_dot"]
