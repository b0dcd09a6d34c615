"""Report renderers."""

from depinspector.renderer.report import render_json, render_text, render_yaml, to_dict

__all__ = ["render_json", "render_text", "render_yaml", "to_dict"]
