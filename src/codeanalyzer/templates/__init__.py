"""codeanalyzer report templates.

Jinja2 templates for Markdown and HTML reports, with the renderer that fills them.
"""

from codeanalyzer.templates.renderer import ReportRenderer, format_datetime

__all__ = ["ReportRenderer", "format_datetime"]
