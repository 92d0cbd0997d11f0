"""codeanalyzer - LLM-assisted source code review reports.

codeanalyzer takes a single source file, asks a chat-completion model for a
structured review and renders the answer as a Markdown or HTML report.

Core principles:
- Always a full report: any model failure degrades to placeholder content
- Explicit configuration: the model client is injected, never read from globals
- Single attempt: one remote call per analysis, no retries
"""

__version__ = "0.1.0"
__author__ = "codeanalyzer Contributors"
