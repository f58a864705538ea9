"""Package a repository's structure and file contents into one Markdown report."""

TOOL_NAME = "repopac"
__version__ = "0.1.0"
