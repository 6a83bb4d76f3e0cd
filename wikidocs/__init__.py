"""Wiki Docs: markdown documentation with review workflow and GitHub sync."""

__version__ = "0.1.0"
