"""Server-rendered task list with progressive enhancement (htmx-aware)."""

__version__ = "0.1.0"
