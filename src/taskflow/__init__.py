"""TaskFlow: an in-memory task list with filtering, sorting and JSON export."""

__version__ = "0.1.0"
