"""Terminal to-do list with statuses, tags, a statistics panel and TSV storage."""

__version__ = "0.1.0"