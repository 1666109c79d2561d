"""
Listing pipeline turning a task store and a compiled query into ordered rows.

Main exports:
- list_tasks: Project, filter and sort tasks into ListingRow objects
- ListingRow: Per-task fields handed to the renderer
"""

from tasklog.pipeline.listing import ListingRow, list_tasks, sort_key

__all__ = [
    "ListingRow",
    "list_tasks",
    "sort_key",
]
