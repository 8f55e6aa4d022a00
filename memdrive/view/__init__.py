"""
View Layer

Sorted, read-only projections of store state.
"""

from memdrive.view.projection import list_children, list_children_sorted, project_children, sort_nodes

__all__ = ["list_children", "list_children_sorted", "project_children", "sort_nodes"]
