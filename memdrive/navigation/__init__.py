"""
Navigation

Breadcrumb path and selection state for a viewer.
"""

from memdrive.navigation.state import NavigationState

__all__ = ["NavigationState"]
