"""UI components package for the horizontal pager."""

from ui.pager_widget import PagerWidget, QtPageAdapter

__all__ = [
    "PagerWidget",
    "QtPageAdapter",
]
