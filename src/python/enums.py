"""
Enumerations for the horizontal pager using Python 3.11+ StrEnum.

This module defines string-based enumerations for the pointer actions,
gesture states and measurement modes shared by the pager core and its hosts.
"""

from enum import StrEnum


class MotionAction(StrEnum):
    """Pointer actions delivered to the pager.

    Attributes:
        DOWN: First finger touched the surface
        MOVE: Finger moved while touching
        UP: Finger lifted, gesture finished normally
        CANCEL: Gesture aborted by the host
    """
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


class TouchState(StrEnum):
    """Gesture ownership state of the pager.

    Attributes:
        REST: No drag recognised yet
        HORIZONTAL: The pager owns the gesture and follows the finger
        VERTICAL: The gesture was yielded to a vertically scrolling descendant
    """
    REST = "rest"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class MeasureMode(StrEnum):
    """Size constraint modes passed down by the host measure pass.

    Attributes:
        EXACTLY: The view must be exactly the given size
        AT_MOST: The view may be as large as the given size
        UNSPECIFIED: The host imposes no constraint
    """
    EXACTLY = "exactly"
    AT_MOST = "at-most"
    UNSPECIFIED = "unspecified"
