"""
Touch gesture arbitration between the pager and its descendants.

The host delivers every pointer event to `on_intercept()` until it returns
True (the pager claims the gesture); from then on it delivers them to
`on_touch()`. A descendant that scrolls vertically keeps a gesture once it is
classified as vertical; the pager never steals it back.
"""

import logging
from typing import Callable

from custom_types import MotionEvent, VelocityTrackerFactory, VelocityTrackerProtocol
from enums import MotionAction, TouchState
from page_geometry import PageGeometry
from platform_metrics import PlatformMetrics
from velocity_tracker import VelocityTracker

logger = logging.getLogger(__name__)

# A MOVE counts as horizontal only if |dx| * VERTICAL_BIAS > |dy|
VERTICAL_BIAS = 2
# Argument to compute_current_velocity for pixels per second
VELOCITY_UNITS_PER_SECOND = 1000


class GestureClassifier:
    """State machine deciding who owns a pointer gesture.

    Attributes:
        touch_state: REST, HORIZONTAL (pager owns the drag) or VERTICAL
            (yielded to a descendant)
        last_motion_x: X of the last event the drag was measured from
        last_motion_y: Y of the DOWN event of the gesture
        intercept_tracks_motion: Move the horizontal reference point to the
            claiming MOVE instead of keeping the DOWN origin
    """

    touch_state: TouchState
    last_motion_x: float
    last_motion_y: float
    _velocity_tracker: VelocityTrackerProtocol | None

    def __init__(
        self,
        geometry: PageGeometry,
        metrics: PlatformMetrics,
        is_animating: Callable[[], bool],
        abort_animation: Callable[[], None],
        release_handler: Callable[[float], None],
        velocity_tracker_factory: VelocityTrackerFactory = VelocityTracker,
        intercept_tracks_motion: bool = False
    ) -> None:
        """Initialize the classifier.

        Args:
            geometry: Page geometry the drag scrolls
            metrics: Platform touch slop and fling cap
            is_animating: Returns True while a scroll animation is in flight
            abort_animation: Stops the in-flight animation where it is
            release_handler: Called with the horizontal velocity (px/s) when a
                horizontal drag is released
            velocity_tracker_factory: Creates the per-gesture velocity tracker
            intercept_tracks_motion: See class attributes
        """
        self.geometry = geometry
        self.touch_slop = metrics.touch_slop
        self.max_fling_velocity = metrics.max_fling_velocity
        self._is_animating = is_animating
        self._abort_animation = abort_animation
        self._release_handler = release_handler
        self._velocity_tracker_factory = velocity_tracker_factory
        self.intercept_tracks_motion = intercept_tracks_motion

        self.touch_state = TouchState.REST
        self.last_motion_x = 0.0
        self.last_motion_y = 0.0
        self._velocity_tracker = None

    @property
    def is_tracking(self) -> bool:
        """True while a gesture holds a velocity tracker."""
        return self._velocity_tracker is not None

    def on_intercept(self, event: MotionEvent) -> bool:
        """Pre-dispatch phase: decide whether the pager claims the gesture.

        Returns:
            True if the pager takes over the gesture from its descendants
        """
        if self.geometry.page_count == 0:
            self._end_orphaned_gesture(event)
            return False

        self._track(event)
        intercept = False

        match event.action:
            case MotionAction.DOWN:
                self.last_motion_x = event.x
                self.last_motion_y = event.y
                # A touch during an animation continues the horizontal gesture
                if self._is_animating():
                    self._set_state(TouchState.HORIZONTAL)
                else:
                    self._set_state(TouchState.REST)

            case MotionAction.MOVE:
                if self.touch_state == TouchState.REST:
                    intercept = self._classify_move(event)
                else:
                    intercept = self.touch_state == TouchState.HORIZONTAL
                if intercept and self._is_animating():
                    self._abort_animation()

            case MotionAction.UP | MotionAction.CANCEL:
                self._set_state(TouchState.REST)
                self._release_velocity_tracker()

        return intercept

    def _classify_move(self, event: MotionEvent) -> bool:
        x_diff = abs(event.x - self.last_motion_x)
        y_diff = abs(event.y - self.last_motion_y)

        if x_diff > self.touch_slop and x_diff * VERTICAL_BIAS > y_diff:
            self._set_state(TouchState.HORIZONTAL)
            if self.intercept_tracks_motion:
                self.last_motion_x = event.x
            return True

        if y_diff > self.touch_slop:
            self._set_state(TouchState.VERTICAL)
        return False

    def on_touch(self, event: MotionEvent) -> bool:
        """Post-claim phase: follow the finger and snap on release.

        Returns:
            True if the event was consumed
        """
        if self.geometry.page_count == 0:
            logger.debug("Ignoring %s on empty pager", event.action)
            self._end_orphaned_gesture(event)
            return False

        self._track(event)

        match event.action:
            case MotionAction.DOWN:
                # If being flung and the user touches, stop the fling
                was_animating = self._is_animating()
                if was_animating:
                    self._abort_animation()

                self.last_motion_x = event.x
                self.last_motion_y = event.y
                if was_animating:
                    self._set_state(TouchState.HORIZONTAL)
                else:
                    self._set_state(TouchState.REST)

            case MotionAction.MOVE:
                x_moved = abs(event.x - self.last_motion_x) > self.touch_slop
                if x_moved and self.touch_state != TouchState.VERTICAL:
                    self._set_state(TouchState.HORIZONTAL)

                if self.touch_state == TouchState.HORIZONTAL:
                    delta = int(self.last_motion_x - event.x)
                    self.last_motion_x = event.x
                    self.geometry.scroll_by_clamped(delta)

            case MotionAction.UP:
                if self.touch_state == TouchState.HORIZONTAL:
                    vx, _ = self._velocity_tracker.compute_current_velocity(
                        VELOCITY_UNITS_PER_SECOND, self.max_fling_velocity
                    )
                    self._release_velocity_tracker()
                    self._set_state(TouchState.REST)
                    self._release_handler(vx)
                else:
                    self._release_velocity_tracker()
                    self._set_state(TouchState.REST)

            case MotionAction.CANCEL:
                self._set_state(TouchState.REST)
                self._release_velocity_tracker()

        return True

    def _end_orphaned_gesture(self, event: MotionEvent) -> None:
        """Close a gesture whose pages were all removed before it ended."""
        if event.action in (MotionAction.UP, MotionAction.CANCEL):
            self._set_state(TouchState.REST)
            self._release_velocity_tracker()

    def _track(self, event: MotionEvent) -> None:
        """Feed an event to the gesture's velocity tracker, acquiring it first."""
        if self._velocity_tracker is None:
            self._velocity_tracker = self._velocity_tracker_factory()
        self._velocity_tracker.add_movement(event)

    def _release_velocity_tracker(self) -> None:
        if self._velocity_tracker is not None:
            self._velocity_tracker.reset()
            self._velocity_tracker = None

    def _set_state(self, state: TouchState) -> None:
        if state != self.touch_state:
            logger.debug("Touch state %s -> %s", self.touch_state, state)
            self.touch_state = state
