"""
HorizontalPager: a paged container that swipes between equally wide pages.

Pages are laid out in a single row and the pager shows one at a time by
scrolling its viewport horizontally. Users switch pages by dragging or
flinging; embedders switch them with `set_current_page()`. A single listener
is told about the new page once a snap animation runs to completion.

The pager is toolkit independent. A host drives it through a small contract:

    on_measure(width, height)  exact viewport size, once per measure pass
    on_layout()                place pages, returns their slots
    on_intercept(event)        every pointer event until it returns True
    on_touch(event)            pointer events of a claimed gesture
    tick()                     once per frame while it returns True

All calls happen on the host's UI thread.
"""

import logging

from custom_types import (
    Clock,
    MeasureSpec,
    MotionEvent,
    PageSlot,
    PageView,
    ScreenSwitchListener,
    VelocityTrackerFactory,
)
from enums import MeasureMode, TouchState
from error_handler import InvalidLayoutModeError
from gesture_classifier import GestureClassifier
from page_geometry import PageGeometry
from platform_metrics import PlatformMetrics
from scroller import DecelerateInterpolator, INTERPOLATION_FACTOR, Scroller
from snap_policy import SnapPolicy
from velocity_tracker import VelocityTracker

logger = logging.getLogger(__name__)

# Serialised state value meaning "nothing to restore"
INVALID_PAGE = -1
UNSET_WIDTH = -1


class HorizontalPager:
    """Horizontally paged container with drag, fling and programmatic snaps.

    Attributes:
        metrics: Platform touch parameters the pager was built with
        geometry: Page count, page width and scroll offset
        scroller: Animation engine driving the offset between pages
        snap_policy: Target page and duration selection on release
        classifier: Pointer gesture state machine
    """

    def __init__(
        self,
        metrics: PlatformMetrics | None = None,
        clock: Clock | None = None,
        velocity_tracker_factory: VelocityTrackerFactory = VelocityTracker,
        intercept_tracks_motion: bool = False,
        listener: ScreenSwitchListener | None = None
    ) -> None:
        """Initialize the pager.

        Args:
            metrics: Touch slop, maximum fling velocity and display density
            clock: Millisecond clock for animations (monotonic by default)
            velocity_tracker_factory: Creates a velocity tracker per gesture
            intercept_tracks_motion: Move the drag reference to the MOVE that
                claims a gesture instead of keeping the DOWN position
            listener: Called with the new page after each completed snap
        """
        self.metrics = metrics or PlatformMetrics()
        self.geometry = PageGeometry()
        self.scroller = Scroller(DecelerateInterpolator(INTERPOLATION_FACTOR), clock)
        self.snap_policy = SnapPolicy(self.metrics)
        self.classifier = GestureClassifier(
            self.geometry,
            self.metrics,
            is_animating=self.is_animating,
            abort_animation=self.abort_animation,
            release_handler=self._on_release,
            velocity_tracker_factory=velocity_tracker_factory,
            intercept_tracks_motion=intercept_tracks_motion,
        )

        self._pages: list[PageView] = []
        self._listener = listener
        self._current_page = 0
        self._pending_page: int | None = None
        self._notify_on_finish = False
        self._restored_page: int | None = None
        self._first_layout = True
        self._last_measured_width = UNSET_WIDTH

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def current_page(self) -> int:
        return self._current_page

    def get_current_page(self) -> int:
        """Index of the page currently shown."""
        return self._current_page

    @property
    def pending_page(self) -> int | None:
        """Target page of the in-flight animation, or None."""
        return self._pending_page

    @property
    def page_count(self) -> int:
        return self.geometry.page_count

    @property
    def page_width(self) -> int:
        return self.geometry.page_width

    @property
    def offset_x(self) -> int:
        return self.geometry.offset_x

    @property
    def touch_state(self) -> TouchState:
        return self.classifier.touch_state

    @property
    def first_layout(self) -> bool:
        return self._first_layout

    @property
    def last_measured_width(self) -> int:
        return self._last_measured_width

    @property
    def pages(self) -> tuple[PageView, ...]:
        return tuple(self._pages)

    def is_animating(self) -> bool:
        """True while a scroll animation is in flight."""
        return not self.scroller.is_finished

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def add_page(self, page: PageView, index: int | None = None) -> None:
        """Attach a page at the end of the row, or at `index`."""
        if index is None:
            self._pages.append(page)
        else:
            self._pages.insert(index, page)
        self.geometry.set_page_count(len(self._pages))
        logger.debug("Page added, %d pages", self.page_count)

    def remove_page(self, page: PageView) -> None:
        """Detach a page; the current page is clamped to the remaining pages."""
        self._pages.remove(page)
        self.geometry.set_page_count(len(self._pages))
        self._current_page = self.geometry.clamp(self._current_page)
        # The viewport may now be past the last page
        self.geometry.scroll_to(min(self.offset_x, self.geometry.max_offset))

        if self.is_animating() and self.page_count > 0:
            # Re-target the animation at a page that still exists
            notify = self._notify_on_finish
            self.snap_to_page(self._pending_page if self._pending_page is not None
                              else self._current_page)
            self._notify_on_finish = notify
        else:
            self.abort_animation()
            if not self.geometry.is_aligned(self._current_page):
                self.geometry.scroll_to(self.geometry.page_offset(self._current_page))
        logger.debug("Page removed, %d pages", self.page_count)

    def clamp(self, page: int) -> int:
        return self.geometry.clamp(page)

    # ------------------------------------------------------------------
    # Listener
    # ------------------------------------------------------------------

    def set_listener(self, listener: ScreenSwitchListener | None) -> None:
        """Register the single page-switch listener (None clears it)."""
        self._listener = listener

    def clear_listener(self) -> None:
        self._listener = None

    # ------------------------------------------------------------------
    # Measure / layout
    # ------------------------------------------------------------------

    def on_measure(self, width: MeasureSpec | int, height: MeasureSpec | int) -> None:
        """Measure pass: take the exact viewport size as the page size.

        Raises:
            InvalidLayoutModeError: If either constraint is not EXACTLY
        """
        width_spec = _as_measure_spec(width)
        height_spec = _as_measure_spec(height)
        if width_spec.mode != MeasureMode.EXACTLY:
            raise InvalidLayoutModeError("width", width_spec.mode)
        if height_spec.mode != MeasureMode.EXACTLY:
            raise InvalidLayoutModeError("height", height_spec.mode)

        new_width = width_spec.size
        self.geometry.set_page_size(new_width, height_spec.size)

        # The pages are given the same width and height as the pager
        for page in self._pages:
            page.measure(width_spec, height_spec)

        if self._restored_page is not None:
            self._current_page = self.geometry.clamp(self._restored_page)
            self._restored_page = None
            if not self._first_layout:
                self.abort_animation()
                self.geometry.scroll_to(self.geometry.page_offset(self._current_page))

        if self._first_layout:
            self._current_page = self.geometry.clamp(self._current_page)
            self.geometry.scroll_to(self.geometry.page_offset(self._current_page))
            self._first_layout = False
        elif new_width != self._last_measured_width:
            # Re-align on the current page, e.g. after a rotation, so the
            # viewport does not end up between two pages
            self._pending_page = self.geometry.clamp(self._current_page)
            self._notify_on_finish = False
            delta = self.geometry.page_offset(self._pending_page) - self.offset_x
            logger.debug("Width changed %d -> %d, re-aligning on page %d",
                         self._last_measured_width, new_width, self._pending_page)
            self.scroller.start_scroll(self.offset_x, delta, 0)

        self._last_measured_width = new_width

    def on_layout(self) -> list[PageSlot]:
        """Lay the pages out in one row; hidden pages still take a slot."""
        slots = self.geometry.slots()
        for page, (left, top, right, bottom) in zip(self._pages, slots):
            page.layout(left, top, right, bottom)
        return slots

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_intercept(self, event: MotionEvent) -> bool:
        """Return True to take the gesture away from the pager's descendants."""
        return self.classifier.on_intercept(event)

    def on_touch(self, event: MotionEvent) -> bool:
        """Handle an event of a gesture the pager owns."""
        return self.classifier.on_touch(event)

    def _on_release(self, vx: float) -> None:
        target = self.snap_policy.choose_target(
            vx, self.offset_x, self._current_page, self.page_width, self.page_count
        )
        self.snap_to_page(target)

    # ------------------------------------------------------------------
    # Animation
    # ------------------------------------------------------------------

    def tick(self) -> bool:
        """Advance the animation by one frame.

        Returns:
            True if the host should schedule another frame
        """
        if self.scroller.is_finished:
            return False

        done, offset = self.scroller.tick()
        self.geometry.scroll_to(offset)
        if not done:
            return True

        self._finish_animation()
        # The listener may have started another animation
        return self.is_animating()

    def _finish_animation(self) -> None:
        notify = self._notify_on_finish
        if self._pending_page is not None:
            self._current_page = self.geometry.clamp(self._pending_page)
        self._pending_page = None
        self._notify_on_finish = False

        # Notify the observer about the page change
        if notify and self._listener is not None:
            logger.debug("Switched to page %d", self._current_page)
            self._listener(self._current_page)

    def abort_animation(self) -> None:
        """Stop the in-flight animation without advancing the current page."""
        if self.scroller.is_finished:
            return
        self.scroller.abort_animation()
        self._pending_page = None
        self._notify_on_finish = False

    def snap_to_page(self, page: int, duration_ms: int | None = None) -> None:
        """Animate to `page`, replacing any in-flight animation.

        Args:
            page: Target page, clamped to the attached pages
            duration_ms: Exact duration, or None to scale the default duration
                by the distance left to scroll
        """
        if self.page_count == 0:
            logger.debug("Dropping snap to page %d on empty pager", page)
            return

        self._pending_page = self.geometry.clamp(page)
        self._notify_on_finish = True
        delta = self.geometry.page_offset(self._pending_page) - self.offset_x

        if duration_ms is None:
            duration_ms = self.snap_policy.settle_duration(
                self._pending_page, self.offset_x, self.page_width
            )
        self.scroller.start_scroll(self.offset_x, delta, duration_ms)

    # ------------------------------------------------------------------
    # Public navigation
    # ------------------------------------------------------------------

    def set_current_page(self, page: int, animate: bool = False) -> None:
        """Show `page`, clamped to the attached pages.

        Args:
            page: Page index
            animate: Snap with the default duration and notify the listener on
                completion; otherwise jump there without notifying
        """
        clamped = self.geometry.clamp(page)
        if clamped != page:
            logger.debug("Clamped page %d to %d", page, clamped)

        if animate:
            self.snap_to_page(clamped, self.snap_policy.programmatic_duration())
            return

        self.abort_animation()
        self._current_page = clamped
        self.geometry.scroll_to(self.geometry.page_offset(clamped))

    # ------------------------------------------------------------------
    # Saved state
    # ------------------------------------------------------------------

    def save_state(self) -> int:
        """Serialise the pager state: the index of the current page."""
        return self._current_page

    def restore_state(self, state: int) -> None:
        """Restore a page saved with `save_state()` on the next measure pass.

        A value of -1 leaves the current page alone.
        """
        if state == INVALID_PAGE:
            return
        if self._first_layout or self.page_count == 0:
            # Pages or size are not known yet; clamp again when measured
            self._restored_page = int(state)
            self._current_page = self.geometry.clamp(state)
            return
        self.set_current_page(state, animate=False)


def _as_measure_spec(value: MeasureSpec | int) -> MeasureSpec:
    if isinstance(value, MeasureSpec):
        return value
    return MeasureSpec.exactly(value)
