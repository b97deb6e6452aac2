"""Qt host for the horizontal pager.

This module embeds a HorizontalPager in a QWidget:
- Child widgets become pages, positioned at their slot minus the scroll offset
- Mouse input is translated into pointer events; events aimed at descendant
  widgets pass through the intercept phase first
- A QTimer render loop ticks the pager while an animation is running

The widget emits a Qt signal when the pager reports a page switch.
"""

import logging

from PyQt6.QtCore import QEvent, QObject, QTimer, Qt, pyqtSignal
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import QApplication, QWidget

from config_manager import ConfigManager, config
from custom_types import MeasureSpec, MotionEvent
from enums import MotionAction
from error_handler import ErrorHandler, InvalidLayoutModeError
from horizontal_pager import HorizontalPager
from platform_metrics import PlatformMetrics

logger = logging.getLogger(__name__)

_MOUSE_ACTIONS = {
    QEvent.Type.MouseButtonPress: MotionAction.DOWN,
    QEvent.Type.MouseMove: MotionAction.MOVE,
    QEvent.Type.MouseButtonRelease: MotionAction.UP,
}


class QtPageAdapter:
    """PageView over a QWidget child of the pager widget."""

    def __init__(self, widget: QWidget) -> None:
        self.widget = widget
        self.slot = (0, 0, 0, 0)

    def measure(self, width_spec: MeasureSpec, height_spec: MeasureSpec) -> None:
        self.widget.resize(width_spec.size, height_spec.size)

    def layout(self, left: int, top: int, right: int, bottom: int) -> None:
        self.slot = (left, top, right, bottom)

    def place(self, offset_x: int) -> None:
        """Move the widget to its slot shifted by the viewport offset."""
        left, top, right, bottom = self.slot
        self.widget.setGeometry(left - offset_x, top, right - left, bottom - top)


class PagerWidget(QWidget):
    """Swipeable container showing one child widget at a time.

    Signals:
        page_switched: Emitted with the new page index after a snap completes
    """

    # Signals
    page_switched = pyqtSignal(int)

    def __init__(
        self,
        parent: QWidget | None = None,
        metrics: PlatformMetrics | None = None,
        cfg: ConfigManager | None = None
    ) -> None:
        """Initialize the pager widget.

        Args:
            parent: Parent widget
            metrics: Platform metrics (defaults to the 'platform' config section)
            cfg: Configuration to read (defaults to the module singleton)
        """
        super().__init__(parent)
        cfg = cfg or config
        host_config = cfg.get_pager_host_config()
        gesture_config = cfg.get_gesture_config()

        self.pager = HorizontalPager(
            metrics or PlatformMetrics.from_config(cfg),
            intercept_tracks_motion=gesture_config.get("interceptTracksMotion", False),
        )
        self.pager.set_listener(self.page_switched.emit)
        self._adapters: list[QtPageAdapter] = []
        self._claimed = False

        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        background = cfg.get_color(host_config.get("background", "background"))
        self.setStyleSheet(f"PagerWidget {{ background-color: {background}; }}")

        # Render loop, only running while the pager animates
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(host_config.get("frameIntervalMs", 16))
        self._frame_timer.timeout.connect(self._on_frame)

        # See mouse events aimed at descendants before they do
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def add_page(self, widget: QWidget) -> None:
        """Append a widget as the last page."""
        widget.setParent(self)
        adapter = QtPageAdapter(widget)
        self._adapters.append(adapter)
        self.pager.add_page(adapter)
        widget.show()
        self.relayout()

    def remove_page(self, widget: QWidget) -> None:
        """Remove a page widget; it is left without a parent."""
        adapter = next((a for a in self._adapters if a.widget is widget), None)
        if adapter is None:
            ErrorHandler.show_warning(
                f"{type(widget).__name__} is not a page of this pager", "Remove page"
            )
            return
        self._adapters.remove(adapter)
        self.pager.remove_page(adapter)
        widget.setParent(None)
        self.relayout()

    def page_widgets(self) -> list[QWidget]:
        return [adapter.widget for adapter in self._adapters]

    def current_page(self) -> int:
        return self.pager.current_page

    def set_current_page(self, page: int, animate: bool = False) -> None:
        """Show a page, optionally with the snap animation."""
        self.pager.set_current_page(page, animate)
        self._place_pages()
        self._ensure_animating()

    def save_state(self) -> int:
        return self.pager.save_state()

    def restore_state(self, state: int) -> None:
        self.pager.restore_state(state)
        self._place_pages()

    # ------------------------------------------------------------------
    # Measure / layout
    # ------------------------------------------------------------------

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.relayout()

    def relayout(self) -> None:
        """Run a measure and layout pass for the current widget size."""
        width, height = self.width(), self.height()
        try:
            self.pager.on_measure(MeasureSpec.exactly(width), MeasureSpec.exactly(height))
        except InvalidLayoutModeError as e:
            ErrorHandler.log_exception(e, "Pager measure failed")
            raise
        self.pager.on_layout()
        self._place_pages()
        self._ensure_animating()

    def _place_pages(self) -> None:
        offset = self.pager.offset_x
        for adapter in self._adapters:
            adapter.place(offset)

    # ------------------------------------------------------------------
    # Render loop
    # ------------------------------------------------------------------

    def _ensure_animating(self) -> None:
        if not self.pager.is_animating():
            return
        if self.pager.scroller.duration == 0:
            # A re-alignment after a resize lands now; waiting for the timer
            # would treat the next touch as catching a fling
            self._on_frame()
            if not self.pager.is_animating():
                return
        if not self._frame_timer.isActive():
            self._frame_timer.start()

    def _on_frame(self) -> None:
        running = self.pager.tick()
        self._place_pages()
        if not running:
            self._frame_timer.stop()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _to_motion_event(self, action: MotionAction, event: QMouseEvent) -> MotionEvent:
        pos = self.mapFromGlobal(event.globalPosition())
        return MotionEvent(action, pos.x(), pos.y(), float(event.timestamp()))

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        """Intercept phase for mouse events delivered to descendants."""
        action = _MOUSE_ACTIONS.get(event.type())
        if action is None or not isinstance(obj, QWidget):
            return False
        if obj is self or not self.isAncestorOf(obj):
            return False
        if event.type() != QEvent.Type.MouseMove and event.button() != Qt.MouseButton.LeftButton:
            return False

        motion = self._to_motion_event(action, event)
        if self._claimed:
            self._handle(motion)
            return True

        if self.pager.on_intercept(motion):
            logger.debug("Pager claimed gesture from %s", type(obj).__name__)
            self._claimed = True
            # Route the rest of the gesture to the pager
            self.grabMouse()
            return True
        return False

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        self._handle(self._to_motion_event(MotionAction.DOWN, event))

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        self._handle(self._to_motion_event(MotionAction.MOVE, event))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        self._handle(self._to_motion_event(MotionAction.UP, event))

    def _handle(self, motion: MotionEvent) -> None:
        self.pager.on_touch(motion)
        if motion.action in (MotionAction.UP, MotionAction.CANCEL):
            self._end_gesture()
        self._place_pages()
        self._ensure_animating()

    def cancel_gesture(self) -> None:
        """Abandon the gesture in progress, e.g. when the window loses focus."""
        if self._claimed:
            self.pager.on_touch(MotionEvent.cancel())
        else:
            self.pager.on_intercept(MotionEvent.cancel())
        self._end_gesture()

    def _end_gesture(self) -> None:
        if self._claimed:
            self._claimed = False
            self.releaseMouse()

    def hideEvent(self, event) -> None:
        self.cancel_gesture()
        super().hideEvent(event)
