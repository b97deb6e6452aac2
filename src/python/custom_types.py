"""
Type definitions for the horizontal pager.

This module defines common types, aliases, and TypedDict structures
used throughout the pager codebase.
"""

from dataclasses import dataclass
from typing import Any, Callable, Protocol, TypedDict

from enums import MeasureMode, MotionAction


@dataclass(frozen=True)
class MotionEvent:
    """A single pointer sample delivered by the host.

    Coordinates are in pixels relative to the pager's left/top edge and
    the timestamp is in milliseconds on a monotonic clock.
    """
    action: MotionAction
    x: float
    y: float
    time_ms: float = 0.0

    @classmethod
    def down(cls, x: float, y: float, time_ms: float = 0.0) -> 'MotionEvent':
        return cls(MotionAction.DOWN, x, y, time_ms)

    @classmethod
    def move(cls, x: float, y: float, time_ms: float = 0.0) -> 'MotionEvent':
        return cls(MotionAction.MOVE, x, y, time_ms)

    @classmethod
    def up(cls, x: float, y: float, time_ms: float = 0.0) -> 'MotionEvent':
        return cls(MotionAction.UP, x, y, time_ms)

    @classmethod
    def cancel(cls, x: float = 0.0, y: float = 0.0, time_ms: float = 0.0) -> 'MotionEvent':
        return cls(MotionAction.CANCEL, x, y, time_ms)


@dataclass(frozen=True)
class MeasureSpec:
    """A size constraint handed to the pager by the host measure pass."""
    mode: MeasureMode
    size: int

    @classmethod
    def exactly(cls, size: int) -> 'MeasureSpec':
        return cls(MeasureMode.EXACTLY, int(size))

    @classmethod
    def at_most(cls, size: int) -> 'MeasureSpec':
        return cls(MeasureMode.AT_MOST, int(size))

    @classmethod
    def unspecified(cls) -> 'MeasureSpec':
        return cls(MeasureMode.UNSPECIFIED, 0)


# Configuration TypedDict definitions
class PlatformConfig(TypedDict, total=False):
    """Platform metrics section, expressed in density-independent pixels."""
    touchSlopDp: float
    maximumFlingVelocityDp: float
    density: float


class GestureConfig(TypedDict, total=False):
    """Gesture arbitration options."""
    interceptTracksMotion: bool


class PagerHostConfig(TypedDict, total=False):
    """Qt host widget settings."""
    frameIntervalMs: int
    background: str


class LoggingConfig(TypedDict, total=False):
    """Logging configuration section."""
    level: str
    file: str
    maxBytes: int
    backupCount: int
    console: bool
    consoleLevel: str
    coreLevel: str
    raiseOnError: bool


# Type aliases for common signatures
PageSlot = tuple[int, int, int, int]  # (left, top, right, bottom)
VelocitySample = tuple[float, float, float]  # (time_ms, x, y)

# Callback type aliases
ScreenSwitchListener = Callable[[int], None]
Clock = Callable[[], float]  # monotonic time in milliseconds


# Protocol definitions
class PageView(Protocol):
    """Protocol for children hosted by the pager."""

    def measure(self, width_spec: MeasureSpec, height_spec: MeasureSpec) -> None:
        """Receive the exact size every page is given."""
        ...

    def layout(self, left: int, top: int, right: int, bottom: int) -> None:
        """Receive the page slot in pager content coordinates."""
        ...


class VelocityTrackerProtocol(Protocol):
    """Protocol for pointer velocity estimators."""

    def add_movement(self, event: MotionEvent) -> None:
        """Record a pointer sample."""
        ...

    def compute_current_velocity(
        self,
        units: int = 1000,
        max_velocity: float | None = None
    ) -> tuple[float, float]:
        """Return (vx, vy) in pixels per `units` milliseconds."""
        ...

    def reset(self) -> None:
        """Drop every recorded sample."""
        ...


VelocityTrackerFactory = Callable[[], VelocityTrackerProtocol]
ConfigSection = dict[str, Any]
