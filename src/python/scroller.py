"""
Scroll engine: a time-parameterised, interruptible animator for one axis.

The engine never blocks. The host render loop calls `tick()` once per frame
and moves the viewport to the returned offset.
"""

import logging
import time

from custom_types import Clock

logger = logging.getLogger(__name__)

# Shape parameter of the deceleration curve
INTERPOLATION_FACTOR = 1.75


def monotonic_ms() -> float:
    """Default animation clock in milliseconds."""
    return time.monotonic() * 1000.0


class DecelerateInterpolator:
    """Easing curve that starts fast and slows to a stop.

    For factor 1 this is the quadratic ease-out `1 - (1 - t)^2`; larger
    factors exaggerate the effect.
    """

    def __init__(self, factor: float = 1.0) -> None:
        if factor <= 0:
            raise ValueError(f"Interpolation factor must be positive, got {factor}")
        self.factor = float(factor)

    def __call__(self, t: float) -> float:
        t = min(max(t, 0.0), 1.0)
        if self.factor == 1.0:
            return 1.0 - (1.0 - t) * (1.0 - t)
        return 1.0 - (1.0 - t) ** (2.0 * self.factor)


class Scroller:
    """Animate an offset from a start value by a delta over a duration.

    Attributes:
        start_x: Offset at the start of the animation
        final_x: Offset the animation ends on
        curr_x: Offset placed by the most recent tick
        duration: Animation length in milliseconds
        is_finished: True when no animation is in flight
    """

    def __init__(self, interpolator: DecelerateInterpolator | None = None,
                 clock: Clock | None = None) -> None:
        self.interpolator = interpolator or DecelerateInterpolator(INTERPOLATION_FACTOR)
        self.clock = clock or monotonic_ms
        self.start_x = 0
        self.final_x = 0
        self.curr_x = 0
        self.duration = 0
        self.start_time = 0.0
        self.is_finished = True

    def start_scroll(self, start_x: int, dx: int, duration_ms: int) -> None:
        """Start an animation, replacing any in-flight one.

        Args:
            start_x: Starting offset in pixels
            dx: Distance to travel; positive scrolls toward later pages
            duration_ms: Length of the animation; 0 jumps on the next tick
        """
        if not self.is_finished:
            logger.debug("Replacing animation toward %d", self.final_x)
        self.start_x = int(start_x)
        self.final_x = int(start_x) + int(dx)
        self.curr_x = int(start_x)
        self.duration = max(0, int(duration_ms))
        self.start_time = self.clock()
        self.is_finished = False
        logger.debug("Scroll %d -> %d over %d ms", self.start_x, self.final_x, self.duration)

    def abort_animation(self) -> None:
        """Stop the animation where the last tick left it."""
        if not self.is_finished:
            logger.debug("Animation aborted at %d", self.curr_x)
        self.is_finished = True

    def time_passed(self) -> float:
        return self.clock() - self.start_time

    def tick(self) -> tuple[bool, int]:
        """Sample the animation for the current frame.

        Returns:
            Tuple of (done, offset). `done` is True on the frame that reaches
            the final offset and on every call after that.
        """
        if self.is_finished:
            return (True, self.curr_x)

        elapsed = self.time_passed()
        if elapsed >= self.duration:
            self.curr_x = self.final_x
            self.is_finished = True
            return (True, self.curr_x)

        fraction = self.interpolator(elapsed / self.duration)
        self.curr_x = self.start_x + int(round(fraction * (self.final_x - self.start_x)))
        return (False, self.curr_x)
