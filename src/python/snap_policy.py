"""
Snap policy: which page a released drag settles on, and how long it takes.
"""

import logging

from platform_metrics import PlatformMetrics

logger = logging.getLogger(__name__)

# Duration of a full-width programmatic snap
ANIMATION_DEFAULT_MS = 500
# A drag of more than 1/x of the page width commits to the neighbour
SNAP_FRACTION_DENOMINATOR = 4


class SnapPolicy:
    """Choose snap targets from release velocity and drag distance."""

    def __init__(self, metrics: PlatformMetrics,
                 animation_ms: int = ANIMATION_DEFAULT_MS,
                 fraction_denominator: int = SNAP_FRACTION_DENOMINATOR) -> None:
        self.snap_velocity_px = metrics.snap_velocity_px
        self.animation_ms = animation_ms
        self.fraction_denominator = fraction_denominator

    def choose_target(self, vx: float, offset_x: int, current_page: int,
                      page_width: int, page_count: int) -> int:
        """Pick the page a released gesture settles on.

        A fling faster than the snap velocity moves one page in the fling
        direction; otherwise a drag past 1/4 of the page width commits to the
        neighbour it was dragged toward. The result is clamped to the pages.
        """
        last_page = page_count - 1
        target = current_page

        if vx > self.snap_velocity_px and current_page > 0:
            # Fling hard enough to move left
            target = current_page - 1
        elif vx < -self.snap_velocity_px and current_page < last_page:
            # Fling hard enough to move right
            target = current_page + 1
        else:
            drag = offset_x - current_page * page_width
            threshold = page_width / self.fraction_denominator
            if drag < 0 and current_page > 0 and -drag > threshold:
                target = current_page - 1
            elif drag > 0 and current_page < last_page and drag > threshold:
                target = current_page + 1

        target = max(0, min(target, last_page))
        logger.debug("Snap target %d (vx=%.1f, offset=%d, page=%d)",
                     target, vx, offset_x, current_page)
        return target

    def settle_duration(self, target: int, offset_x: int, page_width: int) -> int:
        """Duration proportional to the distance left to the target page.

        E.g. if the user already dragged 80% of the way, animate for 20% of
        the full duration.
        """
        if page_width <= 0:
            return 0
        remaining = abs(target * page_width - offset_x)
        return int(remaining / page_width * self.animation_ms)

    def programmatic_duration(self) -> int:
        return self.animation_ms
