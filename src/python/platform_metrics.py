"""
Platform-provided touch parameters for the pager.

The values are queried once when a pager is built and stay constant for its
lifetime. Hosts build them from configuration; tests pass literal values.
"""

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config_manager import ConfigManager

logger = logging.getLogger(__name__)

# Velocity of a swipe (in density-independent pixels per second) that forces
# a move to the neighbouring page.
SNAP_VELOCITY_DIP_PER_SEC = 600


@dataclass(frozen=True)
class PlatformMetrics:
    """Touch slop, fling cap and display density of the host platform."""
    touch_slop: int = 8
    max_fling_velocity: int = 8000
    display_density: float = 1.0

    @property
    def snap_velocity_px(self) -> int:
        """Fling threshold in physical pixels per second."""
        return int(SNAP_VELOCITY_DIP_PER_SEC * self.display_density)

    @classmethod
    def from_config(cls, config: 'ConfigManager') -> 'PlatformMetrics':
        """Scale the DIP values of the `platform` config section by density."""
        platform = config.get_platform_config()
        density = float(platform.get("density", 1.0))
        if density <= 0:
            logger.warning("Ignoring non-positive display density %s", density)
            density = 1.0
        metrics = cls(
            touch_slop=int(platform.get("touchSlopDp", 8) * density),
            max_fling_velocity=int(platform.get("maximumFlingVelocityDp", 8000) * density),
            display_density=density,
        )
        logger.debug("Platform metrics: %s", metrics)
        return metrics
