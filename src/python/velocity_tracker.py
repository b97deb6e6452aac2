"""
Pointer velocity estimation for fling detection.

Samples from the current gesture are fitted with a least-squares line of
position against time; the slope is the velocity. Only the most recent
samples inside a short horizon take part, so a finger that stops before
lifting reports a low velocity.
"""

from collections import deque
import logging

import numpy as np

from custom_types import MotionEvent, VelocitySample

logger = logging.getLogger(__name__)

# Samples older than this (relative to the newest) are ignored
HORIZON_MS = 100.0
MAX_SAMPLES = 20


class VelocityTracker:
    """Estimate pointer velocity from timestamped samples."""

    _samples: deque[VelocitySample]
    x_velocity: float
    y_velocity: float

    def __init__(self, horizon_ms: float = HORIZON_MS, max_samples: int = MAX_SAMPLES) -> None:
        self.horizon_ms = float(horizon_ms)
        self._samples = deque(maxlen=max_samples)
        self.x_velocity = 0.0
        self.y_velocity = 0.0

    def __len__(self) -> int:
        return len(self._samples)

    def add_movement(self, event: MotionEvent) -> None:
        """Record the position of a pointer event."""
        self.add_sample(event.time_ms, event.x, event.y)

    def add_sample(self, time_ms: float, x: float, y: float) -> None:
        """Record a timestamped point, replacing a sample with the same time."""
        if self._samples and self._samples[-1][0] == time_ms:
            self._samples.pop()
        self._samples.append((float(time_ms), float(x), float(y)))

        # Drop samples that fell out of the horizon
        newest = self._samples[-1][0]
        while self._samples and newest - self._samples[0][0] > self.horizon_ms:
            self._samples.popleft()

    def compute_current_velocity(
        self,
        units: int = 1000,
        max_velocity: float | None = None
    ) -> tuple[float, float]:
        """Compute the velocity of the recorded samples.

        Args:
            units: Time unit of the result in milliseconds (1000 gives pixels
                per second, 1 gives pixels per millisecond)
            max_velocity: Magnitude cap applied to both components, or None

        Returns:
            Tuple of (vx, vy); (0.0, 0.0) when fewer than two samples exist
        """
        if len(self._samples) < 2:
            self.x_velocity = self.y_velocity = 0.0
            return (0.0, 0.0)

        data = np.asarray(self._samples, dtype=np.float64)
        t = data[:, 0] - data[-1, 0]
        if np.ptp(t) == 0.0:
            self.x_velocity = self.y_velocity = 0.0
            return (0.0, 0.0)

        # Least-squares slope of position over time, for x and y at once
        design = np.column_stack((t, np.ones_like(t)))
        coeffs, *_ = np.linalg.lstsq(design, data[:, 1:], rcond=None)
        velocity = coeffs[0] * units

        if max_velocity is not None:
            velocity = np.clip(velocity, -max_velocity, max_velocity)

        self.x_velocity = float(velocity[0])
        self.y_velocity = float(velocity[1])
        logger.debug("Velocity from %d samples: vx=%.1f vy=%.1f",
                     len(self._samples), self.x_velocity, self.y_velocity)
        return (self.x_velocity, self.y_velocity)

    def reset(self) -> None:
        """Release the sample buffer."""
        self._samples.clear()
        self.x_velocity = 0.0
        self.y_velocity = 0.0
