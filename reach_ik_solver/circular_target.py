#!/usr/bin/env python3
"""
Circular Target Generator
Moves the target point around a horizontal circle.
Useful for testing how the chain follows a continuously moving target.
"""

import math
import numpy as np

from chain_config import system as sys_config


class CircularTarget:
    """Target position on a circle in the XY plane as a function of time."""

    def __init__(self, radius: float = sys_config.TARGET_RADIUS,
                 center=sys_config.TARGET_CENTER,
                 period: float = sys_config.TARGET_PERIOD):
        if period <= 0:
            raise ValueError(f"Period must be positive, got {period}")
        self.radius = radius
        self.center = np.array(center, dtype=np.float64)
        self.period = period

    def position_at(self, elapsed_sec: float) -> np.ndarray:
        """Position after elapsed_sec seconds; one full circle every period."""
        angle = 2.0 * math.pi * (elapsed_sec / self.period)
        return self.center + np.array([
            self.radius * math.cos(angle),
            self.radius * math.sin(angle),
            0.0
        ])

    def sample(self, steps: int, rate: float):
        """Yield (step, elapsed_sec, position) for steps updates at rate Hz."""
        for step in range(steps):
            elapsed_sec = step / rate
            yield step, elapsed_sec, self.position_at(elapsed_sec)
