#!/usr/bin/env python3
"""
Reach Segment Module

One rigid link of the reach chain. A segment owns its inner endpoint A,
its outer endpoint B and the unit direction from A to B. Its length never
changes after construction.
"""

import logging
import numpy as np
from typing import Optional, Dict

from chain_config import motion as motion_config

from .reach_errors import ReachConfigurationError
from .reach_geometry import unitize, is_degenerate

logger = logging.getLogger(__name__)


class ReachSegment:
    """Rigid segment with inner endpoint A and outer endpoint B."""

    def __init__(self, length: float, index: int, parent_index: Optional[int] = None,
                 default_direction=motion_config.DEFAULT_DIRECTION):
        """
        Initialize segment at the origin.

        Args:
            length: Rigid distance between A and B (must be > 0)
            index: Position in the chain (0 = target-seeking tip)
            parent_index: Index of the segment one step closer to the anchor,
                          None for the anchored segment
            default_direction: Direction used until the first solve
        """
        if not length > 0 or not np.isfinite(length):
            raise ReachConfigurationError(f"Segment length must be positive, got {length}")

        self._length = float(length)
        self.index = index
        self.parent_index = parent_index

        self.a = np.zeros(3, dtype=np.float64)
        self.b = np.zeros(3, dtype=np.float64)
        self.direction = unitize(np.array(default_direction, dtype=np.float64),
                                 np.array([0.0, 0.0, 1.0]))

    @property
    def length(self) -> float:
        return self._length

    @property
    def is_anchored(self) -> bool:
        """True for the segment without a parent (pinned by the chain)."""
        return self.parent_index is None

    def _aim(self, origin: np.ndarray, target: np.ndarray):
        """Point direction from origin toward target, keeping it if undefined."""
        offset = target - origin
        if is_degenerate(offset):
            logger.warning(
                f'Segment {self.index}: direction to target is undefined, '
                f'keeping direction {self.direction.tolist()}'
            )
        self.direction = unitize(offset, self.direction)

    def reach_toward(self, target_position: np.ndarray):
        """
        Move A so it lies exactly `length` short of the target.

        A ends up on the straight line from the old A through the target.
        Skipped for the anchored segment, whose A is fixed by the chain.

        Args:
            target_position: Point the segment reaches for, shape (3,)
        """
        if self.is_anchored:
            return

        target_position = np.asarray(target_position, dtype=np.float64)
        self._aim(self.a, target_position)
        self.a = target_position - self.direction * self._length

    def mirror_outer_endpoint(self):
        """Place B exactly `length` from A along the current direction."""
        self.b = self.a + self.direction * self._length

    def pin(self, position: np.ndarray, toward: np.ndarray):
        """
        Fix A at position, aim at toward, then recompute B.

        Args:
            position: Fixed inner endpoint, shape (3,)
            toward: Point the segment should point at, shape (3,)
        """
        self.a = np.array(position, dtype=np.float64)
        self._aim(self.a, np.asarray(toward, dtype=np.float64))
        self.mirror_outer_endpoint()

    def copy_state(self) -> Dict:
        """Snapshot of the mutable endpoint state."""
        return {
            'a': self.a.copy(),
            'b': self.b.copy(),
            'direction': self.direction.copy()
        }

    def restore_state(self, state: Dict):
        """Restore a snapshot taken with copy_state()."""
        self.a = state['a'].copy()
        self.b = state['b'].copy()
        self.direction = state['direction'].copy()

    def show(self, origin: np.ndarray) -> np.ndarray:
        """
        Line from A to B offset by the world origin.

        Returns:
            Array of shape (2, 3): [start, end]
        """
        return np.vstack([origin + self.a, origin + self.b])

    def __repr__(self):
        return (f'ReachSegment(index={self.index}, length={self._length}, '
                f'a={self.a.tolist()}, b={self.b.tolist()})')
