#!/usr/bin/env python3
"""
Reach Chain - Two-Pass Solver
=============================
Owns the ordered segments of one chain and drives them toward a target.

Segment 0 is the target-seeking tip and segment N-1 is pinned to the anchor.
Every solve runs exactly one forward sweep and one backward sweep; the chain
converges visually over successive solves as the target moves.
"""

import logging
import numbers
import numpy as np
from typing import List

from chain_config import physical as phys_config
from chain_config import motion as motion_config

from .reach_errors import ReachConfigurationError, ReachSolveError
from .reach_geometry import as_point
from .reach_kinematics import calculate_joint_angles
from .reach_segment import ReachSegment
from .reach_validation import find_chain_violations

logger = logging.getLogger(__name__)


class ReachChain:
    """
    Chain of rigid segments pinned at an anchor and pulled toward a target.

    This class encapsulates:
    - Construction of linked segments (rebuild)
    - The forward + backward reaching pass (solve)
    - Rendering of the current joint positions as lines (render)
    """

    def __init__(self,
                 segment_count: int = phys_config.NUM_SEGMENTS,
                 segment_length: float = phys_config.SEGMENT_LENGTH,
                 target=(0.0, 0.0, 0.0),
                 anchor=phys_config.ANCHOR_POINT,
                 origin=phys_config.WORLD_ORIGIN,
                 default_direction=motion_config.DEFAULT_DIRECTION):
        """
        Initialize and build the chain.

        Args:
            segment_count: Number of segments (must be > 0)
            segment_length: Length of every segment (must be > 0)
            target: Initial target point [x, y, z]
            anchor: Fixed inner endpoint of the last segment [x, y, z]
            origin: World origin added to rendered lines [x, y, z]
            default_direction: Direction of fresh segments before the first solve
        """
        self.anchor = as_point(anchor, 'anchor')
        self.origin = as_point(origin, 'origin')
        self.default_direction = as_point(default_direction, 'default_direction')

        self.segments: List[ReachSegment] = []
        self.segment_length = None
        self._target = None
        self.solve_count = 0

        self.rebuild(segment_count, segment_length, target)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def validate_configuration(segment_count, segment_length):
        """
        Reject segment counts and lengths the solver cannot work with.

        Raises:
            ReachConfigurationError: If count is not a positive integer or
                                     length is not a positive finite number
        """
        if isinstance(segment_count, bool) or not isinstance(segment_count, numbers.Integral):
            raise ReachConfigurationError(
                f"Segment count must be an integer, got {segment_count!r}"
            )
        if segment_count <= 0:
            raise ReachConfigurationError(
                f"Segment count must be positive, got {segment_count}"
            )
        if isinstance(segment_length, bool) or not isinstance(segment_length, numbers.Real):
            raise ReachConfigurationError(
                f"Segment length must be a number, got {segment_length!r}"
            )
        if not np.isfinite(segment_length) or segment_length <= 0:
            raise ReachConfigurationError(
                f"Segment length must be positive and finite, got {segment_length}"
            )

    def rebuild(self, segment_count: int, segment_length: float, target):
        """
        Discard all segments and build a fresh chain.

        Each segment's parent is the next one toward the anchor; the last
        segment has no parent. Positions stay at the origin until solve().

        Args:
            segment_count: Number of segments (must be > 0)
            segment_length: Length of every segment (must be > 0)
            target: Target point [x, y, z]
        """
        self.validate_configuration(segment_count, segment_length)
        target = as_point(target, 'target')

        segment_count = int(segment_count)
        segments = []
        for i in range(segment_count):
            parent_index = i + 1 if i < segment_count - 1 else None
            segments.append(ReachSegment(segment_length, i, parent_index, self.default_direction))

        self.segments = segments
        self.segment_length = float(segment_length)
        self._target = target
        self.solve_count = 0

        logger.info(
            f'Chain rebuilt: {segment_count} segments x {self.segment_length} '
            f'(reach {self.total_reach()})'
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def target(self) -> np.ndarray:
        return self._target

    @target.setter
    def target(self, value):
        self._target = as_point(value, 'target')

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    def total_reach(self) -> float:
        """Sum of all segment lengths."""
        return self.segment_count * self.segment_length

    def parent_of(self, segment: ReachSegment):
        """Segment one step closer to the anchor, or None for the anchored one."""
        if segment.parent_index is None:
            return None
        return self.segments[segment.parent_index]

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------

    def solve(self, target=None):
        """
        Run one forward and one backward pass.

        Forward: segment 0 reaches for the target, every later segment
        reaches for the previous segment's new A. Tip fix-up: the anchored
        segment is pinned to the anchor and aimed at its neighbour. Backward:
        from N-2 down to 0 each A is set to the next segment's B and B is
        recomputed.

        The solve is atomic: if it raises or leaves an invariant broken the
        previous state is restored and ReachSolveError is raised.

        Args:
            target: Optional new target [x, y, z]; kept only if the solve succeeds
        """
        previous_target = self._target
        if target is not None:
            self.target = target
        snapshot = [segment.copy_state() for segment in self.segments]

        try:
            self._forward_pass()
            self._fix_anchor()
            self._backward_pass()
        except Exception as exc:
            self._restore(snapshot, previous_target)
            raise ReachSolveError(f"Solve failed: {exc}") from exc

        violations = find_chain_violations(self.segments, self.anchor)
        if violations:
            self._restore(snapshot, previous_target)
            raise ReachSolveError("Solve broke chain invariants: " + '; '.join(violations))

        self.solve_count += 1
        logger.debug(
            f'Solve {self.solve_count}: target {self._target.tolist()}, '
            f'tip {self.tip_position().tolist()}'
        )

    def _local_target(self) -> np.ndarray:
        return self._target - self.origin

    def _forward_pass(self):
        for i, segment in enumerate(self.segments):
            if i == 0:
                segment.reach_toward(self._local_target())
            else:
                segment.reach_toward(self.segments[i - 1].a)

    def _fix_anchor(self):
        last = self.segments[-1]
        toward = self._local_target() if len(self.segments) == 1 else self.segments[-2].a
        last.pin(self.anchor, toward)

    def _backward_pass(self):
        for i in range(len(self.segments) - 2, -1, -1):
            self.segments[i].a = self.segments[i + 1].b.copy()
            self.segments[i].mirror_outer_endpoint()

    def _restore(self, snapshot, target):
        self._target = target
        for segment, state in zip(self.segments, snapshot):
            segment.restore_state(state)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self) -> np.ndarray:
        """
        Current chain as lines in segment index order.

        Returns:
            Array of shape (segment_count, 2, 3); row i is [A_i, B_i] of
            segment i offset by the world origin
        """
        return np.stack([segment.show(self.origin) for segment in self.segments])

    def joint_points(self) -> np.ndarray:
        """
        Polyline through all joints, tip first.

        Returns:
            Array of shape (segment_count + 1, 3): B_0, A_0, A_1, ..., A_{N-1}
        """
        points = [self.segments[0].b] + [segment.a for segment in self.segments]
        return np.vstack(points) + self.origin

    def directions(self) -> np.ndarray:
        """Unit directions of all segments, shape (segment_count, 3)."""
        return np.vstack([segment.direction for segment in self.segments])

    def tip_position(self) -> np.ndarray:
        """Outer endpoint of segment 0 in world coordinates."""
        return self.segments[0].b + self.origin

    def joint_angles(self) -> List[float]:
        """Signed angles between neighbouring segment directions (radians)."""
        return calculate_joint_angles(self.directions())
