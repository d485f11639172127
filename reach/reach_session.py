#!/usr/bin/env python3
"""
Reach Session
=============
Host-facing session context that keeps one chain alive across invocations.

A host calls invoke() once per update with the four inputs it owns
(segment length, segment count, target point, reset flag). The session
rebuilds the chain when needed, solves it and hands back the lines.
Failures never escape invoke(): they are reported in the message list and
the chain keeps its last good state.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from chain_config import physical as phys_config
from chain_config import system as sys_config

from .reach_chain import ReachChain

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle of a session."""
    UNINITIALIZED = 'uninitialized'
    READY = 'ready'


class ReachSession:
    """
    Holds the persisted chain for one hosting session.

    UNINITIALIZED -> READY on the first invocation or whenever reset is set.
    READY -> READY on every other invocation.
    """

    def __init__(self, anchor=phys_config.ANCHOR_POINT, origin=phys_config.WORLD_ORIGIN):
        """
        Initialize an empty session.

        Args:
            anchor: Anchor point handed to every chain this session builds
            origin: World origin handed to every chain this session builds
        """
        self.anchor = anchor
        self.origin = origin

        self.chain: Optional[ReachChain] = None
        self.state = SessionState.UNINITIALIZED
        self.invocation_count = 0

    @property
    def is_ready(self) -> bool:
        return self.state is SessionState.READY

    def invoke(self, segment_length: float, segment_count: int, target_point,
               reset: bool = False) -> Dict:
        """
        Run one invocation: rebuild if needed, set target, solve, render.

        Args:
            segment_length: Length of every segment
            segment_count: Number of segments
            target_point: Target position [x, y, z]
            reset: Force a rebuild of the chain

        Returns:
            Dictionary containing:
                - 'lines': np.ndarray or None - Lines of shape (N, 2, 3), None on error
                - 'messages': list - Diagnostics produced by this invocation
                - 'rebuilt': bool - Whether the chain was rebuilt
                - 'state': str - Session state after the invocation
        """
        self.invocation_count += 1
        messages: List[str] = []
        rebuilt = False
        lines = None

        try:
            if not self.is_ready or reset:
                self.chain = self._build_chain(segment_count, segment_length, target_point)
                self.state = SessionState.READY
                rebuilt = True
                messages.append(
                    f'Chain rebuilt with {self.chain.segment_count} segments of length '
                    f'{self.chain.segment_length}'
                )

            self.chain.solve(target_point)
            lines = self.chain.render()

        except Exception as exc:
            lines = None
            messages.append(sys_config.ERROR_MESSAGE_FORMAT.format(exc))
            logger.error(f'Invocation {self.invocation_count} failed: {exc}')

        return {
            'lines': lines,
            'messages': messages,
            'rebuilt': rebuilt,
            'state': self.state.value
        }

    def _build_chain(self, segment_count, segment_length, target_point) -> ReachChain:
        # Built aside so a bad configuration leaves the current chain intact
        return ReachChain(
            segment_count=segment_count,
            segment_length=segment_length,
            target=target_point,
            anchor=self.anchor,
            origin=self.origin
        )

    def reset_state(self):
        """Force the next invocation to rebuild the chain."""
        self.state = SessionState.UNINITIALIZED

    def close(self):
        """Tear down the chain and return to UNINITIALIZED."""
        self.chain = None
        self.state = SessionState.UNINITIALIZED
        self.invocation_count = 0
