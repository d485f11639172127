"""
Reach Inverse Kinematics Module

Two-pass (forward + backward) reaching solver for a chain of rigid
segments pinned at an anchor and pulled toward a target.

Modules:
    - reach_chain: Chain of segments and the two-pass solve (use this for IK solving)
    - reach_segment: Single rigid segment with inner/outer endpoints
    - reach_session: Host session keeping one chain alive across invocations
    - reach_geometry: Point coercion and unitization with fallback
    - reach_validation: Length, continuity and anchor checks
    - reach_kinematics: Joint angles and pose summary
    - reach_errors: Exception types
"""

from .reach_errors import ReachError, ReachConfigurationError, ReachSolveError
from .reach_segment import ReachSegment
from .reach_chain import ReachChain
from .reach_session import ReachSession, SessionState
from .reach_validation import validate_chain, find_chain_violations
from .reach_kinematics import calculate_chain_kinematics, calculate_signed_angle

__all__ = [
    'ReachError',
    'ReachConfigurationError',
    'ReachSolveError',
    'ReachSegment',
    'ReachChain',
    'ReachSession',
    'SessionState',
    'validate_chain',
    'find_chain_violations',
    'calculate_chain_kinematics',
    'calculate_signed_angle'
]
