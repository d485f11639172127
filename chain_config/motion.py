"""
Solver Parameters
=================
Tolerances and fallbacks used by the two-pass reach solver.
"""

# =============================================================================
# INVARIANT TOLERANCES
# =============================================================================

LENGTH_TOLERANCE = 1e-9
"""Relative tolerance on |a - b| == length after a solve"""

ROUNDING_ULPS = 4.0
"""Extra length error allowed per unit of coordinate size, in multiples of float64 eps"""

CONTINUITY_TOLERANCE = 1e-9
"""Absolute tolerance when comparing joined endpoints of adjacent segments"""

# =============================================================================
# DEGENERATE GEOMETRY
# =============================================================================

DEGENERATE_EPSILON = 1e-12
"""Vectors shorter than this cannot be unitized"""

DEFAULT_DIRECTION = (0.0, 0.0, 1.0)
"""Direction a fresh segment points along until its first solve (+Z)"""

# =============================================================================
# JOINT ANGLES
# =============================================================================

ANGLE_REFERENCE_AXIS = (0.0, 0.0, 1.0)
"""Axis used to sign the angle between two segment directions"""
