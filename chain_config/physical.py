"""
Chain Physical Parameters
=========================
Default dimensions of the reach chain and its placement in the world.

Hosts usually pass their own segment length and count; these values are
used when they don't.
"""

# =============================================================================
# SEGMENT DIMENSIONS
# =============================================================================

SEGMENT_LENGTH = 1.0
"""Default rigid length of every segment (world units)"""

NUM_SEGMENTS = 3
"""Default number of segments in a chain"""

# =============================================================================
# PLACEMENT
# =============================================================================

ANCHOR_POINT = (0.0, 0.0, 0.0)
"""Fixed inner endpoint of the anchored segment, relative to the world origin"""

WORLD_ORIGIN = (0.0, 0.0, 0.0)
"""Shared origin added to every rendered endpoint"""
