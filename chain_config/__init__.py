"""
Chain Configuration Package
============================

Centralized configuration for the reach chain solver.
All parameters are organized into logical modules:

- physical: Default chain dimensions, anchor and world origin
- motion: Solver tolerances and degenerate-direction fallback
- system: Logger names, message formats, host driver defaults

Usage:
    from chain_config import physical, motion, system

    # Or import specific values
    from chain_config.physical import NUM_SEGMENTS, SEGMENT_LENGTH
    from chain_config.motion import LENGTH_TOLERANCE
"""

from . import physical
from . import motion
from . import system

__version__ = '1.0.0'
__all__ = ['physical', 'motion', 'system']
