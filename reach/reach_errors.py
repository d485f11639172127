#!/usr/bin/env python3
"""
Reach Errors Module

Exceptions raised by the reach chain solver.
"""


class ReachError(Exception):
    """Base class for reach chain errors."""


class ReachConfigurationError(ReachError, ValueError):
    """Chain was configured with an invalid count, length or target."""


class ReachSolveError(ReachError, RuntimeError):
    """Solve left the chain in a state that breaks its invariants."""
