#!/usr/bin/env python3
"""
Reach Validation Module

Checks the invariants a solved chain must satisfy:
finite endpoints, exact segment lengths, no gaps between neighbours,
and the anchored segment sitting on the anchor.
"""

import numpy as np
from typing import List, Sequence

from chain_config import motion as motion_config

from .reach_geometry import vector_norm


def allowed_length_error(segment,
                         length_tolerance: float = motion_config.LENGTH_TOLERANCE,
                         rounding_ulps: float = motion_config.ROUNDING_ULPS) -> float:
    """
    Largest |(|a - b|) - length| accepted for a segment.

    Rounding in b = a + direction * length grows with the coordinates,
    so a chain far from the origin gets a proportionally wider band.
    """
    coordinate_scale = max(np.max(np.abs(segment.a)), np.max(np.abs(segment.b)))
    return (length_tolerance * segment.length
            + rounding_ulps * np.finfo(np.float64).eps * coordinate_scale)


def find_chain_violations(segments: Sequence,
                          anchor: np.ndarray,
                          length_tolerance: float = motion_config.LENGTH_TOLERANCE,
                          continuity_tolerance: float = motion_config.CONTINUITY_TOLERANCE) -> List[str]:
    """
    List every invariant the segments currently break.

    Args:
        segments: Chain segments in index order
        anchor: Expected inner endpoint of the last segment, shape (3,)
        length_tolerance: Relative tolerance on segment length (widened by
                          coordinate size, see allowed_length_error)
        continuity_tolerance: Absolute tolerance on joined endpoints

    Returns:
        Human-readable violation descriptions (empty if the chain is valid)
    """
    violations = []

    if len(segments) == 0:
        return ['chain has no segments']

    for segment in segments:
        if not (np.all(np.isfinite(segment.a)) and np.all(np.isfinite(segment.b))):
            violations.append(f'segment {segment.index} has non-finite endpoints')
            continue
        actual = vector_norm(segment.a - segment.b)
        if abs(actual - segment.length) > allowed_length_error(segment, length_tolerance):
            violations.append(
                f'segment {segment.index} length {actual!r} != {segment.length!r}'
            )

    for i in range(len(segments) - 1):
        if not np.allclose(segments[i].a, segments[i + 1].b, rtol=0.0, atol=continuity_tolerance):
            violations.append(f'gap between segment {i} and segment {i + 1}')

    if not np.allclose(segments[-1].a, anchor, rtol=0.0, atol=continuity_tolerance):
        violations.append(f'segment {segments[-1].index} is not on the anchor')

    return violations


def validate_chain(segments: Sequence, anchor: np.ndarray) -> bool:
    """Validate solved chain segments."""
    return not find_chain_violations(segments, anchor)
