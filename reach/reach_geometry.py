#!/usr/bin/env python3
"""
Reach Geometry Module

Point coercion and unitization helpers shared by segments and chains.
"""

import math
import numpy as np

from chain_config import motion as motion_config

from .reach_errors import ReachConfigurationError


def as_point(value, name: str = 'point') -> np.ndarray:
    """
    Convert a 3-element sequence to a float64 point.

    Args:
        value: Sequence or array with three coordinates
        name: Name used in the error message

    Returns:
        Array of shape (3,)

    Raises:
        ReachConfigurationError: If the value is not three finite numbers
    """
    try:
        point = np.array(value, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as exc:
        raise ReachConfigurationError(f"{name} must be a 3D point, got {value!r}") from exc

    if point.shape != (3,):
        raise ReachConfigurationError(f"{name} must have 3 coordinates, got {point.size}")
    if not np.all(np.isfinite(point)):
        raise ReachConfigurationError(f"{name} must be finite, got {point.tolist()}")
    return point


def vector_norm(vector: np.ndarray) -> float:
    """
    Euclidean length that does not overflow for large finite vectors.

    The vector is scaled by its largest component before squaring.

    Returns:
        Length of the vector (inf only if a component is non-finite)
    """
    vector = np.asarray(vector, dtype=np.float64)
    scale = np.max(np.abs(vector)) if vector.size else 0.0
    if scale == 0.0 or not math.isfinite(scale):
        return float(scale)
    return float(scale * np.linalg.norm(vector / scale))


def unitize(vector: np.ndarray,
            fallback: np.ndarray,
            epsilon: float = motion_config.DEGENERATE_EPSILON) -> np.ndarray:
    """
    Normalize a vector, returning a copy of fallback if it has no direction.

    Args:
        vector: Vector to normalize
        fallback: Unit vector to use when vector is (near) zero or non-finite
        epsilon: Length below which vector is considered degenerate

    Returns:
        Unit vector
    """
    if is_degenerate(vector, epsilon):
        return np.array(fallback, dtype=np.float64)
    scaled = vector / np.max(np.abs(vector))
    return scaled / np.linalg.norm(scaled)


def is_degenerate(vector: np.ndarray,
                  epsilon: float = motion_config.DEGENERATE_EPSILON) -> bool:
    """Check whether a vector is too short (or not finite) to define a direction."""
    magnitude = vector_norm(vector)
    return magnitude < epsilon or not math.isfinite(magnitude)
