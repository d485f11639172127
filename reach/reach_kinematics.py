#!/usr/bin/env python3
"""
Reach Kinematics Module

Derived quantities of a solved chain: signed joint angles between
neighbouring segments, total reach and a summary of the current pose.

Run directly for an example:
    python -m reach.reach_kinematics
"""

import math
import numpy as np
from typing import List, Dict

from chain_config import motion as motion_config

from .reach_geometry import is_degenerate


def rotate_quarter_turn(vector: np.ndarray, axis: np.ndarray) -> np.ndarray:
    """
    Rotate a vector by +90° about an axis.

    Rodrigues' formula with θ = 90°: v' = (k·v)k + k × v

    Args:
        vector: Vector to rotate
        axis: Rotation axis (will be normalized)

    Returns:
        Rotated vector
    """
    k = axis / np.linalg.norm(axis)
    return np.dot(k, vector) * k + np.cross(k, vector)


def calculate_signed_angle(x: np.ndarray, y: np.ndarray,
                           axis=motion_config.ANGLE_REFERENCE_AXIS) -> float:
    """
    Calculate angle from x to y, negative if y lies clockwise of x.

    The unsigned angle is signed by the dot product of y with x rotated
    a quarter turn about the reference axis.

    Args:
        x: First direction
        y: Second direction
        axis: Reference axis for the sign (default +Z)

    Returns:
        Angle in radians in [-π, π]; 0.0 if either vector has no length
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if is_degenerate(x) or is_degenerate(y):
        return 0.0

    cos_angle = np.dot(x, y) / (np.linalg.norm(x) * np.linalg.norm(y))
    angle = math.acos(np.clip(cos_angle, -1.0, 1.0))

    x_rotated = rotate_quarter_turn(x, np.asarray(axis, dtype=np.float64))
    if np.dot(x_rotated, y) < 0:
        angle = -angle
    return angle


def calculate_joint_angles(directions: np.ndarray,
                           axis=motion_config.ANGLE_REFERENCE_AXIS) -> List[float]:
    """
    Calculate signed bend at every joint between neighbouring segments.

    Args:
        directions: Segment directions in index order, shape (N, 3)
        axis: Reference axis for the sign

    Returns:
        List of N-1 angles in radians; entry i is the bend from segment i+1
        (anchor side) to segment i (tip side)
    """
    angles = []
    for i in range(len(directions) - 1):
        angles.append(calculate_signed_angle(directions[i + 1], directions[i], axis))
    return angles


def calculate_chain_reach(segment_count: int, segment_length: float) -> float:
    """Total length of a fully stretched chain."""
    return segment_count * segment_length


def calculate_chain_kinematics(chain) -> Dict:
    """
    Summarize the current pose of a chain.

    Args:
        chain: ReachChain instance (solved at least once)

    Returns:
        Dictionary containing:
            - 'lines': np.ndarray - Rendered lines, shape (N, 2, 3)
            - 'joint_points': np.ndarray - Polyline tip to anchor, shape (N+1, 3)
            - 'joint_angles': list - Signed joint angles in radians
            - 'tip_position': np.ndarray - Outer end of segment 0
            - 'tip_error': float - Distance from tip to target
            - 'reach': float - Total chain length
            - 'target_distance': float - Distance from anchor to target
            - 'reachable': bool - Whether the target lies within reach
    """
    tip = chain.tip_position()
    reach = calculate_chain_reach(chain.segment_count, chain.segment_length)
    target_distance = float(np.linalg.norm(chain.target - (chain.anchor + chain.origin)))

    return {
        'lines': chain.render(),
        'joint_points': chain.joint_points(),
        'joint_angles': chain.joint_angles(),
        'tip_position': tip,
        'tip_error': float(np.linalg.norm(tip - chain.target)),
        'reach': reach,
        'target_distance': target_distance,
        'reachable': target_distance <= reach
    }


def print_chain_results(result: Dict):
    """Print chain kinematics in readable format."""
    print("\n" + "=" * 70)
    print("REACH CHAIN RESULTS")
    print("=" * 70)

    for i, (start, end) in enumerate(result['lines']):
        print(f"  Segment {i}: {np.round(start, 4).tolist()} -> {np.round(end, 4).tolist()}")

    if len(result['joint_angles']) > 0:
        print("  Joint angles:")
        for i, angle in enumerate(result['joint_angles']):
            print(f"    Joint {i}: {math.degrees(angle):.2f}°")

    print(f"  Tip:       {np.round(result['tip_position'], 4).tolist()}")
    print(f"  Tip error: {result['tip_error']:.4f}")
    print(f"  Reach:     {result['reach']:.4f} (target at {result['target_distance']:.4f}, "
          f"{'reachable' if result['reachable'] else 'out of reach'})")


if __name__ == "__main__":
    # Example usage
    from reach.reach_chain import ReachChain

    chain = ReachChain(segment_count=3, segment_length=1.0, target=[5.0, 0.0, 0.0])
    chain.solve()
    print_chain_results(calculate_chain_kinematics(chain))

    chain.target = [1.0, 1.5, 0.0]
    for _ in range(10):
        chain.solve()
    print_chain_results(calculate_chain_kinematics(chain))
