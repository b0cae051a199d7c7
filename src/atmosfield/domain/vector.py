# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""2-D vector helpers backed by NumPy.

Vectors are plain ``tuple[float, float]`` values so they stay hashable
and immutable across the domain layer. Arithmetic goes through NumPy and
results are converted back to Python floats.

External dependency: numpy (allowed in domain layer).
"""
import math

import numpy as np

Vector2 = tuple[float, float]

ZERO: Vector2 = (0.0, 0.0)

# Below this length a vector has no usable direction.
EPSILON: float = 1e-4


def _as_tuple(arr: np.ndarray) -> Vector2:
    return (float(arr[0]), float(arr[1]))


def vec_add(a: Vector2, b: Vector2) -> Vector2:
    """Component-wise sum a + b."""
    return _as_tuple(np.asarray(a, dtype=float) + np.asarray(b, dtype=float))


def vec_sub(a: Vector2, b: Vector2) -> Vector2:
    """Component-wise difference a - b."""
    return _as_tuple(np.asarray(a, dtype=float) - np.asarray(b, dtype=float))


def vec_scale(a: Vector2, scalar: float) -> Vector2:
    """Scale vector a by scalar."""
    return _as_tuple(np.asarray(a, dtype=float) * scalar)


def vec_dot(a: Vector2, b: Vector2) -> float:
    """Dot product a · b."""
    return float(np.dot(a, b))


def vec_cross(a: Vector2, b: Vector2) -> float:
    """Scalar (z) component of the 3-D cross product of two planar vectors.

    a × b = ax·by − ay·bx
    """
    return a[0] * b[1] - a[1] * b[0]


def vec_norm(a: Vector2) -> float:
    """Euclidean length |a|."""
    return math.hypot(a[0], a[1])


def vec_distance(a: Vector2, b: Vector2) -> float:
    """Euclidean distance |a - b|."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def vec_normalize(a: Vector2, fallback: Vector2 = ZERO) -> Vector2:
    """Unit vector along a, or ``fallback`` when |a| < EPSILON."""
    arr = np.asarray(a, dtype=float)
    length = float(np.linalg.norm(arr))
    if length < EPSILON:
        return fallback
    return _as_tuple(arr / length)


def vec_perp(a: Vector2) -> Vector2:
    """Rotate a by +90°: (x, y) → (−y, x)."""
    return (-a[1], a[0])


def vec_from_angle(angle_rad: float) -> Vector2:
    """Unit vector (cos φ, sin φ)."""
    return (math.cos(angle_rad), math.sin(angle_rad))


def vec_sum(vectors) -> Vector2:
    """Sum an iterable of vectors in iteration order."""
    x = 0.0
    y = 0.0
    for v in vectors:
        x += v[0]
        y += v[1]
    return (x, y)
