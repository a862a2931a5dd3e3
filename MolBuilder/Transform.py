"""
Rigid transforms: 3x3 rotation matrices built from rotation vectors.

A rotation vector points along the rotation axis, its length is the angle in
radians.
"""

import numpy as np

from .Vec3 import Vec3, X, Y


def skew(k):
    """Cross-product matrix K, K @ v == k x v."""
    kx, ky, kz = k
    return np.array([[0.0, -kz, ky],
                     [kz, 0.0, -kx],
                     [-ky, kx, 0.0]])


def rotate(rot):
    """Rotation matrix for the rotation vector rot (Rodrigues' formula)."""
    rot = np.asarray(rot, dtype=np.float64)
    angle = np.linalg.norm(rot)
    if angle == 0:
        return np.identity(3)
    K = skew(rot / angle)
    return np.identity(3) + np.sin(angle) * K + (1 - np.cos(angle)) * (K @ K)


def compose(*matrices):
    """Matrix applying the given rotations right to left."""
    res = np.identity(3)
    for m in matrices:
        res = res @ m
    return res


def apply(m, vec):
    return Vec3.from_array(m @ np.asarray(vec))


def transform(vec, shift, rot):
    """Rotate vec about the origin, then shift it."""
    return apply(rotate(rot), vec) + shift


def rotation_between(a, b):
    """Rotation vector that turns direction a onto direction b."""
    a = a.normalize()
    b = b.normalize()
    if a.is_parallel(b):
        return Vec3()
    if a.is_parallel(-b):
        # any axis orthogonal to a will do
        axis = a.cross(Vec3.one(X, 1.0))
        if axis.len2() < 0.5:
            axis = a.cross(Vec3.one(Y, 1.0))
        return axis.normalize() * np.pi
    axis = a.cross(b)
    angle = np.arctan2(axis.len(), a * b)
    return axis.normalize() * float(angle)
