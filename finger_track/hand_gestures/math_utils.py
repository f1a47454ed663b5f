"""Vector and geometry utility functions."""

import math

Point2 = tuple[float, float]
Point3 = tuple[float, float, float]
Vec3 = tuple[float, float, float]


def clamp(v: float, lo: float, hi: float) -> float:
    """Clamp value to range [lo, hi]."""
    return max(lo, min(hi, v))


def sub3(a: Vec3, b: Vec3) -> Vec3:
    """Vector subtraction: a - b."""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def dot3(a: Vec3, b: Vec3) -> float:
    """Dot product of 3D vectors."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def norm3(a: Vec3) -> float:
    """Magnitude of 3D vector."""
    return math.sqrt(dot3(a, a))


def angle_3pt_deg(a: Point3, b: Point3, c: Point3) -> float:
    """
    Angle at point B formed by points A-B-C, in degrees.

    Returns 0.0 when A or C coincides with B, since the angle is undefined.
    """
    ba = sub3(a, b)
    bc = sub3(c, b)
    ba_len = norm3(ba)
    bc_len = norm3(bc)
    if ba_len == 0.0 or bc_len == 0.0:
        return 0.0
    cos_ang = clamp(dot3(ba, bc) / (ba_len * bc_len), -1.0, 1.0)
    return math.degrees(math.acos(cos_ang))


def round_half_up(v: float) -> int:
    """Round to nearest integer with .5 going up (2.5 -> 3, not banker's 2)."""
    return int(math.floor(v + 0.5))
