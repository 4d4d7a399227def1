"""Internal polynomial root solvers for the distance evaluator.

This is an internal module containing the closed-form solvers used by
quadratic_distance and quadratic_crossings. Not intended for public use.
"""

import math

TWO_PI_THIRDS = 2.0 * math.pi / 3.0


def cbrt(x: float) -> float:
    """Real cube root, defined for negative input."""
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


def solve_depressed_cubic(p: float, q: float) -> list[float]:
    """Find the real roots of x^3 + p*x + q = 0.

    The sign of 4p^3 + 27q^2 selects one of three non-overlapping branches:
    positive has one real root (Cardano's formula), negative has three
    (trigonometric form, which requires p < 0), zero has a repeated root.

    Args:
        p: Coefficient of the linear term
        q: Constant term

    Returns:
        Real roots; repeated roots are listed once
    """
    discriminant = 4.0 * p * p * p + 27.0 * q * q

    if p == 0.0 and q == 0.0:
        return [0.0]

    if discriminant > 0.0:
        a = -q / 2.0
        b = math.sqrt(discriminant / 108.0)
        return [cbrt(a + b) + cbrt(a - b)]

    if discriminant < 0.0:
        a = 2.0 * math.sqrt(-p / 3.0)
        cos_arg = (3.0 * q) / (2.0 * p) * math.sqrt(-3.0 / p)
        b = math.acos(max(-1.0, min(1.0, cos_arg))) / 3.0
        return [a * math.cos(b - TWO_PI_THIRDS * k) for k in range(3)]

    # Zero discriminant with p != 0: a simple root and a double root
    return [3.0 * q / p, -3.0 * q / (2.0 * p)]


def solve_cubic(a: float, b: float, c: float, d: float) -> list[float]:
    """Find the real roots of a*t^3 + b*t^2 + c*t + d = 0 for a != 0.

    Substitutes t = x - b/(3a) and delegates to solve_depressed_cubic.

    Args:
        a: Cubic coefficient, must be non-zero
        b: Quadratic coefficient
        c: Linear coefficient
        d: Constant term

    Returns:
        Real roots in t
    """
    shift = b / (3.0 * a)
    p = (3.0 * a * c - b * b) / (3.0 * a * a)
    q = (2.0 * b * b * b - 9.0 * a * b * c + 27.0 * a * a * d) / (27.0 * a * a * a)
    return [x - shift for x in solve_depressed_cubic(p, q)]
