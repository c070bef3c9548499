"""
Integer helpers for fraction arithmetic.
"""


def gcd(a: int, b: int) -> int:
    """
    Greatest common divisor, Euclid's algorithm.

    The result is non-negative if b != 0; gcd(a, 0) returns a as is, so gcd(0, 0) == 0.
    """
    if b == 0:
        return a
    a = -a if a < 0 else a
    b = -b if b < 0 else b
    return gcd(b, a % b)


def lcm(a: int, b: int) -> int:
    """Least common multiple; lcm(0, 0) raises ZeroDivisionError."""
    return a * b // gcd(a, b)
