#!/usr/bin/env python3
# util.py
# Core utilities: digit decoding, exact polynomial ops, Lagrange at zero.

import string
from fractions import Fraction
from typing import List, Sequence, Tuple

Point = Tuple[int, int]

DIGITS = string.digits + string.ascii_lowercase
MAX_BASE = len(DIGITS)

# ---------- Errors ----------

class DecodeError(ValueError):
    """Malformed digit string or base."""

class DuplicateXError(ValueError):
    """Two selected points share an x coordinate."""

class NonIntegralSecretError(ValueError):
    """Exact interpolation produced a non-integer constant term."""

# ---------- Value decoding ----------

def parse_base(raw) -> int:
    # bool is an int subclass; "base": true is not a base
    if isinstance(raw, bool):
        raise DecodeError(f"bad base {raw!r}")
    if isinstance(raw, int):
        base = raw
    elif isinstance(raw, str) and raw.strip().isascii() and raw.strip().isdigit():
        base = int(raw.strip())
    else:
        raise DecodeError(f"bad base {raw!r}")
    if not 2 <= base <= MAX_BASE:
        raise DecodeError(f"base must be in [2, {MAX_BASE}]; got {base}")
    return base

def digit_value(c: str) -> int:
    if "0" <= c <= "9":
        return ord(c) - ord("0")
    if "a" <= c <= "z":
        return ord(c) - ord("a") + 10
    raise DecodeError(f"unsupported digit {c!r}")

def decode_value(digits: str, base: int) -> int:
    """Exact integer value of `digits` read in `base` (letters case-insensitive)."""
    if not 2 <= base <= MAX_BASE:
        raise DecodeError(f"base must be in [2, {MAX_BASE}]; got {base}")
    if not digits:
        raise DecodeError("empty digit string")
    r = 0
    for c in digits.lower():
        d = digit_value(c)
        if d >= base:
            raise DecodeError(f"digit {c!r} out of range for base {base}")
        r = r * base + d
    return r

def encode_value(n: int, base: int) -> str:
    if n < 0:
        raise ValueError("only non-negative values can be encoded")
    if not 2 <= base <= MAX_BASE:
        raise ValueError(f"base must be in [2, {MAX_BASE}]; got {base}")
    if n == 0:
        return "0"
    out = []
    while n:
        n, d = divmod(n, base)
        out.append(DIGITS[d])
    return "".join(reversed(out))

# ---------- Exact polynomial utils ----------

def poly_eval(coeffs: Sequence, x):
    y = 0
    for c in reversed(coeffs):
        y = y * x + c
    return y

def poly_mul(a: List, b: List) -> List:
    out = [0] * (len(a) + len(b) - 1)
    for i, ai in enumerate(a):
        for j, bj in enumerate(b):
            out[i + j] += ai * bj
    return out

def check_distinct_x(points: Sequence[Point]) -> None:
    seen = set()
    for x, _ in points:
        if x in seen:
            raise DuplicateXError(f"duplicate x coordinate {x} in selected points")
        seen.add(x)

def interpolate_coeffs(points: Sequence[Point]) -> List[Fraction]:
    """Coefficients [c0, c1, ..., c_{k-1}] of the unique degree<k polynomial
    through the k points, as exact fractions."""
    check_distinct_x(points)
    k = len(points)
    coeffs = [Fraction(0)] * k
    for i, (xi, yi) in enumerate(points):
        num = [1]
        denom = 1
        for m, (xm, _) in enumerate(points):
            if m == i: continue
            num = poly_mul(num, [-xm, 1])  # (x - x_m)
            denom *= xi - xm
        for d, c in enumerate(num):
            coeffs[d] += Fraction(yi * c, denom)
    return coeffs

# ---------- Lagrange at zero ----------

def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q

def basis_at_zero(points: Sequence[Point], j: int) -> Tuple[int, int]:
    """Numerator and denominator of L_j(0) = prod x_i / prod (x_i - x_j), i != j."""
    xj = points[j][0]
    num, den = 1, 1
    for i, (xi, _) in enumerate(points):
        if i == j: continue
        num *= xi
        den *= xi - xj
    return num, den

def lagrange_at_zero(points: Sequence[Point], division: str = "exact") -> int:
    """
    P(0) for the unique degree-(k-1) polynomial through the k points.

    division="exact"    sum the terms as fractions; the total must be an
                        integer, else NonIntegralSecretError.
    division="truncate" divide each term y_j*num/den with truncation toward
                        zero and sum the integer parts.
    """
    if division not in ("exact", "truncate"):
        raise ValueError(f"unknown division mode {division!r}")
    if not points:
        raise ValueError("need at least one point")
    check_distinct_x(points)

    if division == "truncate":
        secret = 0
        for j, (_, yj) in enumerate(points):
            num, den = basis_at_zero(points, j)
            secret += _trunc_div(yj * num, den)
        return secret

    total = Fraction(0)
    for j, (_, yj) in enumerate(points):
        num, den = basis_at_zero(points, j)
        total += Fraction(yj * num, den)
    if total.denominator != 1:
        raise NonIntegralSecretError(f"constant term is not an integer: {total}")
    return total.numerator
