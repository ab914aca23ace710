import itertools
from fractions import Fraction

import pytest

from util import (
    DecodeError, DuplicateXError, NonIntegralSecretError,
    decode_value, encode_value, interpolate_coeffs, lagrange_at_zero,
    parse_base, poly_eval,
)


def test_decode_base_cases():
    for b in (2, 7, 10, 16, 36):
        assert decode_value("0", b) == 0
    assert decode_value("10", 2) == 2
    assert decode_value("ff", 16) == 255
    assert decode_value("z", 36) == 35
    assert decode_value("111", 2) == 7


def test_decode_uppercase_folds():
    assert decode_value("FF", 16) == 255
    assert decode_value("aBc", 13) == decode_value("abc", 13)


def test_decode_past_64_bits():
    digits = "f" * 40
    assert decode_value(digits, 16) == 16 ** 40 - 1


def test_encode_decode_roundtrip():
    for n in (0, 1, 35, 36, 2 ** 63, 3 ** 200 + 17):
        for b in (2, 10, 36):
            assert decode_value(encode_value(n, b), b) == n


@pytest.mark.parametrize("digits,base", [
    ("", 10),
    ("g", 16),
    ("2", 2),
    ("1-2", 10),
    ("12", 1),
    ("12", 37),
])
def test_decode_rejects_malformed(digits, base):
    with pytest.raises(DecodeError):
        decode_value(digits, base)


def test_parse_base():
    assert parse_base("16") == 16
    assert parse_base(" 8 ") == 8
    assert parse_base(2) == 2
    for bad in ("x", "1.5", "\u00b2", "1\u0661", True, None, 1, "40"):
        with pytest.raises(DecodeError):
            parse_base(bad)


def test_lagrange_quadratic():
    # y = x^2 + 3
    assert lagrange_at_zero([(1, 4), (2, 7), (3, 12)]) == 3
    assert lagrange_at_zero([(2, 7), (3, 12), (6, 39)]) == 3


def test_lagrange_single_point():
    assert lagrange_at_zero([(5, 9)]) == 9


def test_lagrange_negative_and_huge_secret():
    coeffs = [-(2 ** 70) - 5, 3, -11, 7]
    xs = [-4, 0, 2, 9]
    points = [(x, poly_eval(coeffs, x)) for x in xs]
    assert lagrange_at_zero(points) == coeffs[0]

    coeffs = [2 ** 64 + 1, 2 ** 65, 1]
    points = [(x, poly_eval(coeffs, x)) for x in (1, 2, 3)]
    assert lagrange_at_zero(points) == 2 ** 64 + 1


def test_lagrange_order_independent():
    coeffs = [123456789, -4, 0, 2, 1]
    points = [(x, poly_eval(coeffs, x)) for x in (-3, 1, 4, 7, 10)]
    results = {lagrange_at_zero(list(p)) for p in itertools.permutations(points)}
    assert results == {123456789}


def test_exact_vs_truncate():
    # y = x^2: the individual terms are not integers for x = 1, 2, 4
    points = [(1, 1), (2, 4), (4, 16)]
    assert lagrange_at_zero(points) == 0
    # 8/3 -> 2, -16/2 -> -8, 32/6 -> 5
    assert lagrange_at_zero(points, division="truncate") == -1


def test_truncate_matches_exact_when_terms_integral():
    points = [(1, 4), (2, 7), (3, 12)]
    assert lagrange_at_zero(points, division="truncate") == 3


def test_duplicate_x_raises():
    with pytest.raises(DuplicateXError):
        lagrange_at_zero([(1, 4), (2, 7), (1, 5)])
    with pytest.raises(DuplicateXError):
        lagrange_at_zero([(1, 4), (1, 4)], division="truncate")


def test_non_integral_secret_raises():
    # line through (1, 0) and (3, 1) meets x=0 at -1/2
    with pytest.raises(NonIntegralSecretError):
        lagrange_at_zero([(1, 0), (3, 1)])


def test_bad_division_mode():
    with pytest.raises(ValueError):
        lagrange_at_zero([(1, 1)], division="floor")


def test_interpolate_coeffs():
    coeffs = interpolate_coeffs([(1, 4), (2, 7), (3, 12)])
    assert coeffs == [3, 0, 1]
    coeffs = interpolate_coeffs([(1, 0), (3, 1)])
    assert coeffs == [Fraction(-1, 2), Fraction(1, 2)]
