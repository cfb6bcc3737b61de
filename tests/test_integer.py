"""Tests for signed arbitrary-precision integers."""

import random

import pytest

from fieldcalc.common import Integer, InvalidDigitError, InvalidIntegerError, Natural


def integer(value: int) -> Integer:
    return Integer.from_int(value)


class TestConstruction:

    def test_parse_positive_and_negative(self) -> None:
        assert int(Integer.parse("42")) == 42
        assert int(Integer.parse("-42")) == -42

    def test_negative_zero_is_normalised(self) -> None:
        zero = Integer.parse("-0")
        assert not zero.is_negative
        assert zero.to_decimal_string() == "0"
        assert zero == Integer()

    def test_explicit_negative_zero_is_normalised(self) -> None:
        assert not Integer(True, Natural()).is_negative

    @pytest.mark.parametrize("text", ["", "-"])
    def test_malformed_text(self, text: str) -> None:
        with pytest.raises(InvalidIntegerError):
            Integer.parse(text)

    def test_bad_digit(self) -> None:
        with pytest.raises(InvalidDigitError):
            Integer.parse("-1x")

    def test_render(self) -> None:
        assert str(integer(-1234567890123456789)) == "-1234567890123456789"


class TestArithmetic:

    @pytest.mark.parametrize("a, b", [
        (7, 5), (7, -5), (-7, 5), (-7, -5),
        (5, -7), (-5, 7), (5, -5), (0, -3), (-3, 0),
    ])
    def test_add_sign_cases(self, a: int, b: int) -> None:
        result = integer(a).add(integer(b))
        assert int(result) == a + b
        if a + b == 0:
            assert not result.is_negative

    @pytest.mark.parametrize("a, b", [(7, 5), (5, 7), (-7, -5), (-5, 7), (0, 4)])
    def test_subtract(self, a: int, b: int) -> None:
        assert int(integer(a).subtract(integer(b))) == a - b

    @pytest.mark.parametrize("a, b", [(6, 7), (-6, 7), (6, -7), (-6, -7), (-6, 0)])
    def test_multiply_sign_is_xor(self, a: int, b: int) -> None:
        result = integer(a).multiply(integer(b))
        assert int(result) == a * b
        assert result.is_negative == (a * b < 0)

    def test_divide_keeps_dividend_sign(self) -> None:
        assert int(integer(-7).divide(Natural.from_int(2))) == -3
        assert int(integer(7).divide(Natural.from_int(2))) == 3

    def test_divide_to_zero_is_not_negative(self) -> None:
        result = integer(-1).divide(Natural.from_int(2))
        assert result.is_zero
        assert not result.is_negative

    def test_negate(self) -> None:
        assert integer(5).negate() == integer(-5)
        assert -integer(0) == integer(0)

    def test_random_against_int(self) -> None:
        rng = random.Random(7)
        for _ in range(40):
            a = rng.getrandbits(90) * rng.choice([1, -1])
            b = rng.getrandbits(90) * rng.choice([1, -1])
            assert int(integer(a) + integer(b)) == a + b
            assert int(integer(a) - integer(b)) == a - b
            assert int(integer(a) * integer(b)) == a * b
