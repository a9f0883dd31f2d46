import math

import pytest

from cambio.services.money import parse_amount, quantize, round2, round_to_note


class TestRoundToNote:
    @pytest.mark.parametrize(
        "amount, expected",
        [
            (130500.0, 150000.0),
            (24999.0, 0.0),
            (25000.0, 50000.0),  # tie goes up
            (75000.0, 100000.0),  # tie goes up, not to even
            (-75000.0, -100000.0),  # tie goes away from zero
            (1_421_000.0, 1_400_000.0),
        ],
    )
    def test_guarani_notes(self, amount, expected):
        assert round_to_note(amount, 50000) == expected

    @pytest.mark.parametrize(
        "amount, expected",
        [(37.0, 50.0), (24.99, 0.0), (25.0, 50.0), (124.99, 100.0), (125.0, 150.0)],
    )
    def test_dollar_notes(self, amount, expected):
        assert round_to_note(amount, 50) == expected

    def test_result_is_aligned_and_nearest(self):
        for x in [0.0, 1.5, 12345.67, 49999.99, 50000.01, 987654.32, -31234.5, 2.5e7]:
            result = round_to_note(x, 50000)
            assert result % 50000 == 0
            assert abs(x - result) <= 25000
            # no other multiple is closer
            for other in (result - 50000, result + 50000):
                assert abs(x - other) >= abs(x - result)

    def test_note_size_must_be_positive(self):
        with pytest.raises(ValueError):
            round_to_note(100.0, 0)

    def test_amounts_past_default_decimal_precision(self):
        assert round_to_note(1e30, 50) == 1e30
        assert round_to_note(5e32, 50000) == 5e32

    @pytest.mark.parametrize("amount", [math.nan, math.inf, -math.inf])
    def test_non_finite_amount(self, amount):
        with pytest.raises(ValueError):
            round_to_note(amount, 50)


def test_round2_rounds_half_up_as_written():
    assert round2(2.675) == 2.68
    assert round2(113.44827586206897) == 113.45
    assert round2(-1.005) == -1.01


def test_quantize_zero_decimals():
    assert quantize(150000.0, 0) == 150000.0
    assert quantize(49.5, 0) == 50.0


def test_quantize_large_values():
    assert round2(1e30) == 1e30
    assert quantize(5.5e40, 2) == 5.5e40


class TestParseAmount:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2.000,00", 2000.0),
            ("1.500.000", 1500000.0),
            ("150.000", 150000.0),
            ("R$ 1.234,5", 1234.5),
            ("R$ 100,50", 100.5),
            ("0,00", 0.0),
            ("-5,00", -5.0),
            (12, 12.0),
            (37.5, 37.5),
        ],
    )
    def test_parses(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", ",", True, math.nan, math.inf])
    def test_unparseable_is_none(self, raw):
        assert parse_amount(raw) is None

    @pytest.mark.parametrize("raw", ["100.50", "1.50", "R$ 2.000.99", "-3.25"])
    def test_dot_before_two_digits_is_ambiguous(self, raw):
        assert parse_amount(raw) is None

    def test_too_long_to_be_a_float(self):
        assert parse_amount("9" * 400) is None
