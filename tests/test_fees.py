import pytest

from cambio.services.fees import PERCENT_FEE, fee_tier, service_fee


@pytest.mark.parametrize(
    "total, expected",
    [
        (0.0, 10.0),
        (100.0, 10.0),
        (250.00, 10.0),
        (250.01, 20.0),
        (1000.00, 20.0),
        (1000.01, 30.0),
        (2000.00, 30.0),
    ],
)
def test_flat_tiers_have_inclusive_upper_bounds(total, expected):
    assert service_fee(total) == expected


def test_percentage_tier_starts_just_above_2000():
    assert service_fee(2000.01) == 2000.01 * 0.015
    assert service_fee(10000.0) == pytest.approx(150.0)
    assert PERCENT_FEE == 0.015


@pytest.mark.parametrize(
    "total, tier",
    [(250.0, 0), (250.01, 1), (1000.0, 1), (1000.01, 2), (2000.0, 2), (2000.01, 3)],
)
def test_fee_tier(total, tier):
    assert fee_tier(total) == tier


def test_fee_never_decreases_as_total_grows():
    totals = [x * 12.5 for x in range(0, 400)]
    fees = [service_fee(t) for t in totals]
    assert fees == sorted(fees)
