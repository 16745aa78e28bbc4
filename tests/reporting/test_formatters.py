import pytest

from hr_analytics.reporting.formatters import format_currency, format_signed_currency


@pytest.mark.parametrize(
    "value, expected",
    [
        (1_234_567, "1.2M€"),
        (-2_500_000, "-2.5M€"),
        (15_000, "15k€"),
        (-3_200, "-3k€"),
        (850, "850€"),
        (0, "0€"),
        (float("nan"), "0€"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_signed_currency():
    assert format_signed_currency(3_200) == "+3k€"
    assert format_signed_currency(-3_200) == "-3k€"
