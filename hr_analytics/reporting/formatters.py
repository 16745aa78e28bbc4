# hr_analytics/reporting/formatters.py
"""Display formatting for amounts quoted in advisory text."""

from hr_analytics.utils.stats import finite_or_zero

__all__ = ["format_currency", "format_signed_currency"]


def format_currency(value: float, symbol: str = "€") -> str:
    """Compact amount: ``1.2M€`` from a million up, ``15k€`` from a thousand up, else ``850€``."""
    value = finite_or_zero(value)
    magnitude = abs(value)
    if magnitude >= 1_000_000:
        return f"{value / 1_000_000:.1f}M{symbol}"
    if magnitude >= 1_000:
        return f"{value / 1_000:.0f}k{symbol}"
    return f"{value:.0f}{symbol}"


def format_signed_currency(value: float, symbol: str = "€") -> str:
    """Like format_currency but always carrying a sign."""
    text = format_currency(value, symbol)
    return text if text.startswith("-") else f"+{text}"
