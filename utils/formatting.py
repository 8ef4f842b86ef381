"""
Formatting utilities.
"""


def format_currency(amount: float, currency: str = "USD", decimals: int = 0) -> str:
    """
    Format an amount as currency.

    Args:
        amount: The amount in whole units.
        currency: Currency code (default USD).
        decimals: Number of decimal places.

    Returns:
        Formatted currency string.
    """
    symbols = {
        "USD": "$",
        "GBP": "£",
        "EUR": "€",
    }
    symbol = symbols.get(currency, currency + " ")
    return f"{symbol}{amount:,.{decimals}f}"


def format_percent(value: float, decimals: int = 1) -> str:
    """
    Format a fraction as a percentage.

    Args:
        value: The fraction (0.051 for 5.1%).
        decimals: Number of decimal places.

    Returns:
        Formatted percentage string.
    """
    return f"{value * 100:.{decimals}f}%"


def format_number(value: float) -> str:
    """Thousands-separated whole number."""
    return f"{value:,.0f}"


def format_miles(value: float) -> str:
    return f"{value:.2f} mi"


def format_rent(value: float, unit: str) -> str:
    """Asking rent with its unit, e.g. "$13.20 $/SF/yr"."""
    return f"${value:.2f} {unit}"
