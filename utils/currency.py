from utils.constants import DEFAULT_CURRENCY_SYMBOL


def format_currency(amount: float, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format a float as currency string, e.g. '₹1,234.56'."""
    return f"{symbol}{amount:,.2f}"


def percentage_of(part: float, whole: float) -> float:
    """Return part as a percentage of whole, or 0.0 when whole is zero."""
    if whole == 0:
        return 0.0
    return part / whole * 100
