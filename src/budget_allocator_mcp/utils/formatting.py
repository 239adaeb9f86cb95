"""
Default amount formatting.

The engine never interprets hide flags; it only passes them here.
"""

HIDDEN_PLACEHOLDER = "••••"

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
}


def format_amount(amount: float, currency_code: str, hidden: bool = False) -> str:
    """
    Format an amount for display.

    Args:
        amount: Amount to format
        currency_code: Three-letter currency code
        hidden: Mask the amount entirely

    Returns:
        e.g. "$1,234.50", "-€12.00", "CHF 99.90" or the hidden placeholder
    """
    if hidden:
        return HIDDEN_PLACEHOLDER

    sign = "-" if amount < 0 else ""
    body = f"{abs(amount):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency_code)
    if symbol:
        return f"{sign}{symbol}{body}"
    return f"{sign}{currency_code} {body}"
