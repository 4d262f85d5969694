"""
Display helpers for amounts, ranks and avatars.
"""
from urllib.parse import quote

from .constants import AVATAR_URL_TEMPLATE, CURRENCY_SYMBOL, MAX_RANK


def fmt_currency(amount: float) -> str:
    """
    Format an amount in euros.

    Example:
        >>> fmt_currency(12.5)
        '€12.50'
        >>> fmt_currency(-3)
        '-€3.00'
    """
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):.2f}"


def fmt_rank(rank: float) -> str:
    """Format a rank on the ten point scale, e.g. ``7.5/10``."""
    return f"{rank:.1f}/{MAX_RANK:.0f}"


def fmt_change(change: float) -> str:
    """Format a signed rank change, e.g. ``+0.5`` or ``-0.5``."""
    prefix = "+" if change > 0 else ""
    return f"{prefix}{change:.1f}"


def avatar_url(name: str) -> str:
    """Generated avatar URL keyed by the player's name."""
    return AVATAR_URL_TEMPLATE.format(name=quote(name, safe=""))
