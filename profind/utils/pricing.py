"""Price formatting in Guyanese dollars (GYD)."""


def format_gyd(amount: float) -> str:
    """Format an amount with thousands separators.

    Examples:
        >>> format_gyd(15000)
        '$15,000'
    """
    if float(amount).is_integer():
        return f"${int(amount):,}"
    return f"${amount:,.2f}".rstrip("0").rstrip(".")


def format_price_range(low: float, high: float) -> str:
    return f"{format_gyd(low)} - {format_gyd(high)}"


def format_gyd_compact(amount: float) -> str:
    """Short form for tight layouts: ``$15K``, ``$1.5M``."""
    if amount >= 1_000_000:
        return f"${amount / 1_000_000:.1f}M"
    if amount >= 1000:
        # Halves round up, as in the storefront UI
        return f"${int(amount / 1000 + 0.5)}K"
    return format_gyd(amount)
