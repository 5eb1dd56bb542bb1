"""Display formatting for stored amounts.

Amounts are kept as unsigned integer cents and are never converted to
floating point; formatting only splits them into dollars and cents.
"""


def format_cents(cents: int) -> str:
    """Render an amount in cents as a grouped decimal string.

    Args:
        cents: Non-negative amount in minor currency units

    Returns:
        Dollars with thousands separators and exactly two fraction digits

    Raises:
        ValueError: If ``cents`` is negative

    Example:
        >>> format_cents(123456)
        '1,234.56'
        >>> format_cents(0)
        '0.00'
    """
    if cents < 0:
        raise ValueError(f"Amount must be non-negative, got {cents}")
    dollars, remainder = divmod(cents, 100)
    return f"{dollars:,}.{remainder:02d}"
