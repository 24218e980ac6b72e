"""Monetary amounts: two-place decimals, never floats."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
# NUMERIC(10, 2): eight digits before the decimal point
MAX_PRICE = Decimal("99999999.99")


def to_money(value) -> Decimal:
    """Quantize ``value`` to cents. Floats go through ``str`` to avoid binary noise."""
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def parse_price(value) -> tuple[Decimal | None, list[str]]:
    """Return ``(price, errors)`` for a raw price input."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None, ["Price is required"]
    if isinstance(value, bool):
        return None, ["Price must be a number"]

    try:
        price = to_money(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, ValueError, TypeError):
        return None, ["Price must be a number"]

    if not price.is_finite():
        return None, ["Price must be a number"]
    if price <= 0:
        return None, ["Price must be greater than 0"]
    if price > MAX_PRICE:
        return None, [f"Price must not exceed {MAX_PRICE}"]
    return price, []
