# store/store_utils.py
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal('0.01')


def to_money(value):
    """
    Returns ``value`` as a Decimal rounded to whole cents.
    """
    if value is None:
        return Decimal('0.00')
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount):
    """
    Converts a money amount to the integer minor units the payment gateway expects.
    """
    return int(to_money(amount) * 100)


def get_cart_count(lines):
    """
    Returns the total item count across cart lines.
    """
    return sum(int(line.quantity) for line in lines)
