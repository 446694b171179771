"""
Per-user cart store.

One line per (user, product); adding a product that is already in the cart
merges into the existing line. Lines are always read joined with the current
product, so displayed prices follow the catalog.
"""
import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F

from .errors import NotFound, ValidationFailed
from .models import CartItem
from .store_utils import to_money

logger = logging.getLogger(__name__)

MAX_LINE_QUANTITY = 999


def _check_quantity(quantity):
    if quantity is None or int(quantity) < 1:
        raise ValidationFailed("Quantity must be at least 1")
    if int(quantity) > MAX_LINE_QUANTITY:
        raise ValidationFailed(f"Quantity must be at most {MAX_LINE_QUANTITY}")
    return int(quantity)


def list_lines(user, for_update=False):
    lines = CartItem.objects.filter(user=user).select_related('product')
    if for_update:
        lines = lines.select_for_update(of=('self',))
    return list(lines)


def cart_total(lines):
    """Sum of quantity × effective price over ``lines``, in whole cents."""
    total = Decimal('0.00')
    for line in lines:
        total += line.product.effective_price * line.quantity
    return to_money(total)


def add_item(user, product, quantity=1):
    quantity = _check_quantity(quantity)
    with transaction.atomic():
        line, created = CartItem.objects.select_for_update().get_or_create(
            user=user,
            product=product,
            defaults={'quantity': quantity},
        )
        if not created:
            _check_quantity(line.quantity + quantity)
            line.quantity = F('quantity') + quantity
            line.save(update_fields=['quantity'])
            line.refresh_from_db(fields=['quantity'])
    logger.info("Cart %s: product %s now x%s", user.pk, product.pk, line.quantity)
    return line


def _get_line(user, line_id):
    line = CartItem.objects.filter(pk=line_id, user=user).select_related('product').first()
    if line is None:
        raise NotFound("Cart item not found")
    return line


def update_item(user, line_id, quantity):
    quantity = _check_quantity(quantity)
    line = _get_line(user, line_id)
    line.quantity = quantity
    line.save(update_fields=['quantity'])
    return line


def remove_item(user, line_id):
    line = _get_line(user, line_id)
    line.delete()


def clear(user):
    deleted, _ = CartItem.objects.filter(user=user).delete()
    return deleted
