from django import template
from django.conf import settings

from store.store_utils import to_money

register = template.Library()


@register.filter
def money(value):
    try:
        return f"{to_money(value):.2f} {settings.CURRENCY_SYMBOL}"
    except (ArithmeticError, ValueError, TypeError):
        return f"0.00 {settings.CURRENCY_SYMBOL}"


@register.filter
def status_label(value):
    from store.models import OrderStatus

    try:
        return OrderStatus(value).label
    except ValueError:
        return value
