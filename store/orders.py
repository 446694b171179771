"""
Checkout and order status workflows.

``place_order`` turns the caller's cart into an order in one transaction:
the order, its lines, the cart clear and the confirmation outbox entry are
committed together or not at all. Totals are always computed here from the
current catalog prices, never taken from the client.

``set_status`` lets an admin move an order to any label of the fixed status
set and queues a notification when the label actually changes.
"""
import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction
from django.db.models import Prefetch

from . import cart, notifications
from .errors import EmptyCartError, NotFound, PermissionDenied, ValidationFailed
from .models import Order, OrderItem, OrderStatus

logger = logging.getLogger(__name__)


@dataclass
class PlacedOrder:
    order: Order
    created: bool


def _existing_order(user, idempotency_key):
    if not idempotency_key:
        return None
    return Order.objects.filter(user=user, idempotency_key=idempotency_key).first()


# -------------------------------
# CHECKOUT
# -------------------------------
def place_order(ctx, shipping, idempotency_key=None):
    """
    Places an order for everything in the caller's cart.

    ``shipping`` is a validated ``ShippingDetails``. A repeated call with the
    same ``idempotency_key`` returns the first order with ``created=False``.
    Raises ``EmptyCartError`` when the cart has no lines.
    """
    user = ctx.require_user()

    existing = _existing_order(user, idempotency_key)
    if existing is not None:
        logger.info("Order #%s replayed for user %s (key %s)", existing.id, user.pk, idempotency_key)
        return PlacedOrder(existing, created=False)

    try:
        with transaction.atomic():
            lines = cart.list_lines(user, for_update=True)
            if not lines:
                raise EmptyCartError()

            total = cart.cart_total(lines)
            order = Order.objects.create(
                user=user,
                total=total,
                status=OrderStatus.PENDING,
                address=shipping.address,
                city=shipping.city,
                phone=shipping.phone,
                idempotency_key=idempotency_key or None,
            )
            OrderItem.objects.bulk_create([
                OrderItem(
                    order=order,
                    product=line.product,
                    product_name=line.product.name,
                    quantity=line.quantity,
                    price=line.product.effective_price,
                )
                for line in lines
            ])

            cart.clear(user)
            notifications.enqueue_order_confirmation(order)
    except IntegrityError:
        # Lost the race against a concurrent retry with the same key
        existing = _existing_order(user, idempotency_key)
        if existing is None:
            raise
        logger.info("Order #%s replayed for user %s after a concurrent submit", existing.id, user.pk)
        return PlacedOrder(existing, created=False)

    logger.info("Order #%s placed by user %s: %s lines, total %s", order.id, user.pk, len(lines), total)
    return PlacedOrder(order, created=True)


# -------------------------------
# STATUS
# -------------------------------
def set_status(ctx, order_id, new_status):
    """
    Moves an order to ``new_status``. Any label of the fixed set is accepted
    from any current label; setting the current label again changes nothing.
    """
    actor = ctx.require_admin()
    try:
        new_status = OrderStatus(new_status)
    except ValueError:
        raise ValidationFailed(f"Invalid status: {new_status}")

    with transaction.atomic():
        order = Order.objects.select_for_update(of=('self',)).select_related('user').filter(pk=order_id).first()
        if order is None:
            raise NotFound("Order not found")

        old_status = order.status
        if old_status == new_status:
            return order

        order.status = new_status.value
        order.save(update_fields=['status', 'updated_at'])
        notifications.enqueue_status_change(order, old_status, new_status.value)

    logger.info("Order #%s status %s -> %s by %s", order.id, old_status, new_status.value, actor.pk)
    return order


# -------------------------------
# READS
# -------------------------------
def _with_lines(queryset):
    return queryset.prefetch_related(
        Prefetch('items', queryset=OrderItem.objects.select_related('product'))
    )


def orders_for(ctx):
    user = ctx.require_user()
    return list(Order.objects.filter(user=user))


def all_orders(ctx):
    ctx.require_admin()
    return list(Order.objects.select_related('user'))


def get_order(ctx, order_id):
    """Returns an order with its lines; only its owner or an admin may read it."""
    user = ctx.require_user()
    order = _with_lines(Order.objects.filter(pk=order_id)).first()
    if order is None:
        raise NotFound("Order not found")
    if order.user_id != user.pk and not ctx.is_admin:
        raise PermissionDenied()
    return order
