"""
Transactional email for orders, delivered through an outbox.

Workflows call ``enqueue_*`` inside their own transaction, so a notification
row exists if and only if the state change it describes was committed. After
commit one delivery attempt is made right away; anything that fails stays in
the outbox for ``manage.py dispatch_notifications`` to retry with backoff.

Delivery is best-effort from the caller's point of view: nothing in this
module raises into the order or status workflows.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from functools import partial

from anymail.message import AnymailMessage
from django.conf import settings
from django.db import transaction
from django.template.loader import render_to_string
from django.utils import timezone

from .models import Notification

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    sent: int = 0
    retried: int = 0
    failed: int = 0
    skipped: int = 0


def _base_context(user, order):
    return {
        "user": user,
        "order": order,
        "name": user.display_name,
        "site_url": settings.SITE_URL,
        "support_email": settings.SUPPORT_EMAIL,
        "support_phone": settings.SUPPORT_PHONE,
    }


# -------------------------------
# Rendering & sending
# -------------------------------
def _send_order_confirmation(order, lines, user):
    ctx = _base_context(user, order)
    ctx["lines"] = lines

    plain = render_to_string("store/emails/order_confirmation.txt", ctx)
    html = render_to_string("store/emails/order_confirmation.html", ctx)

    msg = AnymailMessage(
        subject=f"✅ Потвърждение на поръчка #{order.id} - SportZone",
        body=plain,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[user.email],
    )
    msg.attach_alternative(html, "text/html")
    msg.send()
    logger.info("Order confirmation sent to %s for order #%s", user.email, order.id)


def _send_status_change(user, order, old_status, new_status):
    ctx = _base_context(user, order)
    ctx["old_status"] = old_status
    ctx["new_status"] = new_status

    plain = render_to_string("store/emails/order_status_update.txt", ctx)
    html = render_to_string("store/emails/order_status_update.html", ctx)

    msg = AnymailMessage(
        subject=f"📋 Обновление на поръчка #{order.id} - SportZone",
        body=plain,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[user.email],
    )
    msg.attach_alternative(html, "text/html")
    msg.send()
    logger.info("Status update sent to %s for order #%s: %s -> %s", user.email, order.id, old_status, new_status)


def send_order_confirmation(order, lines, user):
    """Returns True if the confirmation was handed to the mail provider."""
    try:
        _send_order_confirmation(order, lines, user)
        return True
    except Exception:
        logger.exception("Order confirmation send failed for order %s", order.id)
        return False


def send_status_change(user, order, old_status, new_status):
    """Returns True if the status update was handed to the mail provider."""
    try:
        _send_status_change(user, order, old_status, new_status)
        return True
    except Exception:
        logger.exception("Status update send failed for order %s", order.id)
        return False


# -------------------------------
# Outbox
# -------------------------------
def _schedule_delivery(notification):
    if settings.NOTIFICATIONS_SEND_ON_COMMIT:
        transaction.on_commit(partial(deliver_by_id, notification.pk))


def enqueue_order_confirmation(order):
    user = order.user
    if not user.email:
        logger.info("User %s has no email, no confirmation for order #%s", user.pk, order.id)
        return None
    notification = Notification.objects.create(
        kind=Notification.ORDER_CONFIRMATION,
        order=order,
        recipient=user,
    )
    _schedule_delivery(notification)
    return notification


def enqueue_status_change(order, old_status, new_status):
    user = order.user
    if not user.email:
        logger.info("User %s has no email, no status update for order #%s", user.pk, order.id)
        return None
    notification = Notification.objects.create(
        kind=Notification.STATUS_CHANGE,
        order=order,
        recipient=user,
        payload={"old_status": old_status, "new_status": new_status},
    )
    _schedule_delivery(notification)
    return notification


def _retry_delay(attempts):
    return timedelta(seconds=settings.NOTIFICATION_RETRY_BACKOFF * (2 ** max(attempts - 1, 0)))


def _claim(notification):
    """Bumps the attempt counter unless another worker got there first."""
    claimed = Notification.objects.filter(
        pk=notification.pk,
        state=Notification.PENDING,
        attempts=notification.attempts,
    ).update(attempts=notification.attempts + 1)
    if claimed:
        notification.attempts += 1
    return bool(claimed)


def deliver(notification):
    """
    Sends one outbox entry and records the outcome.

    On failure the entry is rescheduled with exponential backoff, or marked
    failed once ``NOTIFICATION_MAX_ATTEMPTS`` is reached. Returns True only
    when the message was sent by this call.
    """
    if notification.state != Notification.PENDING or not _claim(notification):
        return False

    order = notification.order
    user = notification.recipient
    try:
        if notification.kind == Notification.ORDER_CONFIRMATION:
            _send_order_confirmation(order, list(order.items.all()), user)
        else:
            _send_status_change(
                user,
                order,
                notification.payload.get("old_status"),
                notification.payload.get("new_status"),
            )
    except Exception as e:
        logger.exception(
            "Delivery of %s for order #%s failed (attempt %s)",
            notification.kind, order.id, notification.attempts,
        )
        notification.last_error = str(e) or e.__class__.__name__
        if notification.attempts >= settings.NOTIFICATION_MAX_ATTEMPTS:
            notification.state = Notification.FAILED
        else:
            notification.next_attempt_at = timezone.now() + _retry_delay(notification.attempts)
        notification.save(update_fields=["state", "last_error", "next_attempt_at"])
        return False

    notification.state = Notification.SENT
    notification.sent_at = timezone.now()
    notification.last_error = ""
    notification.save(update_fields=["state", "sent_at", "last_error"])
    return True


def deliver_by_id(notification_id):
    try:
        notification = (
            Notification.objects.select_related("order", "recipient")
            .filter(pk=notification_id, state=Notification.PENDING)
            .first()
        )
        if notification is not None:
            deliver(notification)
    except Exception:
        logger.exception("Immediate delivery of notification %s failed", notification_id)


def dispatch_pending(limit=None):
    due = (
        Notification.objects.select_related("order", "recipient")
        .filter(state=Notification.PENDING, next_attempt_at__lte=timezone.now())
    )
    if limit:
        due = due[:limit]

    result = DispatchResult()
    for notification in list(due):
        attempts = notification.attempts
        if deliver(notification):
            result.sent += 1
        elif notification.attempts == attempts:
            result.skipped += 1
        elif notification.state == Notification.FAILED:
            result.failed += 1
        else:
            result.retried += 1
    return result
