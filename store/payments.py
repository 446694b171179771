"""
Payment-intent gateway.

Thin wrapper around Stripe's PaymentIntent API. The amount always comes from
the server-side cart total and is sent in minor units.
"""
import logging

import stripe
from django.conf import settings

from .errors import PaymentError, ValidationFailed
from .store_utils import to_minor_units

logger = logging.getLogger(__name__)

MOCK_CLIENT_SECRET = "mock_client_secret"


def create_payment_intent(amount, metadata=None):
    """Creates a card PaymentIntent for ``amount`` and returns its client secret."""
    minor_units = to_minor_units(amount)
    if minor_units <= 0:
        raise ValidationFailed("Invalid amount")

    if not settings.STRIPE_SECRET_KEY:
        # Local development without a Stripe account
        logger.warning("STRIPE_SECRET_KEY not set, returning a mock client secret for %s", amount)
        return MOCK_CLIENT_SECRET

    try:
        intent = stripe.PaymentIntent.create(
            api_key=settings.STRIPE_SECRET_KEY,
            amount=minor_units,
            currency=settings.STRIPE_CURRENCY,
            payment_method_types=["card"],
            metadata={"integration_check": "accept_a_payment", **(metadata or {})},
        )
    except stripe.StripeError as e:
        logger.exception("Error creating payment intent for %s %s", minor_units, settings.STRIPE_CURRENCY)
        raise PaymentError() from e

    logger.info("Created payment intent %s for %s %s", intent.id, minor_units, settings.STRIPE_CURRENCY)
    return intent.client_secret
