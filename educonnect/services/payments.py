"""Stripe payment intents for class enrollment."""

import logging
from decimal import ROUND_HALF_UP, Decimal

import stripe

from educonnect.core import config

logger = logging.getLogger(__name__)


class PaymentProviderError(Exception):
    """Raised when the payment provider cannot create an intent."""


def get_stripe_client():
    """Initialize the Stripe module with the configured secret key."""
    if not config.STRIPE_SECRET_KEY:
        raise PaymentProviderError("Stripe secret key not configured (STRIPE_SECRET_KEY)")

    stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe


def to_minor_units(price: float) -> int:
    """Convert a decimal price to integer cents, rounding halves up."""
    cents = Decimal(str(price)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def create_payment_intent(amount: int, metadata: dict | None = None) -> str:
    """Create a card-only payment intent and return its client secret."""
    stripe_client = get_stripe_client()
    try:
        intent = stripe_client.PaymentIntent.create(
            amount=amount,
            currency=config.PAYMENT_CURRENCY,
            payment_method_types=["card"],
            metadata=metadata or {},
        )
    except stripe.StripeError as exc:
        logger.error("Stripe rejected payment intent for amount %s: %s", amount, exc)
        raise PaymentProviderError(str(exc)) from exc

    logger.info("Created payment intent %s for amount %s", intent.id, amount)
    return intent.client_secret
