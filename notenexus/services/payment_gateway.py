"""
Note Nexus Backend — Payment Gateway Adapter
==============================================

What:  Creates card payment intents and hands back the client secret the
       browser needs to confirm the payment.
How:   PaymentGateway is the abstract contract; StripeGateway implements it
       with the Stripe SDK's async API. Only connection drops and rate limits
       are retried (tenacity, exponential backoff + jitter). Every attempt
       of one logical call reuses the same idempotency key, so a retry after
       a lost response never creates a second intent.
Who:   Called by PaymentService.create_payment_intent().

Funds only move once the client confirms the intent; webhook confirmation is
not handled here.
"""

import logging
import time
import uuid
from abc import ABC, abstractmethod

import stripe
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from notenexus.config import settings
from notenexus.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)

# Transient failures worth another attempt; card errors, auth errors and
# invalid requests fail the same way every time.
RETRYABLE_ERRORS = (stripe.APIConnectionError, stripe.RateLimitError)


def to_minor_units(price: float) -> int:
    """Convert a price in currency units to the smallest unit (cents)."""
    return int(round(price * 100))


class PaymentGateway(ABC):
    """
    Contract for card payment providers.

    Implementations wrap every provider-specific failure in
    PaymentGatewayError so callers never import the provider's SDK.
    """

    @abstractmethod
    async def create_payment_intent(self, amount: int, currency: str) -> str:
        """
        Stage a card payment of `amount` minor units.

        Returns:
            The intent's client secret.

        Raises:
            PaymentGatewayError: the provider failed or is not configured.
        """
        ...

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when credentials are present (no network call)."""
        ...


class StripeGateway(PaymentGateway):
    """Stripe PaymentIntents with card as the only payment method type."""

    def __init__(self, api_key: str = ""):
        self._api_key = api_key

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def create_payment_intent(self, amount: int, currency: str) -> str:
        if not self.is_configured:
            raise PaymentGatewayError(context={"reason": "PAYMENT_SECRET_KEY is not set"})

        idempotency_key = str(uuid.uuid4())
        start_time = time.perf_counter()

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(RETRYABLE_ERRORS),
                stop=stop_after_attempt(settings.payment_retry_attempts),
                wait=wait_exponential_jitter(
                    initial=settings.payment_retry_min_wait,
                    max=settings.payment_retry_max_wait,
                    jitter=settings.payment_retry_jitter,
                ),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    intent = await stripe.PaymentIntent.create_async(
                        amount=amount,
                        currency=currency,
                        payment_method_types=["card"],
                        api_key=self._api_key,
                        idempotency_key=idempotency_key,
                    )
        except stripe.StripeError as e:
            logger.error(
                "[%s] Payment intent creation failed after %.0fms: %s",
                idempotency_key[:8],
                (time.perf_counter() - start_time) * 1000,
                str(e),
            )
            raise PaymentGatewayError(
                context={
                    "idempotency_key": idempotency_key,
                    "error_type": type(e).__name__,
                    "gateway_message": str(e),
                },
            ) from e

        logger.info(
            "[%s] Payment intent %s created for %d %s in %.0fms",
            idempotency_key[:8],
            intent.id,
            amount,
            currency,
            (time.perf_counter() - start_time) * 1000,
        )
        return intent.client_secret


payment_gateway: PaymentGateway = StripeGateway(api_key=settings.payment_secret_key)
