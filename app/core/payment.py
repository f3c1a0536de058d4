import stripe
import structlog
from typing import Optional
from fastapi.concurrency import run_in_threadpool

from app.core.exceptions import PaymentProviderException

"Stripe支付客户端"

logger = structlog.get_logger()


class PaymentClient:
    """Stripe支付意图客户端"""

    def __init__(
            self,
            api_key: Optional[str],
            default_currency: str = "usd",
            force_currency: Optional[str] = None
    ):
        self.api_key = api_key
        self.default_currency = default_currency
        self.force_currency = force_currency

    def resolve_currency(self, currency: Optional[str]) -> str:
        """确定实际发送给Stripe的币种"""
        if self.force_currency:
            return self.force_currency.lower()
        return (currency or self.default_currency).lower()

    async def create_payment_intent(self, amount: int, currency: Optional[str] = None) -> str:
        """创建支付意图，返回客户端确认密钥"""
        if not self.api_key:
            logger.error("Stripe密钥未配置")
            raise PaymentProviderException(
                "Failed to create payment intent",
                error="Stripe secret key is not configured"
            )

        actual_currency = self.resolve_currency(currency)
        try:
            payment_intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                api_key=self.api_key,
                amount=amount,
                currency=actual_currency,
                automatic_payment_methods={
                    "enabled": True,
                    "allow_redirects": "never",
                },
            )
        except stripe.StripeError as e:
            logger.error("Stripe创建支付意图失败", amount=amount, currency=actual_currency, error=str(e))
            raise PaymentProviderException("Failed to create payment intent", error=str(e)) from e

        logger.info("支付意图创建成功", payment_intent_id=payment_intent.id, amount=amount, currency=actual_currency)
        return payment_intent.client_secret
