from .. import config
from ..errors import payment_not_found
from ..events import utcnow_iso
from ..latency import Latency
from ..models import Payment
from ..repository import Repository, generate_id


def receipt_url(payment_token: str) -> str:
    return f"/receipts/{payment_token}.json"


class PaymentService:
    """Sandbox payments: every charge succeeds against a fixed test card."""

    def __init__(self, repo: Repository, latency: Latency):
        self.repo = repo
        self.latency = latency

    async def settle(self, booking_id: str, amount: float) -> Payment:
        await self.latency()

        payment_token = generate_id("PAY-SANDBOX")
        payment = Payment(
            payment_token=payment_token,
            booking_id=booking_id,
            amount=amount,
            currency=config.PAYMENT_CURRENCY,
            paid_at=utcnow_iso(),
            status="completed",
            e_receipt_url=receipt_url(payment_token),
            card_last4=config.SANDBOX_CARD_LAST4,
            card_brand=config.SANDBOX_CARD_BRAND,
        )
        self.repo.add_payment(payment)

        booking = self.repo.find_booking(booking_id)
        if booking:
            booking.payment_status = "paid"
            booking.payment_token = payment_token
            booking.status = "confirmed"

        self.repo.events.record(
            "payment.completed",
            {
                "paymentToken": payment_token,
                "bookingId": booking_id,
                "amount": amount,
                "bookingFound": booking is not None,
            },
        )
        return payment

    async def receipt(self, payment_token: str) -> Payment:
        await self.latency()
        payment = self.repo.find_payment(payment_token)
        if not payment:
            raise payment_not_found(payment_token)
        return payment
