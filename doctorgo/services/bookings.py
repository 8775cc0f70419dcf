from ..errors import ValidationFailed, booking_not_found
from ..events import utcnow_iso
from ..latency import Latency
from ..models import Booking
from ..repository import Repository, generate_id


class BookingService:
    def __init__(self, repo: Repository, latency: Latency):
        self.repo = repo
        self.latency = latency

    def _reserve_slot(self, provider_id: str, slot_id: str):
        """
        Mark the slot as taken. Unknown providers or slots are skipped;
        a slot that is already taken is rejected.
        """
        provider = self.repo.find_provider(provider_id)
        if not provider:
            return
        slot = next((s for s in provider.availability_slots if s.id == slot_id), None)
        if not slot:
            return
        if not slot.available:
            raise ValidationFailed(
                "Slot not available",
                "SLOT_UNAVAILABLE",
                {"providerId": provider_id, "slotId": slot_id},
            )
        slot.available = False

    async def create(
        self,
        provider_id: str,
        slot_id: str,
        user_id: str,
        payment_token: str | None = None,
    ) -> Booking:
        await self.latency()

        self._reserve_slot(provider_id, slot_id)

        paid = bool(payment_token)
        booking = Booking(
            booking_id=generate_id("BK"),
            provider_id=provider_id,
            slot_id=slot_id,
            user_id=user_id,
            timestamp=utcnow_iso(),
            status="confirmed" if paid else "pending",
            payment_status="paid" if paid else "unpaid",
            payment_token=payment_token or None,
        )
        self.repo.add_booking(booking)

        self.repo.events.record(
            "booking.created",
            {
                "bookingId": booking.booking_id,
                "providerId": provider_id,
                "slotId": slot_id,
                "userId": user_id,
                "status": booking.status,
            },
        )
        return booking

    async def list_for_user(self, user_id: str) -> list[Booking]:
        await self.latency()
        return [b for b in self.repo.bookings if b.user_id == user_id]

    async def get(self, booking_id: str) -> Booking:
        await self.latency()
        booking = self.repo.find_booking(booking_id)
        if not booking:
            raise booking_not_found(booking_id)
        return booking
