from ..latency import Latency
from ..models import AvailabilitySlot
from ..repository import Repository, generate_id
from ..schemas import SlotInput


class AvailabilityService:
    def __init__(self, repo: Repository, latency: Latency):
        self.repo = repo
        self.latency = latency

    async def update(self, provider_id: str, slots: list[SlotInput]) -> list[AvailabilitySlot]:
        """
        Replace the provider's whole slot list. Callers resend every slot
        they want to keep; anything left out is dropped.
        """
        await self.latency()
        provider = self.repo.get_provider(provider_id)

        provider.availability_slots = [
            AvailabilitySlot(
                id=slot.id or generate_id("slot"),
                date=slot.date,
                time=slot.time,
                available=slot.available is not False,
            )
            for slot in slots
        ]

        self.repo.events.record(
            "availability.updated",
            {"providerId": provider_id, "slotCount": len(provider.availability_slots)},
        )
        return provider.availability_slots

    async def get(self, provider_id: str) -> list[AvailabilitySlot]:
        await self.latency()
        return self.repo.get_provider(provider_id).availability_slots
