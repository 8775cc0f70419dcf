import random
from typing import Callable

from .. import config
from ..errors import Conflict
from ..events import utcnow_iso
from ..latency import Latency
from ..models import QueueEntry
from ..repository import Repository, generate_id

# Decides whether a waiting entry moves up one place when its status is polled
Tick = Callable[[QueueEntry], bool]


def random_tick(probability: float = config.QUEUE_ADVANCE_PROBABILITY, rng: random.Random | None = None) -> Tick:
    rng = rng or random.Random()

    def tick(entry: QueueEntry) -> bool:
        return rng.random() < probability

    return tick


def never_tick(entry: QueueEntry) -> bool:
    return False


class QueueService:
    """
    Virtual walk-in queue per provider.

    Waiting entries always hold positions 1..N without gaps; every change to
    the waiting set renumbers it. Invited and completed entries keep the
    position they had when they left the waiting set.
    """

    def __init__(
        self,
        repo: Repository,
        latency: Latency,
        tick: Tick | None = None,
        minutes_per_patient: int = config.MINUTES_PER_PATIENT,
    ):
        self.repo = repo
        self.latency = latency
        self.tick = tick or random_tick()
        self.minutes_per_patient = minutes_per_patient

    def _set_position(self, entry: QueueEntry, position: int):
        entry.position = position
        entry.estimated_wait = position * self.minutes_per_patient

    def _renumber(self, ordered: list[QueueEntry]):
        for index, entry in enumerate(ordered, start=1):
            self._set_position(entry, index)

    async def join(self, provider_id: str, user_id: str) -> QueueEntry:
        await self.latency()
        self.repo.get_provider(provider_id)

        position = self.repo.queue_length(provider_id) + 1
        entry = QueueEntry(
            token=generate_id("QT"),
            provider_id=provider_id,
            user_id=user_id,
            position=position,
            estimated_wait=position * self.minutes_per_patient,
            joined_at=utcnow_iso(),
            status="waiting",
        )
        self.repo.add_queue_entry(entry)

        self.repo.events.record(
            "queue.joined",
            {"token": entry.token, "providerId": provider_id, "userId": user_id, "position": position},
        )
        return entry

    async def status(self, token: str) -> QueueEntry:
        await self.latency()
        entry = self.repo.get_queue_entry(token)

        if entry.status == "waiting" and entry.position > 1 and self.tick(entry):
            waiting = self.repo.waiting_entries(entry.provider_id)
            index = next(i for i, q in enumerate(waiting) if q.token == token)
            if index > 0:
                # swap with the entry ahead so the ranking stays dense
                waiting[index - 1], waiting[index] = waiting[index], waiting[index - 1]
            self._renumber(waiting)

        return entry

    async def invite_next(self, provider_id: str) -> QueueEntry | None:
        await self.latency()
        self.repo.get_provider(provider_id)

        waiting = self.repo.waiting_entries(provider_id)
        if not waiting:
            return None

        invited, remaining = waiting[0], waiting[1:]
        invited.status = "invited"
        self._renumber(remaining)

        self.repo.events.record(
            "queue.invited",
            {"token": invited.token, "providerId": provider_id, "userId": invited.user_id},
        )
        return invited

    async def postpone(self, token: str) -> QueueEntry:
        await self.latency()
        entry = self.repo.get_queue_entry(token)

        if entry.status not in ("waiting", "invited"):
            raise Conflict(
                f"Cannot postpone a {entry.status} queue entry",
                "INVALID_QUEUE_STATE",
                {"token": token, "status": entry.status},
            )

        others = [q for q in self.repo.waiting_entries(entry.provider_id) if q.token != token]
        entry.status = "waiting"
        self._renumber(others + [entry])

        self.repo.events.record(
            "queue.postponed",
            {"token": token, "providerId": entry.provider_id, "position": entry.position},
        )
        return entry

    async def cancel(self, token: str) -> QueueEntry:
        await self.latency()
        entry = self.repo.remove_queue_entry(token)
        entry.status = "cancelled"
        self._renumber(self.repo.waiting_entries(entry.provider_id))

        self.repo.events.record(
            "queue.cancelled",
            {"token": token, "providerId": entry.provider_id, "userId": entry.user_id},
        )
        return entry

    async def complete(self, token: str) -> QueueEntry:
        await self.latency()
        entry = self.repo.get_queue_entry(token)

        if entry.status != "invited":
            raise Conflict(
                "Only invited patients can be completed",
                "INVALID_QUEUE_STATE",
                {"token": token, "status": entry.status},
            )
        entry.status = "completed"

        self.repo.events.record(
            "queue.completed",
            {"token": token, "providerId": entry.provider_id, "userId": entry.user_id},
        )
        return entry

    async def list_for_provider(self, provider_id: str) -> list[QueueEntry]:
        await self.latency()
        self.repo.get_provider(provider_id)

        order = {"waiting": 0, "invited": 1, "completed": 2}
        entries = self.repo.queue_entries(provider_id)
        return sorted(entries, key=lambda q: (order.get(q.status, 3), q.position))
