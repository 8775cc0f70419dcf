import copy
import time
import uuid

from . import config
from .errors import provider_not_found, queue_not_found
from .events import EventLog
from .fixtures import load_all
from .models import Booking, Payment, Provider, QueueEntry, User
from .security import hash_password


def generate_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


class Repository:
    """
    In-memory collections seeded from fixture data.

    One instance is built per application and handed to every service.
    Nothing here locks; callers run on a single event loop and finish each
    mutation without yielding.
    """

    def __init__(self, seed: dict | None = None):
        self._seed = copy.deepcopy(seed) if seed is not None else load_all()
        self.events = EventLog()
        self._load()

    def _load(self):
        seed = copy.deepcopy(self._seed)

        self.providers: dict[str, Provider] = {}
        for raw in seed.get("providers", []):
            # queue length is derived from queue entries, never seeded
            raw.pop("queueLength", None)
            provider = Provider.model_validate(raw)
            self.providers[provider.id] = provider

        self.bookings: list[Booking] = [Booking.model_validate(b) for b in seed.get("bookings", [])]
        self.payments: list[Payment] = [Payment.model_validate(p) for p in seed.get("payments", [])]

        self.users: list[User] = []
        for raw in seed.get("users", []):
            password = raw.pop("password", "")
            self.users.append(User.model_validate({**raw, "password_hash": hash_password(password)}))

        self.queue: dict[str, QueueEntry] = {}
        for raw in seed.get("queue", []):
            entry = QueueEntry.model_validate(raw)
            self.queue[entry.token] = entry
        self._renumber_seeded_queues()

        profiles = seed.get("symptom_profiles") or {}
        self.symptom_keywords: dict[str, list[str]] = profiles.get("symptomKeywords", {})
        self.explanations: dict[str, str] = profiles.get("explanations", {})

    def _renumber_seeded_queues(self):
        # seed data may carry gaps or duplicates; waiting ranks start dense
        for provider_id in {q.provider_id for q in self.queue.values()}:
            waiting = sorted(
                self.waiting_entries(provider_id),
                key=lambda q: (q.position, q.joined_at),
            )
            for position, entry in enumerate(waiting, start=1):
                entry.position = position
                entry.estimated_wait = position * config.MINUTES_PER_PATIENT

    def reset(self):
        self._load()
        self.events.clear()

    # ---- providers ----

    def find_provider(self, provider_id: str) -> Provider | None:
        return self.providers.get(provider_id)

    def get_provider(self, provider_id: str) -> Provider:
        provider = self.find_provider(provider_id)
        if not provider:
            raise provider_not_found(provider_id)
        return provider

    def list_providers(self) -> list[Provider]:
        return list(self.providers.values())

    # ---- bookings / payments ----

    def find_booking(self, booking_id: str) -> Booking | None:
        return next((b for b in self.bookings if b.booking_id == booking_id), None)

    def add_booking(self, booking: Booking):
        self.bookings.append(booking)

    def find_payment(self, payment_token: str) -> Payment | None:
        return next((p for p in self.payments if p.payment_token == payment_token), None)

    def add_payment(self, payment: Payment):
        self.payments.append(payment)

    # ---- users ----

    def find_user(self, user_id: str) -> User | None:
        return next((u for u in self.users if u.id == user_id), None)

    def find_user_by_email(self, email: str) -> User | None:
        needle = (email or "").strip().lower()
        return next((u for u in self.users if u.email.lower() == needle), None)

    def add_user(self, user: User):
        self.users.append(user)

    # ---- queue ----

    def get_queue_entry(self, token: str) -> QueueEntry:
        entry = self.queue.get(token)
        if not entry:
            raise queue_not_found(token)
        return entry

    def add_queue_entry(self, entry: QueueEntry):
        self.queue[entry.token] = entry

    def remove_queue_entry(self, token: str) -> QueueEntry:
        entry = self.get_queue_entry(token)
        del self.queue[token]
        return entry

    def queue_entries(self, provider_id: str) -> list[QueueEntry]:
        return [q for q in self.queue.values() if q.provider_id == provider_id]

    def waiting_entries(self, provider_id: str) -> list[QueueEntry]:
        waiting = [q for q in self.queue_entries(provider_id) if q.status == "waiting"]
        waiting.sort(key=lambda q: q.position)
        return waiting

    def queue_length(self, provider_id: str) -> int:
        return len(self.waiting_entries(provider_id))
