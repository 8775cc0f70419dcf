from dataclasses import dataclass

from ..latency import Latency
from ..repository import Repository
from .auth import AuthService
from .availability import AvailabilityService
from .bookings import BookingService
from .payments import PaymentService
from .providers import ProviderService
from .queue import QueueService, Tick
from .recommendations import RecommendationService


@dataclass
class Services:
    repo: Repository
    providers: ProviderService
    bookings: BookingService
    payments: PaymentService
    queue: QueueService
    recommendations: RecommendationService
    availability: AvailabilityService
    auth: AuthService


def build_services(repo: Repository, latency: Latency, tick: Tick | None = None) -> Services:
    return Services(
        repo=repo,
        providers=ProviderService(repo, latency),
        bookings=BookingService(repo, latency),
        payments=PaymentService(repo, latency),
        queue=QueueService(repo, latency, tick=tick),
        recommendations=RecommendationService(repo, latency),
        availability=AvailabilityService(repo, latency),
        auth=AuthService(repo, latency),
    )
