import math
from datetime import datetime

from dateutil import parser

from .. import config
from ..latency import Latency
from ..models import AvailabilitySlot, Provider
from ..repository import Repository
from ..schemas import ProviderDetail, ProviderSearchResponse, ProviderSummary

SORT_KEYS = {
    "rating": (lambda s: s.rating, True),
    "cost": (lambda s: s.estimated_cost, False),
    "queue": (lambda s: s.queue_length, False),
    "name": (lambda s: s.name.lower(), False),
    "distance": (lambda s: s.distance_km, False),
}


def norm(s: str | None) -> str:
    return (s or "").strip().lower()


def haversine(lat1, lon1, lat2, lon2):
    R = 6371
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return R * c


def parse_location(location: str | None) -> tuple[float, float] | None:
    """
    Accepts "lat,lng". Free-text addresses are not geocoded and yield None.
    """
    if not location or "," not in location:
        return None
    try:
        lat, lng = (float(part) for part in location.split(",", 1))
    except ValueError:
        return None
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return lat, lng


def slot_start(slot: AvailabilitySlot) -> datetime | None:
    try:
        start = parser.parse(f"{slot.date} {slot.time}")
    except (ValueError, OverflowError):
        return None
    # slots are wall-clock times at the provider; offsets are not compared
    return start.replace(tzinfo=None)


def next_available(provider: Provider) -> AvailabilitySlot | None:
    candidates = []
    for index, slot in enumerate(provider.availability_slots):
        if not slot.available:
            continue
        start = slot_start(slot)
        # unparseable slots go last, in listing order
        candidates.append((start is None, start or datetime.min, index, slot))
    if not candidates:
        return None
    return min(candidates, key=lambda c: c[:3])[3]


def matches_query(provider: Provider, query: str) -> bool:
    return (
        query in provider.name.lower()
        or query in provider.specialty.lower()
        or any(query in tag.lower() for tag in provider.tags)
    )


class ProviderService:
    def __init__(self, repo: Repository, latency: Latency):
        self.repo = repo
        self.latency = latency

    def summarize(self, provider: Provider, origin: tuple[float, float] | None = None) -> ProviderSummary:
        distance_km = None
        if origin:
            distance_km = round(
                haversine(origin[0], origin[1], provider.coordinates.lat, provider.coordinates.lng),
                2,
            )
        return ProviderSummary(
            id=provider.id,
            name=provider.name,
            specialty=provider.specialty,
            rating=provider.rating,
            review_count=provider.review_count,
            estimated_cost=provider.estimated_cost,
            queue_length=self.repo.queue_length(provider.id),
            coordinates=provider.coordinates,
            address=provider.address,
            availability_slots=provider.availability_slots,
            tags=provider.tags,
            next_available=next_available(provider),
            distance_km=distance_km,
        )

    async def search(
        self,
        location: str | None = None,
        specialty: str | None = None,
        q: str | None = None,
        sort: str | None = None,
        page: int = 1,
        limit: int = config.DEFAULT_PAGE_SIZE,
    ) -> ProviderSearchResponse:
        await self.latency()

        results = self.repo.list_providers()

        wanted = norm(specialty)
        if wanted and wanted != "all":
            results = [p for p in results if p.specialty.lower() == wanted]

        query = norm(q)
        if query:
            results = [p for p in results if matches_query(p, query)]

        origin = parse_location(location)
        summaries = [self.summarize(p, origin) for p in results]

        sort_key = SORT_KEYS.get(norm(sort))
        if sort_key and not (norm(sort) == "distance" and origin is None):
            key, reverse = sort_key
            summaries.sort(key=key, reverse=reverse)

        page = max(page, 1)
        limit = min(max(limit, 1), config.MAX_PAGE_SIZE)
        total = len(summaries)
        start = (page - 1) * limit

        return ProviderSearchResponse(
            providers=summaries[start:start + limit],
            total=total,
            page=page,
            total_pages=max(1, math.ceil(total / limit)),
        )

    async def get(self, provider_id: str) -> ProviderDetail:
        await self.latency()
        provider = self.repo.get_provider(provider_id)
        return ProviderDetail(
            **provider.model_dump(),
            queue_length=self.repo.queue_length(provider.id),
            next_available=next_available(provider),
        )
