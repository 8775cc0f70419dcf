from typing import List, Literal, Optional

from pydantic import Field, field_validator

from .models import AvailabilitySlot, Booking, Coordinates, Provider, QueueEntry, Record, QueueStatus


# ---- Providers ----

class ProviderSummary(Record):
    id: str
    name: str
    specialty: str
    rating: float
    review_count: int
    estimated_cost: float
    queue_length: int
    coordinates: Coordinates
    address: str
    availability_slots: List[AvailabilitySlot]
    tags: List[str]
    next_available: Optional[AvailabilitySlot] = None
    distance_km: Optional[float] = None


class ProviderDetail(Provider):
    queue_length: int
    next_available: Optional[AvailabilitySlot] = None


class ProviderSearchResponse(Record):
    providers: List[ProviderSummary]
    total: int
    page: int
    total_pages: int


# ---- Bookings ----

class CreateBookingRequest(Record):
    provider_id: str
    slot_id: str
    user_id: str
    payment_token: Optional[str] = None


class BookingListResponse(Record):
    bookings: List[Booking]


# ---- Queue ----

class JoinQueueRequest(Record):
    provider_id: str
    user_id: str


class JoinQueueResponse(Record):
    token: str
    position: int
    estimated_wait: int


class QueueStatusResponse(Record):
    token: str
    position: int
    eta: int
    status: QueueStatus
    updated_at: str


class InviteNextRequest(Record):
    provider_id: str


class InvitedPatient(Record):
    token: str
    user_id: str


class InviteNextResponse(Record):
    message: str
    invited: Optional[InvitedPatient] = None


class QueueTokenRequest(Record):
    token: str


class PostponeResponse(Record):
    message: str
    new_position: int


class CompleteResponse(Record):
    message: str
    token: str


class ProviderQueueResponse(Record):
    queue: List[QueueEntry]


# ---- Payments ----

class SandboxPaymentRequest(Record):
    booking_id: str
    amount: float = Field(ge=0)


# ---- Recommendations ----

class RecommendRequest(Record):
    symptoms_text: str


class Recommendation(Record):
    provider_id: str
    provider_name: str
    specialty: str
    rating: float
    confidence: float
    rationale: str


class RecommendResponse(Record):
    recommendations: List[Recommendation]


# ---- Availability ----

SLOT_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
SLOT_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class SlotInput(Record):
    id: Optional[str] = None
    date: str = Field(pattern=SLOT_DATE_PATTERN)
    time: str = Field(pattern=SLOT_TIME_PATTERN)
    available: Optional[bool] = None


class SetAvailabilityRequest(Record):
    slots: List[SlotInput]


class AvailabilityResponse(Record):
    message: str
    slots: List[AvailabilitySlot]


class SlotsResponse(Record):
    slots: List[AvailabilitySlot]


# ---- Auth / users ----

class PublicUser(Record):
    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_id: Optional[str] = None
    role: Literal["patient", "provider"] = "patient"
    provider_id: Optional[str] = None
    created_at: Optional[str] = None


class LoginRequest(Record):
    email: str
    password: str


class RegisterRequest(Record):
    email: str
    password: str = Field(min_length=6)
    first_name: str
    last_name: str
    phone: Optional[str] = None


class UpdateProfileRequest(Record):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_id: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def names_cannot_be_cleared(cls, value):
        # omitted means unchanged; an explicit null would blank a required field
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class AuthResponse(Record):
    user: PublicUser
    token: str


class UserResponse(Record):
    user: PublicUser


class MessageResponse(Record):
    message: str
