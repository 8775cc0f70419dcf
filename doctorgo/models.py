from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Stored record; camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(Record):
    lat: float
    lng: float


class AvailabilitySlot(Record):
    id: str
    date: str
    time: str
    available: bool = True


class Review(Record):
    id: str
    author: str
    rating: float
    text: str
    date: str


class Provider(Record):
    id: str
    name: str
    specialty: str
    rating: float
    review_count: int = 0
    estimated_cost: float
    coordinates: Coordinates
    address: str
    phone: Optional[str] = None
    availability_slots: List[AvailabilitySlot] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list)
    bio: str = ""
    education: Optional[str] = None
    languages: List[str] = Field(default_factory=list)
    insurance: List[str] = Field(default_factory=list)
    policies: dict = Field(default_factory=dict)
    reviews: List[Review] = Field(default_factory=list)


class Booking(Record):
    booking_id: str
    provider_id: str
    slot_id: str
    user_id: str
    timestamp: str
    status: Literal["pending", "confirmed"]
    payment_status: Literal["unpaid", "paid"]
    payment_token: Optional[str] = None


class Payment(Record):
    payment_token: str
    booking_id: str
    amount: float
    currency: str
    paid_at: str
    status: Literal["completed"] = "completed"
    e_receipt_url: str
    card_last4: str
    card_brand: str


QueueStatus = Literal["waiting", "invited", "completed", "cancelled"]


class QueueEntry(Record):
    token: str
    provider_id: str
    user_id: str
    position: int = Field(ge=1)
    estimated_wait: int
    joined_at: str
    status: QueueStatus = "waiting"


class User(Record):
    id: str
    email: str
    password_hash: str = Field(exclude=True)
    first_name: str
    last_name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    insurance_provider: Optional[str] = None
    insurance_id: Optional[str] = None
    role: Literal["patient", "provider"] = "patient"
    provider_id: Optional[str] = None
    created_at: Optional[str] = None
