from fastapi import APIRouter, Depends, status

from ..dependencies import get_services
from ..models import Booking
from ..schemas import BookingListResponse, CreateBookingRequest
from ..services import Services

router = APIRouter(tags=["Bookings"])


@router.post("/bookings", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_booking(data: CreateBookingRequest, services: Services = Depends(get_services)):
    return await services.bookings.create(
        provider_id=data.provider_id,
        slot_id=data.slot_id,
        user_id=data.user_id,
        payment_token=data.payment_token,
    )


@router.get("/bookings/user/{user_id}", response_model=BookingListResponse)
async def user_bookings(user_id: str, services: Services = Depends(get_services)):
    return {"bookings": await services.bookings.list_for_user(user_id)}


@router.get("/bookings/{booking_id}", response_model=Booking)
async def get_booking(booking_id: str, services: Services = Depends(get_services)):
    return await services.bookings.get(booking_id)
