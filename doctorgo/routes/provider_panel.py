from fastapi import APIRouter, Depends

from ..dependencies import get_services
from ..schemas import (
    AvailabilityResponse,
    CompleteResponse,
    InviteNextRequest,
    InviteNextResponse,
    MessageResponse,
    PostponeResponse,
    ProviderQueueResponse,
    QueueTokenRequest,
    SetAvailabilityRequest,
    SlotsResponse,
)
from ..services import Services

router = APIRouter(prefix="/provider", tags=["Provider panel"])


@router.post("/queue/invite-next", response_model=InviteNextResponse)
async def invite_next(data: InviteNextRequest, services: Services = Depends(get_services)):
    invited = await services.queue.invite_next(data.provider_id)
    if not invited:
        return {"message": "No patients in queue", "invited": None}
    return {
        "message": "Patient invited",
        "invited": {"token": invited.token, "user_id": invited.user_id},
    }


@router.post("/queue/postpone", response_model=PostponeResponse)
async def postpone(data: QueueTokenRequest, services: Services = Depends(get_services)):
    entry = await services.queue.postpone(data.token)
    return {"message": "Patient postponed", "new_position": entry.position}


@router.post("/queue/complete", response_model=CompleteResponse)
async def complete(data: QueueTokenRequest, services: Services = Depends(get_services)):
    entry = await services.queue.complete(data.token)
    return {"message": "Visit completed", "token": entry.token}


@router.delete("/queue/{token}", response_model=MessageResponse)
async def cancel(token: str, services: Services = Depends(get_services)):
    await services.queue.cancel(token)
    return {"message": "Queue entry cancelled"}


@router.get("/{provider_id}/queue", response_model=ProviderQueueResponse)
async def provider_queue(provider_id: str, services: Services = Depends(get_services)):
    return {"queue": await services.queue.list_for_provider(provider_id)}


@router.put("/{provider_id}/availability", response_model=AvailabilityResponse)
async def set_availability(
    provider_id: str,
    data: SetAvailabilityRequest,
    services: Services = Depends(get_services),
):
    slots = await services.availability.update(provider_id, data.slots)
    return {"message": "Availability updated", "slots": slots}


@router.get("/{provider_id}/availability", response_model=SlotsResponse)
async def get_availability(provider_id: str, services: Services = Depends(get_services)):
    return {"slots": await services.availability.get(provider_id)}
