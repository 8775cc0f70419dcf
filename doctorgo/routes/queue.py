from fastapi import APIRouter, Depends, status

from ..dependencies import get_services
from ..events import utcnow_iso
from ..schemas import JoinQueueRequest, JoinQueueResponse, QueueStatusResponse
from ..services import Services

router = APIRouter(tags=["Queue"])


@router.post("/queue/join", response_model=JoinQueueResponse, status_code=status.HTTP_201_CREATED)
async def join_queue(data: JoinQueueRequest, services: Services = Depends(get_services)):
    entry = await services.queue.join(data.provider_id, data.user_id)
    return JoinQueueResponse(
        token=entry.token,
        position=entry.position,
        estimated_wait=entry.estimated_wait,
    )


@router.get("/queue/{token}/status", response_model=QueueStatusResponse)
async def queue_status(token: str, services: Services = Depends(get_services)):
    entry = await services.queue.status(token)
    return QueueStatusResponse(
        token=entry.token,
        position=entry.position,
        eta=entry.estimated_wait,
        status=entry.status,
        updated_at=utcnow_iso(),
    )
