from fastapi import APIRouter, Depends

from ..dependencies import get_services
from ..models import Payment
from ..schemas import SandboxPaymentRequest
from ..services import Services

router = APIRouter(tags=["Payments"])


@router.post("/payments/sandbox", response_model=Payment)
async def sandbox_payment(data: SandboxPaymentRequest, services: Services = Depends(get_services)):
    return await services.payments.settle(data.booking_id, data.amount)


@router.get("/receipts/{payment_token}.json", response_model=Payment)
async def get_receipt(payment_token: str, services: Services = Depends(get_services)):
    return await services.payments.receipt(payment_token)
