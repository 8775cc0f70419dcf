from fastapi import APIRouter, Depends, Query

from .. import config
from ..dependencies import get_services
from ..schemas import ProviderDetail, ProviderSearchResponse
from ..services import Services

router = APIRouter(tags=["Providers"])


@router.get("/providers", response_model=ProviderSearchResponse)
async def search_providers(
    location: str | None = None,
    specialty: str | None = None,
    q: str | None = None,
    sort: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(config.DEFAULT_PAGE_SIZE, ge=1, le=config.MAX_PAGE_SIZE),
    services: Services = Depends(get_services),
):
    return await services.providers.search(
        location=location,
        specialty=specialty,
        q=q,
        sort=sort,
        page=page,
        limit=limit,
    )


@router.get("/providers/{provider_id}", response_model=ProviderDetail)
async def get_provider(provider_id: str, services: Services = Depends(get_services)):
    return await services.providers.get(provider_id)
