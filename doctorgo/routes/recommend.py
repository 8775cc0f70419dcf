from fastapi import APIRouter, Depends

from ..dependencies import get_services
from ..schemas import RecommendRequest, RecommendResponse
from ..services import Services

router = APIRouter(tags=["Recommendations"])


@router.post("/recommend", response_model=RecommendResponse)
async def recommend(data: RecommendRequest, services: Services = Depends(get_services)):
    return {"recommendations": await services.recommendations.recommend(data.symptoms_text)}
