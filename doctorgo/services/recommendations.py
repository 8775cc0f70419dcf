from .. import config
from ..latency import Latency
from ..repository import Repository
from ..schemas import Recommendation
from .scoring import confidence, rank_specialties, score_specialties


class RecommendationService:
    def __init__(self, repo: Repository, latency: Latency):
        self.repo = repo
        self.latency = latency

    def _rationale(self, specialty: str) -> str:
        return self.repo.explanations.get(specialty) or (
            f"{specialty} specialists can help with your described symptoms"
        )

    async def recommend(self, symptoms_text: str) -> list[Recommendation]:
        await self.latency()

        scores = score_specialties(symptoms_text, self.repo.symptom_keywords)
        ranked = rank_specialties(scores, config.MAX_RECOMMENDATIONS)
        if not ranked:
            ranked = [config.DEFAULT_SPECIALTY]

        recommendations = []
        for rank, specialty in enumerate(ranked):
            provider = next(
                (p for p in self.repo.list_providers() if p.specialty == specialty),
                None,
            )
            # specialties nobody practices are dropped, ranks are not shifted
            if not provider:
                continue
            recommendations.append(
                Recommendation(
                    provider_id=provider.id,
                    provider_name=provider.name,
                    specialty=provider.specialty,
                    rating=provider.rating,
                    confidence=confidence(rank),
                    rationale=self._rationale(specialty),
                )
            )
        return recommendations
