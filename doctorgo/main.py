import random

from fastapi import Depends, FastAPI

from . import config
from .dependencies import get_repository
from .errors import register_exception_handlers
from .latency import simulated_latency
from .logging_config import get_logger, setup_structured_logging
from .middleware import RateLimitMiddleware, RequestLoggingMiddleware
from .repository import Repository
from .routes import ROUTERS
from .services import build_services
from .services.queue import Tick, random_tick

OPENAPI_TAGS = [
    {"name": "System", "description": "Operational endpoints (health, sandbox reset)."},
    {"name": "Providers", "description": "Provider search and profiles."},
    {"name": "Bookings", "description": "Appointment booking."},
    {"name": "Queue", "description": "Patient side of the virtual queue."},
    {"name": "Payments", "description": "Sandbox payments and receipts."},
    {"name": "Recommendations", "description": "Symptom-based provider suggestions."},
    {"name": "Auth", "description": "Sandbox login, registration and profiles."},
    {"name": "Provider panel", "description": "Queue and availability management for providers."},
]

logger = get_logger(__name__)


def create_app(
    *,
    repository: Repository | None = None,
    latency_ms: tuple[int, int] | None = None,
    tick: Tick | None = None,
    seed: int | None = None,
    rate_limit_per_minute: int | None = None,
) -> FastAPI:
    """
    Build an application around its own repository.

    Keyword overrides exist so tests and demos can run without delay and
    with a predictable queue; anything left as None falls back to config.
    """
    setup_structured_logging(config.LOG_LEVEL)

    rng = random.Random(seed)
    min_ms, max_ms = latency_ms or (config.MIN_LATENCY_MS, config.MAX_LATENCY_MS)
    repo = repository or Repository()
    services = build_services(
        repo,
        simulated_latency(min_ms, max_ms, rng),
        tick=tick or random_tick(config.QUEUE_ADVANCE_PROBABILITY, rng),
    )

    app = FastAPI(title="DoctorGo Sandbox API", openapi_tags=OPENAPI_TAGS)
    app.state.services = services

    app.add_middleware(
        RateLimitMiddleware,
        max_per_minute=rate_limit_per_minute or config.RATE_LIMIT_PER_MINUTE,
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health", tags=["System"])
    async def health():
        return {"status": "ok", "service": config.SERVICE_NAME}

    @app.post("/system/reset", tags=["System"])
    async def reset(repo: Repository = Depends(get_repository)):
        repo.reset()
        logger.info("repository_reset")
        return {"message": "Sandbox data reset"}

    logger.info("app_created", latency_ms=[min_ms, max_ms], providers=len(repo.providers))
    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("doctorgo.main:app", host=config.HOST, port=config.PORT)
