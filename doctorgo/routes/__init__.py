from .auth import router as auth_router
from .bookings import router as bookings_router
from .payments import router as payments_router
from .provider_panel import router as provider_panel_router
from .providers import router as providers_router
from .queue import router as queue_router
from .recommend import router as recommend_router

ROUTERS = [
    providers_router,
    bookings_router,
    queue_router,
    payments_router,
    recommend_router,
    auth_router,
    provider_panel_router,
]
