from .appointment import router as appointment_router
from .availability import router as availability_router
from .healthcheck import router as healthcheck_router
from .jobs import router as jobs_router
from .shop import router as shop_router
from .time_slot import router as time_slot_router
from .user import router as user_router

__all__ = [
    'appointment_router',
    'availability_router',
    'healthcheck_router',
    'jobs_router',
    'shop_router',
    'time_slot_router',
    'user_router',
]

routers = [
    user_router,
    shop_router,
    time_slot_router,
    availability_router,
    appointment_router,
    jobs_router,
    healthcheck_router,
]
