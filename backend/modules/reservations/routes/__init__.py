from fastapi import APIRouter
from .reservation_routes import router as reservation_router
from .waiting_routes import router as waiting_router
from .admin_routes import router as admin_router

# Create main router
router = APIRouter()

# Include sub-routers
router.include_router(reservation_router)
router.include_router(waiting_router)
router.include_router(admin_router)

__all__ = ["router"]
