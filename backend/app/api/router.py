from fastapi import APIRouter

from app.api.v1 import auth, availability, bookings, health, meetings


api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(availability.router, prefix="/availability", tags=["availability"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(meetings.router, prefix="/meetings", tags=["meetings"])
