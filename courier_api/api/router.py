# courier_api/api/router.py
from fastapi import APIRouter
from courier_api.modules.couriers.router import router as couriers_router
from courier_api.modules.reports.router import router as reports_router

# Main API router, mounted under settings.api_prefix
api_router = APIRouter()

api_router.include_router(
    couriers_router,
    prefix="/couriers",
    tags=["Couriers"]
)

api_router.include_router(
    reports_router,
    prefix="/reports",
    tags=["Reports"]
)
