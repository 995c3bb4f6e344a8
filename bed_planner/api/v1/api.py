from fastapi import APIRouter
from bed_planner.api.v1.patients import routes as patients
from bed_planner.api.v1.beds import routes as beds
from bed_planner.api.v1.stays import routes as stays
from bed_planner.api.v1.placement import routes as placement

api_router = APIRouter()
api_router.include_router(patients.router, prefix="/patients", tags=["patients"])
api_router.include_router(beds.router, prefix="/beds", tags=["beds"])
api_router.include_router(stays.router, prefix="/stays", tags=["stays"])
api_router.include_router(placement.router, prefix="/placement", tags=["placement"])
