from fastapi import APIRouter

from src.academy.api.v1 import approvals, onboarding

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(onboarding.router)
api_router.include_router(approvals.router)
