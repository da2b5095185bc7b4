"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from civichub.api.auth import router as auth_router
from civichub.api.problems import router as problems_router
from civichub.api.solutions import router as solutions_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(problems_router)
api_router.include_router(solutions_router)
