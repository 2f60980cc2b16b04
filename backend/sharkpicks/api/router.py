from fastapi import APIRouter

from sharkpicks.api.odds import router as odds_router
from sharkpicks.api.picks import router as picks_router
from sharkpicks.api.plans import router as plans_router
from sharkpicks.api.system import router as system_router

api_router = APIRouter()
api_router.include_router(system_router)
api_router.include_router(odds_router)
api_router.include_router(picks_router)
api_router.include_router(plans_router)
