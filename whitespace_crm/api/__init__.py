from fastapi import APIRouter
from . import invites, teams


router = APIRouter()
router.include_router(invites.router, prefix="/invites", tags=["invites"])
router.include_router(teams.router, prefix="/teams", tags=["teams"])
