# habitboard/handlers/user/router.py
from aiogram import Router

from habitboard.handlers.user.leaderboard import router as leaderboard_router
from habitboard.handlers.user.profile import router as profile_router
from habitboard.handlers.user.visibility import router as visibility_router
from habitboard.handlers.user.card import router as card_router


router = Router(name="user")

router.include_router(leaderboard_router)
router.include_router(profile_router)
router.include_router(visibility_router)
router.include_router(card_router)
