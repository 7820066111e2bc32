"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from noskrien.api.v1.routes import participants, compare, migrate

api_router = APIRouter()

api_router.include_router(participants.router)
api_router.include_router(compare.router)
api_router.include_router(migrate.router)
