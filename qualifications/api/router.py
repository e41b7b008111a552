from fastapi import APIRouter

from qualifications.api import activities, auth, qualifications, subjects, system

api_router = APIRouter()
api_router.include_router(system.router)
api_router.include_router(auth.router)
api_router.include_router(subjects.router)
api_router.include_router(qualifications.router)
api_router.include_router(activities.router)
