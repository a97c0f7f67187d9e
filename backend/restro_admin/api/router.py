from fastapi import APIRouter

from restro_admin.api.routes import activity, auth

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(activity.router, prefix="/activity-logs", tags=["activity-logs"])
