from fastapi import APIRouter

from modelfit.api.v1 import admin, admin_roles, auth, evaluations, feedback, health, status

api_router = APIRouter()

# Health (no prefix)
api_router.include_router(health.router)

# V1 endpoints
api_router.include_router(auth.router)
api_router.include_router(evaluations.router)
api_router.include_router(feedback.router)
api_router.include_router(status.router)
api_router.include_router(admin.router)
api_router.include_router(admin_roles.router)
