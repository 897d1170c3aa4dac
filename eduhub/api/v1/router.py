"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from eduhub.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from eduhub.api.v1.endpoints import (
    audit,
    auth,
    batches,
    business,
    contents,
    courses,
    exams,
    health,
    permissions,
    teachers,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(business.router, prefix="/business", tags=["business"])
api_router.include_router(exams.router, prefix="/exams", tags=["exams"])
api_router.include_router(courses.router, prefix="/exams", tags=["courses"])
api_router.include_router(batches.router, prefix="/batches", tags=["batches"])
api_router.include_router(contents.router, tags=["contents"])
api_router.include_router(teachers.router, prefix="/teachers", tags=["teachers"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(permissions.router, prefix="/permission", tags=["permissions"])
api_router.include_router(audit.router, prefix="/audit", tags=["audit"])
