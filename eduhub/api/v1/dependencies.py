"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories, application
services, the current principal and the access gates. Routes depend only
on these factories, never on infrastructure directly.

Read factories use get_db; write factories use get_db_transactional, which
commits when the request succeeds. FastAPI caches a dependency per request,
so every write factory of one request shares the same session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eduhub.application.dtos.access import ResolvedOwnership
from eduhub.application.services.access_resolver import AccessResolver
from eduhub.application.services.auth_service import AuthService
from eduhub.application.services.batch_service import BatchService
from eduhub.application.services.business_service import BusinessService
from eduhub.application.services.content_service import ContentService
from eduhub.application.services.course_service import CourseService, SubjectService
from eduhub.application.services.exam_service import ExamService
from eduhub.application.services.file_rules import build_file_rules
from eduhub.application.services.permission_service import PermissionService
from eduhub.application.services.query_builder import parse_query_options
from eduhub.application.services.teacher_service import TeacherService
from eduhub.application.services.user_service import UserService
from eduhub.application.services.validation import validate_id
from eduhub.core.config import get_settings
from eduhub.domain.enums import EntityKind, UserRole
from eduhub.domain.exceptions import ForbiddenException
from eduhub.domain.value_objects import Principal, QueryOptions
from eduhub.infrastructure.cache import InMemoryCache
from eduhub.infrastructure.external.storage import LocalStorageService
from eduhub.infrastructure.persistence.database import get_db, get_db_transactional
from eduhub.infrastructure.persistence.repositories import (
    BatchRepository,
    BatchUserRepository,
    BusinessRepository,
    ContentRepository,
    CourseRepository,
    ExamRepository,
    PermissionRepository,
    RefreshTokenRepository,
    SubjectRepository,
    TeacherRepository,
    UserRepository,
)
from eduhub.infrastructure.security.jwt import principal_from_claims, verify_token
from eduhub.infrastructure.security.password import hash_password
from eduhub.infrastructure.services import AuditService, SqlOwnershipLookup

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


# ---- Query options ----


def get_query_options(request: Request) -> QueryOptions:
    """QueryOptions parsed from fields/include/page/limit/sort of the query string."""
    return parse_query_options(request.query_params)


# ---- Auth (principal from JWT) ----

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Principal:
    """Return the principal from a valid bearer token; raise 401 otherwise.

    The token is trusted as issued: no database read happens here.
    """
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return principal_from_claims(verify_token(credentials.credentials))
    except ValueError:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def require_roles(*roles: UserRole):
    """Dependency factory: require one of roles. SUPERADMIN passes every gate."""

    async def _require(principal: CurrentPrincipal) -> Principal:
        if principal.is_super_admin or principal.has_role(*roles):
            return principal
        raise ForbiddenException(
            "You do not have permission to perform this action", reason="role"
        )

    return _require


# ---- Access resolver ----


def get_access_resolver(db: ReadSession) -> AccessResolver:
    return AccessResolver(SqlOwnershipLookup(db))


def get_access_resolver_for_write(db: WriteSession) -> AccessResolver:
    """Resolver sharing the request's write session (checks inside a mutation)."""
    return AccessResolver(SqlOwnershipLookup(db))


def require_access(kind: EntityKind, param: str):
    """Dependency factory: authorize the principal on the entity id named param.

    The id is read from the path, falling back to the query string
    (e.g. GET /exams?business_id=3).
    """

    async def _require(
        request: Request,
        principal: CurrentPrincipal,
        resolver: Annotated[AccessResolver, Depends(get_access_resolver)],
    ) -> ResolvedOwnership:
        raw = request.path_params.get(param)
        if raw is None:
            raw = request.query_params.get(param)
        entity_id = validate_id(raw, f"{kind.label} ID")
        return await resolver.authorize(kind, entity_id, principal)

    return _require


# ---- Business / users ----


def get_business_service(db: WriteSession) -> BusinessService:
    return BusinessService(BusinessRepository(db), UserRepository(db))


def get_business_query_service(db: ReadSession) -> BusinessService:
    """Business service on a read session (get, get by slug)."""
    return BusinessService(BusinessRepository(db), UserRepository(db))


def get_user_service(db: WriteSession) -> UserService:
    return UserService(
        UserRepository(db),
        BusinessRepository(db),
        RefreshTokenRepository(db),
        hash_password,
    )


def get_user_query_service(db: ReadSession) -> UserService:
    return UserService(
        UserRepository(db),
        BusinessRepository(db),
        RefreshTokenRepository(db),
        hash_password,
    )


def get_auth_service(db: WriteSession) -> AuthService:
    """Auth service (composition root)."""
    return AuthService(UserRepository(db), RefreshTokenRepository(db))


def get_permission_service(db: WriteSession) -> PermissionService:
    return PermissionService(PermissionRepository(db), UserRepository(db))


def get_permission_query_service(db: ReadSession) -> PermissionService:
    return PermissionService(PermissionRepository(db), UserRepository(db))


# ---- Exams / courses / subjects ----


def get_exam_service(
    db: WriteSession,
    access: Annotated[AccessResolver, Depends(get_access_resolver_for_write)],
) -> ExamService:
    return ExamService(ExamRepository(db), access)


def get_exam_query_service(
    db: ReadSession,
    access: Annotated[AccessResolver, Depends(get_access_resolver)],
) -> ExamService:
    return ExamService(ExamRepository(db), access)


def get_course_service(db: WriteSession) -> CourseService:
    return CourseService(CourseRepository(db))


def get_course_query_service(db: ReadSession) -> CourseService:
    return CourseService(CourseRepository(db))


def get_subject_service(db: WriteSession) -> SubjectService:
    return SubjectService(SubjectRepository(db), CourseRepository(db))


def get_subject_query_service(db: ReadSession) -> SubjectService:
    return SubjectService(SubjectRepository(db), CourseRepository(db))


# ---- Batches / contents / teachers ----


def get_batch_service(
    db: WriteSession,
    access: Annotated[AccessResolver, Depends(get_access_resolver_for_write)],
) -> BatchService:
    return BatchService(
        BatchRepository(db), BatchUserRepository(db), UserRepository(db), access
    )


def get_batch_query_service(
    db: ReadSession,
    access: Annotated[AccessResolver, Depends(get_access_resolver)],
) -> BatchService:
    return BatchService(
        BatchRepository(db), BatchUserRepository(db), UserRepository(db), access
    )


def get_file_storage() -> LocalStorageService:
    """Local storage rooted at UPLOAD_DIR (composition root)."""
    return LocalStorageService(get_settings().upload_dir)


def _content_service(db: AsyncSession, storage: LocalStorageService) -> ContentService:
    return ContentService(ContentRepository(db), storage, build_file_rules(get_settings()))


def get_content_service(
    db: WriteSession,
    storage: Annotated[LocalStorageService, Depends(get_file_storage)],
) -> ContentService:
    return _content_service(db, storage)


def get_content_query_service(
    db: ReadSession,
    storage: Annotated[LocalStorageService, Depends(get_file_storage)],
) -> ContentService:
    return _content_service(db, storage)


def get_teacher_service(
    db: WriteSession,
    access: Annotated[AccessResolver, Depends(get_access_resolver_for_write)],
) -> TeacherService:
    return TeacherService(TeacherRepository(db), UserRepository(db), access)


def get_teacher_query_service(
    db: ReadSession,
    access: Annotated[AccessResolver, Depends(get_access_resolver)],
) -> TeacherService:
    return TeacherService(TeacherRepository(db), UserRepository(db), access)


# ---- Audit ----


def get_audit_cache(request: Request) -> InMemoryCache:
    """The process-wide audit flag cache created in the lifespan."""
    cache = getattr(request.app.state, "audit_cache", None)
    if cache is None:
        cache = request.app.state.audit_cache = InMemoryCache()
    return cache


def get_audit_service(
    db: WriteSession,
    cache: Annotated[InMemoryCache, Depends(get_audit_cache)],
) -> AuditService:
    return AuditService(db, cache, get_settings().audit_flag_cache_ttl_seconds)
