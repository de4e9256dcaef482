"""Pytest configuration and fixtures for geolab.

HTTP tests run against create_app() with repository dependencies replaced by
in-memory fakes, so no Postgres or Redis is needed. SECRET_KEY is set before
any geolab import resolves settings.
"""

import os
from collections.abc import Collection, Iterable, Mapping
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-geolab-unit-tests")
os.environ["DATABASE_URL"] = ""
os.environ["REDIS_ENABLED"] = "false"
os.environ["ORGANIZATION_CACHE_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient

from geolab.api.v1.dependencies import (
    get_organization_repo,
    get_organization_repo_for_write,
    get_user_repo,
)
from geolab.application.dtos.organization import OrganizationCreate, OrganizationResult
from geolab.application.dtos.user import UserResult
from geolab.core.config import get_settings
from geolab.core.limiter import limiter
from geolab.domain.enums import AccessLevel, OrganizationType, Role
from geolab.domain.exceptions import OrganizationLookupFailedException
from geolab.infrastructure.security.jwt import create_identity_token
from geolab.main import create_app

get_settings.cache_clear()


class InMemoryOrganizationDirectory:
    """Organization repository fake: directory reads plus create/update.

    failing_ids makes get_by_id/list_affiliates raise
    OrganizationLookupFailedException for those ids. calls records every
    directory read as (method, id).
    """

    def __init__(
        self,
        organizations: Iterable[OrganizationResult] = (),
        failing_ids: Iterable[int] = (),
    ) -> None:
        self.organizations: dict[int, OrganizationResult] = {o.id: o for o in organizations}
        self.failing_ids = set(failing_ids)
        self.calls: list[tuple[str, int]] = []

    async def get_by_id(self, organization_id: int) -> OrganizationResult | None:
        self.calls.append(("get_by_id", organization_id))
        if organization_id in self.failing_ids:
            raise OrganizationLookupFailedException(organization_id, "TimeoutError")
        return self.organizations.get(organization_id)

    async def list_affiliates(self, headquarters_id: int) -> list[OrganizationResult]:
        self.calls.append(("list_affiliates", headquarters_id))
        if headquarters_id in self.failing_ids:
            raise OrganizationLookupFailedException(headquarters_id, "TimeoutError")
        return [
            o
            for o in sorted(self.organizations.values(), key=lambda o: o.id)
            if o.parent_organization_id == headquarters_id
            and o.organization_type == OrganizationType.AFFILIATE
        ]

    async def list_by_ids(self, organization_ids: set[int]) -> list[OrganizationResult]:
        return [self.organizations[i] for i in sorted(organization_ids) if i in self.organizations]

    async def create_organization(self, data: OrganizationCreate) -> OrganizationResult:
        new_id = max(self.organizations, default=0) + 1
        created = OrganizationResult(
            id=new_id,
            name=data.name,
            organization_type=OrganizationType(data.organization_type),
            parent_organization_id=data.parent_organization_id,
            access_level=AccessLevel(data.access_level),
        )
        self.organizations[new_id] = created
        return created

    async def update_organization(
        self, organization_id: int, changes: Mapping[str, Any]
    ) -> OrganizationResult | None:
        current = self.organizations.get(organization_id)
        if current is None:
            return None
        fields = {
            "id": current.id,
            "name": current.name,
            "organization_type": current.organization_type,
            "parent_organization_id": current.parent_organization_id,
            "access_level": current.access_level,
            "is_active": current.is_active,
        }
        fields.update(changes)
        updated = OrganizationResult(**fields)
        self.organizations[organization_id] = updated
        return updated


class InMemoryUserRepository:
    """User repository fake ordered by id."""

    def __init__(self, users: Iterable[UserResult] = ()) -> None:
        self.users = {u.id: u for u in users}

    async def get_by_id(self, user_id: int) -> UserResult | None:
        return self.users.get(user_id)

    async def get_by_firebase_uid(self, firebase_uid: str) -> UserResult | None:
        return next((u for u in self.users.values() if u.firebase_uid == firebase_uid), None)

    async def list_users(
        self,
        skip: int = 0,
        limit: int = 100,
        organization_ids: Collection[int] | None = None,
    ) -> list[UserResult]:
        active = [
            u
            for _, u in sorted(self.users.items())
            if u.is_active and (organization_ids is None or u.organization_id in organization_ids)
        ]
        return active[skip : skip + limit]


def org(
    org_id: int,
    organization_type: OrganizationType,
    parent: int | None = None,
    access_level: AccessLevel = AccessLevel.ISOLATED,
) -> OrganizationResult:
    return OrganizationResult(
        id=org_id,
        name=f"Org {org_id}",
        organization_type=organization_type,
        parent_organization_id=parent,
        access_level=access_level,
    )


def user(user_id: int, role: Role | str, organization_id: int | None) -> UserResult:
    return UserResult(
        id=user_id,
        firebase_uid=f"uid-{user_id}",
        email=f"user{user_id}@lab.test",
        name=f"User {user_id}",
        role=role.value if isinstance(role, Role) else role,
        organization_id=organization_id,
    )


@pytest.fixture
def make_org():
    """Factory for OrganizationResult: make_org(id, type, parent=None, access_level=ISOLATED)."""
    return org


@pytest.fixture
def make_user():
    """Factory for UserResult: make_user(id, role, organization_id)."""
    return user


@pytest.fixture
def directory_factory():
    """Return the in-memory directory class for tests that need custom data."""
    return InMemoryOrganizationDirectory


@pytest.fixture
def hierarchy() -> InMemoryOrganizationDirectory:
    """Reference hierarchy.

    1 headquarters with affiliates 2 (isolated), 3 (full_hierarchy),
    4 (parent_access); 5 independent (full_hierarchy, ignored);
    6 headquarters with affiliate 7 (full_hierarchy).
    """
    return InMemoryOrganizationDirectory(
        [
            org(1, OrganizationType.HEADQUARTERS),
            org(2, OrganizationType.AFFILIATE, parent=1),
            org(3, OrganizationType.AFFILIATE, parent=1, access_level=AccessLevel.FULL_HIERARCHY),
            org(4, OrganizationType.AFFILIATE, parent=1, access_level=AccessLevel.PARENT_ACCESS),
            org(5, OrganizationType.INDEPENDENT, access_level=AccessLevel.FULL_HIERARCHY),
            org(6, OrganizationType.HEADQUARTERS),
            org(7, OrganizationType.AFFILIATE, parent=6, access_level=AccessLevel.FULL_HIERARCHY),
        ]
    )


@pytest.fixture
def users_repo() -> InMemoryUserRepository:
    """Users across the reference hierarchy (ids ordered as listed)."""
    return InMemoryUserRepository(
        [
            user(10, Role.ADMIN, 1),
            user(11, Role.VIEWER, 2),
            user(12, Role.ADMIN, 2),
            user(13, Role.DEVELOPER, 2),
            user(14, Role.TECHNICIAN, 3),
            user(15, Role.MANAGER, 5),
            user(16, Role.VIEWER, None),
            user(17, Role.SUPERVISOR, 7),
        ]
    )


@pytest.fixture
def app(hierarchy: InMemoryOrganizationDirectory, users_repo: InMemoryUserRepository):
    """FastAPI app with repositories replaced by in-memory fakes; rate limits off."""
    application = create_app()
    application.dependency_overrides[get_organization_repo] = lambda: hierarchy
    application.dependency_overrides[get_organization_repo_for_write] = lambda: hierarchy
    application.dependency_overrides[get_user_repo] = lambda: users_repo
    limiter.enabled = False
    yield application
    limiter.enabled = True
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    """Factory: auth_headers(role, organization_id, uid=..., email=...) -> Authorization header."""

    def _headers(
        role: Role | str,
        organization_id: int | None,
        uid: str = "actor-uid",
        email: str = "actor@lab.test",
    ) -> dict[str, str]:
        token = create_identity_token(uid, role, organization_id, email=email)
        return {"Authorization": f"Bearer {token}"}

    return _headers
