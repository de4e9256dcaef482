"""Tests for organization endpoints: visibility, writes, audit, degraded lookups."""

import logging

import pytest
from httpx import AsyncClient

from geolab.api.v1.dependencies import get_access_resolver
from geolab.application.services.hierarchical_access_resolver import (
    HierarchicalAccessResolver,
)
from geolab.domain.enums import Role


async def test_accessible_from_headquarters(client: AsyncClient, auth_headers) -> None:
    response = await client.get(
        "/api/v1/organizations/accessible", headers=auth_headers(Role.VIEWER, 1)
    )
    assert response.status_code == 200
    assert [o["id"] for o in response.json()] == [1, 2, 3, 4]


async def test_accessible_from_parent_access_affiliate(client: AsyncClient, auth_headers) -> None:
    response = await client.get(
        "/api/v1/organizations/accessible", headers=auth_headers(Role.VIEWER, 4)
    )
    assert [o["id"] for o in response.json()] == [1, 4]


async def test_accessible_without_organization_is_empty(client: AsyncClient, auth_headers) -> None:
    response = await client.get(
        "/api/v1/organizations/accessible", headers=auth_headers(Role.ADMIN, None)
    )
    assert response.status_code == 200
    assert response.json() == []


async def test_get_organization_visible(client: AsyncClient, auth_headers) -> None:
    response = await client.get("/api/v1/organizations/2", headers=auth_headers(Role.VIEWER, 1))
    assert response.status_code == 200
    data = response.json()
    assert data["organization_type"] == "affiliate"
    assert data["parent_organization_id"] == 1
    assert data["access_level"] == "isolated"


async def test_get_organization_hidden_and_missing_look_alike(
    client: AsyncClient, auth_headers
) -> None:
    hidden = await client.get("/api/v1/organizations/1", headers=auth_headers(Role.ADMIN, 2))
    missing = await client.get("/api/v1/organizations/999", headers=auth_headers(Role.ADMIN, 1))
    assert hidden.status_code == missing.status_code == 403
    assert hidden.json() == missing.json() == {"error": "FORBIDDEN", "message": "Forbidden"}


async def test_create_affiliate_as_admin_is_audited(
    client: AsyncClient, auth_headers, hierarchy, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="geolab.audit")
    response = await client.post(
        "/api/v1/organizations",
        json={
            "name": "Field Lab North",
            "organization_type": "affiliate",
            "parent_organization_id": 1,
            "access_level": "parent_access",
        },
        headers=auth_headers(Role.ADMIN, 1, email="admin@lab.test"),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["parent_organization_id"] == 1
    assert data["id"] in hierarchy.organizations
    audit = [r.getMessage() for r in caplog.records if r.name == "geolab.audit"]
    assert audit == [
        "AUDIT: admin@lab.test (ADMIN) performed create_organization on /api/v1/organizations"
    ]


async def test_create_independent(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/organizations",
        json={"name": "Standalone Lab"},
        headers=auth_headers(Role.DEVELOPER, 5),
    )
    assert response.status_code == 201
    assert response.json()["organization_type"] == "independent"


async def test_create_requires_manage_permission(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/organizations",
        json={"name": "Nope"},
        headers=auth_headers(Role.MANAGER, 1),
    )
    assert response.status_code == 403


async def test_create_under_invisible_parent_forbidden(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/organizations",
        json={"name": "Sneaky", "organization_type": "affiliate", "parent_organization_id": 6},
        headers=auth_headers(Role.ADMIN, 1),
    )
    assert response.status_code == 403


async def test_create_under_affiliate_parent_rejected(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/organizations",
        json={"name": "Nested", "organization_type": "affiliate", "parent_organization_id": 2},
        headers=auth_headers(Role.ADMIN, 2),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_create_affiliate_without_parent_rejected(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/organizations",
        json={"name": "Orphan", "organization_type": "affiliate"},
        headers=auth_headers(Role.ADMIN, 1),
    )
    assert response.status_code == 400


async def test_create_body_validation(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        "/api/v1/organizations",
        json={"name": ""},
        headers=auth_headers(Role.ADMIN, 1),
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_update_access_level(client: AsyncClient, auth_headers, hierarchy) -> None:
    response = await client.patch(
        "/api/v1/organizations/2",
        json={"access_level": "full_hierarchy"},
        headers=auth_headers(Role.ADMIN, 1),
    )
    assert response.status_code == 200
    assert response.json()["access_level"] == "full_hierarchy"
    assert hierarchy.organizations[2].access_level.value == "full_hierarchy"


async def test_update_invisible_organization_forbidden(client: AsyncClient, auth_headers) -> None:
    response = await client.patch(
        "/api/v1/organizations/6",
        json={"name": "Renamed"},
        headers=auth_headers(Role.ADMIN, 1),
    )
    assert response.status_code == 403


async def test_update_rejects_null_name(client: AsyncClient, auth_headers) -> None:
    response = await client.patch(
        "/api/v1/organizations/2",
        json={"name": None},
        headers=auth_headers(Role.ADMIN, 1),
    )
    assert response.status_code == 422


async def test_lookup_failure_degrades_to_home(
    client: AsyncClient, auth_headers, hierarchy
) -> None:
    hierarchy.failing_ids.add(1)
    response = await client.get(
        "/api/v1/organizations/accessible", headers=auth_headers(Role.VIEWER, 1)
    )
    assert response.status_code == 200
    assert [o["id"] for o in response.json()] == [1]


async def test_lookup_failure_strict_mode_is_unavailable(
    app, client: AsyncClient, auth_headers, hierarchy
) -> None:
    hierarchy.failing_ids.add(1)
    app.dependency_overrides[get_access_resolver] = lambda: HierarchicalAccessResolver.for_request(
        hierarchy, strict=True
    )
    response = await client.get(
        "/api/v1/organizations/accessible", headers=auth_headers(Role.VIEWER, 1)
    )
    assert response.status_code == 503
    assert response.json()["error"] == "ORGANIZATION_LOOKUP_FAILED"


async def test_affiliate_cannot_widen_its_own_access(client: AsyncClient, auth_headers) -> None:
    """An isolated affiliate's admin cannot grant itself headquarters visibility."""
    headers = auth_headers(Role.ADMIN, 2)
    response = await client.patch(
        "/api/v1/organizations/2", json={"access_level": "full_hierarchy"}, headers=headers
    )
    assert response.status_code == 403
    assert response.json() == {"error": "FORBIDDEN", "message": "Forbidden"}
    hq = await client.get("/api/v1/organizations/1", headers=headers)
    assert hq.status_code == 403


async def test_affiliate_can_rename_itself(client: AsyncClient, auth_headers) -> None:
    response = await client.patch(
        "/api/v1/organizations/2", json={"name": "Renamed"}, headers=auth_headers(Role.ADMIN, 2)
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"


async def test_resending_current_access_level_is_not_a_change(
    client: AsyncClient, auth_headers
) -> None:
    response = await client.patch(
        "/api/v1/organizations/2",
        json={"access_level": "isolated", "name": "Same Level"},
        headers=auth_headers(Role.ADMIN, 2),
    )
    assert response.status_code == 200


async def test_sibling_cannot_change_affiliate_access(client: AsyncClient, auth_headers) -> None:
    """Affiliate 3 sees sibling 2 but does not govern it."""
    response = await client.patch(
        "/api/v1/organizations/2",
        json={"access_level": "full_hierarchy"},
        headers=auth_headers(Role.ADMIN, 3),
    )
    assert response.status_code == 403


async def test_affiliate_cannot_detach_from_headquarters(client: AsyncClient, auth_headers) -> None:
    response = await client.patch(
        "/api/v1/organizations/3",
        json={"organization_type": "independent"},
        headers=auth_headers(Role.ADMIN, 3),
    )
    assert response.status_code == 403


async def test_headquarters_cannot_change_its_own_hierarchy(
    client: AsyncClient, auth_headers
) -> None:
    response = await client.patch(
        "/api/v1/organizations/1",
        json={"access_level": "full_hierarchy"},
        headers=auth_headers(Role.ADMIN, 1),
    )
    assert response.status_code == 403


async def test_only_parent_members_create_affiliates(client: AsyncClient, auth_headers) -> None:
    """Affiliate 3 sees headquarters 1 but cannot add organizations under it."""
    response = await client.post(
        "/api/v1/organizations",
        json={
            "name": "Shadow",
            "organization_type": "affiliate",
            "parent_organization_id": 1,
            "access_level": "full_hierarchy",
        },
        headers=auth_headers(Role.ADMIN, 3),
    )
    assert response.status_code == 403
