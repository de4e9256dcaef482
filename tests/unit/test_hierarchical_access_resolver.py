"""Tests for HierarchicalAccessResolver (role rank AND organization reachability)."""

import pytest

from geolab.application.services.hierarchical_access_resolver import (
    HierarchicalAccessResolver,
)
from geolab.domain.entities.actor import Actor
from geolab.domain.enums import AccessLevel, OrganizationType, Role
from geolab.domain.exceptions import UnknownRoleException


def _actor(role: Role, organization_id: int | None) -> Actor:
    return Actor(uid="actor", role=role, organization_id=organization_id, email="a@lab.test")


@pytest.fixture
def headquarters_and_isolated_affiliate(directory_factory, make_org):
    """H (id=1, headquarters) and A (id=2, affiliate of 1, isolated)."""
    return directory_factory(
        [
            make_org(1, OrganizationType.HEADQUARTERS),
            make_org(2, OrganizationType.AFFILIATE, parent=1, access_level=AccessLevel.ISOLATED),
        ]
    )


async def test_admin_at_headquarters_filters_affiliate_users(
    headquarters_and_isolated_affiliate, make_user
) -> None:
    """ADMIN in H keeps VIEWER and ADMIN of A, drops DEVELOPER of A."""
    resolver = HierarchicalAccessResolver.for_request(headquarters_and_isolated_affiliate)
    u1 = make_user(1, Role.VIEWER, 2)
    u2 = make_user(2, Role.ADMIN, 2)
    u3 = make_user(3, Role.DEVELOPER, 2)
    result = await resolver.filter_users(_actor(Role.ADMIN, 1), [u1, u2, u3])
    assert result == [u1, u2]


async def test_isolated_affiliate_member_cannot_access_headquarters(
    headquarters_and_isolated_affiliate,
) -> None:
    resolver = HierarchicalAccessResolver.for_request(headquarters_and_isolated_affiliate)
    assert await resolver.can_access_organization(_actor(Role.VIEWER, 2), 1) is False
    assert await resolver.can_access_organization(_actor(Role.VIEWER, 2), 2) is True


async def test_role_check_alone_is_not_enough(hierarchy, make_user) -> None:
    """DEVELOPER in an isolated affiliate cannot reach a VIEWER at headquarters."""
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    assert await resolver.can_access_user(_actor(Role.DEVELOPER, 2), make_user(1, Role.VIEWER, 1)) is False


async def test_organization_check_alone_is_not_enough(hierarchy, make_user) -> None:
    """VIEWER at headquarters can see the affiliate but not an ADMIN there."""
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    actor = _actor(Role.VIEWER, 1)
    assert await resolver.can_access_organization(actor, 2) is True
    assert await resolver.can_access_user(actor, make_user(1, Role.ADMIN, 2)) is False


async def test_access_is_not_symmetric(hierarchy, make_user) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    hq_admin = _actor(Role.ADMIN, 1)
    affiliate_admin = _actor(Role.ADMIN, 2)
    assert await resolver.can_access_user(hq_admin, make_user(1, Role.ADMIN, 2)) is True
    assert await resolver.can_access_user(affiliate_admin, make_user(2, Role.ADMIN, 1)) is False


async def test_peer_in_same_organization_is_accessible(hierarchy, make_user) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    assert await resolver.can_access_user(_actor(Role.TECHNICIAN, 5), make_user(1, Role.TECHNICIAN, 5))


async def test_missing_organization_on_either_side_denies(hierarchy, make_user) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    assert await resolver.can_access_user(_actor(Role.DEVELOPER, None), make_user(1, Role.VIEWER, 1)) is False
    assert await resolver.can_access_user(_actor(Role.DEVELOPER, 1), make_user(1, Role.VIEWER, None)) is False


async def test_actor_without_organization_cannot_access_any_organization(hierarchy) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    actor = _actor(Role.DEVELOPER, None)
    assert await resolver.can_access_organization(actor, 1) is False
    assert await resolver.accessible_organizations(actor) == frozenset()
    assert hierarchy.calls == []


async def test_check_user_access_reports_internal_reason(hierarchy, make_user) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    denied = await resolver.check_user_access(_actor(Role.VIEWER, 1), make_user(1, Role.ADMIN, 1))
    assert denied.allowed is False
    assert "role" in denied.reason
    outside = await resolver.check_user_access(_actor(Role.ADMIN, 2), make_user(1, Role.VIEWER, 1))
    assert outside.allowed is False
    assert "organization" in outside.reason
    allowed = await resolver.check_user_access(_actor(Role.ADMIN, 1), make_user(1, Role.VIEWER, 2))
    assert allowed.allowed is True
    assert allowed.reason is None


async def test_unknown_target_role_raises_even_without_organization(hierarchy, make_user) -> None:
    """Role validation runs first, so an unknown label is never masked by a denial."""
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    with pytest.raises(UnknownRoleException):
        await resolver.can_access_user(_actor(Role.DEVELOPER, 1), make_user(1, "SUPER_ADMIN", None))


async def test_filter_users_raises_on_unknown_role(hierarchy, make_user) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    candidates = [make_user(1, Role.VIEWER, 1), make_user(2, "ROOT", 1)]
    with pytest.raises(UnknownRoleException):
        await resolver.filter_users(_actor(Role.ADMIN, 1), candidates)


async def test_filter_users_preserves_order_and_never_fabricates(hierarchy, make_user) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    candidates = [
        make_user(5, Role.VIEWER, 4),
        make_user(1, Role.DEVELOPER, 1),
        make_user(3, Role.SUPERVISOR, 1),
        make_user(2, Role.TECHNICIAN, 6),
        make_user(4, Role.MANAGER, 2),
    ]
    snapshot = list(candidates)
    result = await resolver.filter_users(_actor(Role.MANAGER, 1), candidates)
    assert [u.id for u in result] == [5, 3, 4]
    assert all(any(u is c for c in candidates) for u in result)
    assert candidates == snapshot


async def test_filter_users_accepts_any_iterable(hierarchy, make_user) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    users = (make_user(i, Role.VIEWER, 1) for i in range(3))
    assert len(await resolver.filter_users(_actor(Role.VIEWER, 1), users)) == 3


async def test_filter_users_resolves_hierarchy_once_per_request(hierarchy, make_user) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    candidates = [make_user(i, Role.VIEWER, 1 + i % 4) for i in range(20)]
    await resolver.filter_users(_actor(Role.ADMIN, 1), candidates)
    assert hierarchy.calls.count(("get_by_id", 1)) == 1


async def test_can_access_organization_ignores_role(hierarchy) -> None:
    resolver = HierarchicalAccessResolver.for_request(hierarchy)
    for role in Role:
        assert await resolver.can_access_organization(_actor(role, 3), 2) is True
        assert await resolver.can_access_organization(_actor(role, 3), 6) is False
