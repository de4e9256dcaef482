"""Organization access resolver: which organizations a home organization can see.

One level up, one level down; the hierarchy is never walked further. Reads
go through IOrganizationDirectory; nothing here writes.
"""

from __future__ import annotations

import logging

from geolab.application.interfaces.repositories import IOrganizationDirectory
from geolab.domain.enums import AccessLevel, OrganizationType
from geolab.domain.exceptions import OrganizationLookupFailedException
from geolab.shared.telemetry.telemetry import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class OrganizationAccessResolver:
    """Computes accessible organization sets with fail-safe degradation.

    In default mode a failed or missing directory lookup degrades to the home
    organization alone and is logged at WARNING. In strict mode the same
    conditions raise OrganizationLookupFailedException.

    Results are memoized per instance, so one instance must serve one request
    only: hierarchy changes between requests are never hidden by the memo.
    """

    def __init__(self, directory: IOrganizationDirectory, *, strict: bool = False) -> None:
        self.directory = directory
        self.strict = strict
        self._memo: dict[int, frozenset[int]] = {}

    async def accessible_organizations(self, home_org_id: int) -> frozenset[int]:
        """Return the ids visible from home_org_id. Always contains home_org_id.

        - headquarters: itself and all of its affiliates;
        - affiliate: itself; plus the parent with parent_access; plus the
          parent and its affiliates (siblings) with full_hierarchy;
        - independent: exactly itself, regardless of access level.

        Raises:
            OrganizationLookupFailedException: Only in strict mode.
        """
        cached = self._memo.get(home_org_id)
        if cached is not None:
            return cached
        with tracer.start_as_current_span("organization_access.resolve") as span:
            span.set_attribute("geolab.home_organization_id", home_org_id)
            try:
                accessible = await self._resolve(home_org_id)
            except OrganizationLookupFailedException as exc:
                if self.strict:
                    raise
                logger.warning(
                    "Organization lookup failed for %s; restricting to home organization: %s",
                    home_org_id,
                    exc.details.get("reason", exc.message),
                )
                span.set_attribute("geolab.access_degraded", True)
                accessible = frozenset({home_org_id})
            span.set_attribute("geolab.accessible_count", len(accessible))
        self._memo[home_org_id] = accessible
        return accessible

    async def can_access_organization(self, home_org_id: int, target_org_id: int) -> bool:
        """Return True when target_org_id is in accessible_organizations(home_org_id)."""
        return target_org_id in await self.accessible_organizations(home_org_id)

    async def _resolve(self, home_org_id: int) -> frozenset[int]:
        try:
            return await self._expand(home_org_id)
        except OrganizationLookupFailedException:
            raise
        except Exception as exc:
            # Directory implementations may leak driver, network or decode errors.
            raise OrganizationLookupFailedException(
                home_org_id, exc.__class__.__name__
            ) from exc

    async def _expand(self, home_org_id: int) -> frozenset[int]:
        home = await self.directory.get_by_id(home_org_id)
        if home is None:
            if self.strict:
                raise OrganizationLookupFailedException(home_org_id, "organization not found")
            logger.warning(
                "Organization %s not found; restricting to home organization", home_org_id
            )
            return frozenset({home_org_id})

        accessible = {home_org_id}
        if home.organization_type == OrganizationType.HEADQUARTERS:
            affiliates = await self.directory.list_affiliates(home_org_id)
            accessible.update(org.id for org in affiliates)
        elif home.organization_type == OrganizationType.AFFILIATE:
            parent_id = home.parent_organization_id
            if parent_id is not None and home.access_level == AccessLevel.PARENT_ACCESS:
                accessible.add(parent_id)
            elif parent_id is not None and home.access_level == AccessLevel.FULL_HIERARCHY:
                accessible.add(parent_id)
                siblings = await self.directory.list_affiliates(parent_id)
                accessible.update(org.id for org in siblings)
        return frozenset(accessible)
