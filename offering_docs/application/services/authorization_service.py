"""Authorization service: per-offering role checks against organization membership."""

from __future__ import annotations

import logging

from offering_docs.application.interfaces.repositories import IOfferingRepository
from offering_docs.domain.enums import MINIMUM_ROLE, OfferingRole, Permission
from offering_docs.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Resolves the caller's role in the offering's organization and checks it."""

    def __init__(self, offering_repo: IOfferingRepository) -> None:
        self.offering_repo = offering_repo

    async def get_role(self, user_id: str, offering_id: str) -> OfferingRole | None:
        """Return the user's role for the offering, None when not a member.

        Raises:
            ResourceNotFoundException: Offering does not exist.
        """
        offering = await self.offering_repo.get_offering(offering_id)
        if offering is None:
            raise ResourceNotFoundException("offering", offering_id)
        membership = await self.offering_repo.get_membership(
            offering.organization_id, user_id
        )
        return membership.role if membership else None

    async def authorize(
        self, user_id: str, offering_id: str, permission: Permission
    ) -> OfferingRole:
        """Return the caller's role, or raise when it does not grant permission."""
        role = await self.get_role(user_id, offering_id)
        if role is None or not role.allows(permission):
            logger.info(
                "Denied %s on offering %s for user %s (role=%s, required=%s)",
                permission.value,
                offering_id,
                user_id,
                role.value if role else None,
                MINIMUM_ROLE[permission].value,
            )
            raise AuthorizationException(resource="offering", action=permission.value)
        return role
