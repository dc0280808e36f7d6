"""Offering and membership lookups for the access gate. Read-only."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from offering_docs.application.dtos.offering import MembershipResult, OfferingResult
from offering_docs.domain.enums import OfferingRole
from offering_docs.infrastructure.persistence.models.offering import (
    Offering,
    OrganizationMember,
)
from offering_docs.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class OfferingRepository(BaseRepository[Offering]):
    """Implements IOfferingRepository over offering and organization_member."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Offering)

    async def get_offering(self, offering_id: str) -> OfferingResult | None:
        row = await self._get_orm(offering_id)
        if row is None:
            return None
        return OfferingResult(
            id=row.id, organization_id=row.organization_id, name=row.name
        )

    async def get_membership(
        self, organization_id: str, user_id: str
    ) -> MembershipResult | None:
        result = await self.db.execute(
            select(OrganizationMember).where(
                OrganizationMember.organization_id == organization_id,
                OrganizationMember.user_id == user_id,
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        role = OfferingRole.normalize(row.role)
        if role is None:
            logger.warning(
                "Unknown role %r for user %s in organization %s",
                row.role,
                user_id,
                organization_id,
            )
            return None
        return MembershipResult(
            organization_id=row.organization_id, user_id=row.user_id, role=role
        )
