"""Seed dev data from docs/seed-data.json into Postgres.

Creates offerings and organization members (idempotent: existing rows are
left untouched) and prints a bearer token per member when AUTH_MODE=jwt.

Usage:
    uv run python -m scripts.seed_dev_data [path/to/seed-data.json]

Default path: docs/seed-data.json (relative to project root).
Requires: DATABASE_URL (Postgres) and `alembic upgrade head`.
"""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession

from offering_docs.core.config import get_settings
from offering_docs.domain.enums import OfferingRole
from offering_docs.infrastructure.persistence.models import Offering, OrganizationMember
from offering_docs.infrastructure.security.jwt import create_access_token


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_* when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def _seed(session: AsyncSession, data: dict) -> list[OrganizationMember]:
    for item in data.get("offerings", []):
        if await session.get(Offering, item["id"]) is None:
            session.add(
                Offering(
                    id=item["id"],
                    organization_id=item["organization_id"],
                    name=item["name"],
                )
            )
            print(f"Offering created: {item['id']}")

    members: list[OrganizationMember] = []
    for item in data.get("members", []):
        role = OfferingRole.normalize(item["role"])
        if role is None:
            print(f"Skipping member {item['user_id']}: unknown role {item['role']!r}", file=sys.stderr)
            continue
        key = (item["organization_id"], item["user_id"])
        member = await session.get(OrganizationMember, key)
        if member is None:
            member = OrganizationMember(
                organization_id=item["organization_id"],
                user_id=item["user_id"],
                role=role.value,
            )
            session.add(member)
            print(f"Member created: {item['user_id']} ({role.value})")
        members.append(member)
    return members


async def run(path: Path) -> None:
    _load_env()
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open() as f:
        data = json.load(f)

    from offering_docs.infrastructure.persistence import database as db_mod

    db_mod._ensure_engine()
    if db_mod.AsyncSessionLocal is None:
        print(
            "AsyncSessionLocal not configured. Set DATABASE_URL and run: uv run alembic upgrade head",
            file=sys.stderr,
        )
        sys.exit(1)

    async with db_mod.AsyncSessionLocal() as session:
        async with session.begin():
            members = await _seed(session, data)
    await db_mod.dispose_engine()

    settings = get_settings()
    if settings.auth_mode != "jwt":
        return
    secret = settings.secret_key.get_secret_value()
    for member in members:
        token = create_access_token(
            {"sub": member.user_id},
            secret,
            algorithm=settings.algorithm,
            expires_delta=timedelta(days=7),
        )
        print(f"{member.user_id}: {token}")


def main() -> None:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else _project_root() / "docs" / "seed-data.json"
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
