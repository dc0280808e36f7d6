"""AuthorizationService: role ladder viewer < editor < manager < owner."""

import pytest

from offering_docs.application.services.authorization_service import AuthorizationService
from offering_docs.domain.enums import OfferingRole, Permission
from offering_docs.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
)
from tests.conftest import OFFERING_ID


@pytest.mark.parametrize(
    ("user_id", "permission", "allowed"),
    [
        ("viewer-1", Permission.READ, True),
        ("viewer-1", Permission.WRITE, False),
        ("viewer-1", Permission.DELETE, False),
        ("editor-1", Permission.READ, True),
        ("editor-1", Permission.WRITE, True),
        ("editor-1", Permission.DELETE, False),
        ("manager-1", Permission.WRITE, True),
        ("manager-1", Permission.DELETE, True),
        ("owner-1", Permission.DELETE, True),
        ("stranger", Permission.READ, False),
    ],
)
async def test_permission_matrix(offering_repo, user_id, permission, allowed) -> None:
    gate = AuthorizationService(offering_repo)
    if allowed:
        role = await gate.authorize(user_id, OFFERING_ID, permission)
        assert role.allows(permission)
    else:
        with pytest.raises(AuthorizationException) as exc_info:
            await gate.authorize(user_id, OFFERING_ID, permission)
        assert exc_info.value.error_code == "ACCESS_DENIED"
        assert exc_info.value.details == {"resource": "offering", "action": permission.value}


async def test_unknown_offering_is_not_found(offering_repo) -> None:
    gate = AuthorizationService(offering_repo)
    with pytest.raises(ResourceNotFoundException):
        await gate.authorize("owner-1", "missing", Permission.READ)


async def test_get_role_returns_none_for_non_member(offering_repo) -> None:
    gate = AuthorizationService(offering_repo)
    assert await gate.get_role("stranger", OFFERING_ID) is None
    assert await gate.get_role("editor-1", OFFERING_ID) is OfferingRole.EDITOR


def test_role_ranks_are_ordered() -> None:
    ranks = [r.rank for r in (OfferingRole.VIEWER, OfferingRole.EDITOR, OfferingRole.MANAGER, OfferingRole.OWNER)]
    assert ranks == sorted(ranks)
