from __future__ import annotations

from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest
from fastapi import HTTPException

from app.core.enums import RoleEnum
from app.core.security import create_access_token
from app.modules.identity.service import IdentityService
from app.shared.exceptions import UnauthorizedException


class FakeIdentityRepository:
    def __init__(self, *users: SimpleNamespace) -> None:
        self._users = {user.id: user for user in users}

    async def get_user_by_id(self, user_id: UUID) -> SimpleNamespace | None:
        return self._users.get(user_id)


def _user(*, is_active: bool = True) -> SimpleNamespace:
    return SimpleNamespace(id=uuid4(), role=RoleEnum.TOURIST, name="Marta", is_active=is_active)


@pytest.mark.asyncio
async def test_access_token_resolves_user() -> None:
    user = _user()
    service = IdentityService(FakeIdentityRepository(user))

    resolved = await service.get_user_from_access_token(create_access_token(str(user.id)))

    assert resolved is user


@pytest.mark.asyncio
async def test_token_of_other_type_is_rejected() -> None:
    user = _user()
    service = IdentityService(FakeIdentityRepository(user))

    with pytest.raises(UnauthorizedException):
        await service.get_user_from_access_token(create_access_token(str(user.id), type="refresh"))


@pytest.mark.asyncio
async def test_malformed_subject_is_rejected() -> None:
    service = IdentityService(FakeIdentityRepository())

    with pytest.raises(UnauthorizedException):
        await service.get_user_from_access_token(create_access_token("not-a-uuid"))


@pytest.mark.asyncio
async def test_unknown_or_inactive_user_is_rejected() -> None:
    inactive = _user(is_active=False)
    service = IdentityService(FakeIdentityRepository(inactive))

    with pytest.raises(UnauthorizedException):
        await service.get_user_from_access_token(create_access_token(str(uuid4())))
    with pytest.raises(UnauthorizedException):
        await service.get_user_from_access_token(create_access_token(str(inactive.id)))


@pytest.mark.asyncio
async def test_tampered_token_is_unauthenticated() -> None:
    service = IdentityService(FakeIdentityRepository())

    with pytest.raises(HTTPException) as exc:
        await service.get_user_from_access_token(create_access_token(str(uuid4())) + "x")
    assert exc.value.status_code == 401
