"""Tests for the privileged action service."""

import asyncio

from photoboard.containers import AppContainer
from photoboard.domain.models import Message
from tests.conftest import ADMIN_PASSWORD, FakeConnection, make_photo


def test_verify_password(container: AppContainer) -> None:
    admin = container.admin_service

    assert admin.verify_password(ADMIN_PASSWORD) is True
    assert admin.verify_password("") is False
    assert admin.verify_password(ADMIN_PASSWORD + " ") is False


def test_wrong_password_changes_nothing(container: AppContainer) -> None:
    container.state_store.append_photo(
        make_photo("p1", [Message(date="D1", text="hi")])
    )
    connection = FakeConnection()

    async def scenario() -> list[bool]:
        await container.hub.connect(connection)
        results = [
            await container.admin_service.wipe("wrong"),
            await container.admin_service.close_site("wrong"),
            await container.admin_service.open_site("wrong"),
        ]
        await container.hub.flush()
        await container.persistence.drain()
        return [result.success for result in results]

    assert asyncio.run(scenario()) == [False, False, False]
    assert [photo.id for photo in container.state_store.photos] == ["p1"]
    assert container.state_store.is_site_closed is False
    assert connection.types == ["history"]


def test_valid_password_applies_and_broadcasts(container: AppContainer) -> None:
    container.state_store.append_photo(make_photo("p1"))
    connection = FakeConnection()

    async def scenario() -> list[str]:
        await container.hub.connect(connection)
        closed = await container.admin_service.close_site(ADMIN_PASSWORD)
        wiped = await container.admin_service.wipe(ADMIN_PASSWORD)
        await container.hub.flush()
        await container.persistence.drain()
        return [closed.message, wiped.message]

    assert asyncio.run(scenario()) == ["Site closed", "All data wiped"]
    assert container.state_store.photos == []
    assert connection.types == ["history", "site-closed", "wipe", "site-opened"]
