"""Unit tests for the data façade."""

from unittest.mock import AsyncMock

import pytest

from personachat.facade import DataService
from personachat.schemas import DataMode
from personachat.stores import ChatStore, DemoStore, LiveStore
from personachat.stores.seed import DEMO_USER_ID, MAYA_ID


@pytest.fixture
def mock_store():
    """Mock store recording the calls routed to it."""
    store = AsyncMock(spec=ChatStore)
    store.mode = DataMode.LIVE
    return store


def test_from_settings_demo(settings):
    service = DataService.from_settings(settings, DataMode.DEMO)

    assert isinstance(service.store, DemoStore)
    assert service.mode == DataMode.DEMO
    assert service.is_demo


async def test_from_settings_live(settings):
    service = DataService.from_settings(
        settings.model_copy(update={"ANON_KEY": "anon"}), DataMode.LIVE, access_token="user-token",
    )
    async with service:
        assert isinstance(service.store, LiveStore)
        assert not service.is_demo
        headers = service.store.headers
        assert headers["apikey"] == "anon"
        assert headers["Authorization"] == "Bearer user-token"


@pytest.mark.parametrize(
    "method, args",
    [
        ("list_characters", ()),
        ("get_character", (MAYA_ID,)),
        ("list_sessions", (DEMO_USER_ID,)),
        ("list_messages", (DEMO_USER_ID, MAYA_ID)),
        ("send_message", (DEMO_USER_ID, MAYA_ID, "hello")),
        ("get_profile", (DEMO_USER_ID,)),
    ],
)
async def test_operations_delegate_to_store(mock_store, method, args):
    getattr(mock_store, method).return_value = "sentinel"
    service = DataService(mock_store)

    assert await getattr(service, method)(*args) == "sentinel"
    getattr(mock_store, method).assert_awaited_once_with(*args)


async def test_context_manager_closes_store(mock_store):
    async with DataService(mock_store):
        pass
    mock_store.aclose.assert_awaited_once()


async def test_demo_exchange_through_facade():
    service = DataService(DemoStore())

    result = await service.send_message(DEMO_USER_ID, MAYA_ID, "hello")

    assert result is not None
    history = await service.list_messages(DEMO_USER_ID, MAYA_ID)
    assert history[-1].id == result.ai_message.id
