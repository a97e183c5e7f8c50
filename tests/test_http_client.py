"""
Tests for HTTPStructureService.
"""
import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from structures_cli.client import (
    HTTPStructureService,
    RemoteSyncError,
    StructuresAuthError,
    StructuresConnectionError,
    StructuresTimeoutError,
)
from structures_cli.config import ServerConfig
from structures_cli.models import ObjectC3Type, PrimitiveC3Type, Structure

BASE_URL = "http://localhost:8080/api/structures"


def make_session(status: int = 200, body: str = "", reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.text = AsyncMock(return_value=body)

    session = MagicMock(spec=aiohttp.ClientSession)
    session.closed = False
    session.close = AsyncMock()
    session.request.return_value.__aenter__.return_value = response
    session.request.return_value.__aexit__.return_value = None
    return session


@pytest.fixture
def structure():
    entity = ObjectC3Type(namespace="crm", name="Person").add_property("name", PrimitiveC3Type(type="string"))
    return Structure.from_entity(entity)


@pytest.mark.asyncio
async def test_find_by_id_returns_structure(structure):
    session = make_session(body=json.dumps({**structure.to_wire(), "published": True, "created": 1700000000}))
    service = HTTPStructureService(ServerConfig(), aiohttp_session=session)

    found = await service.find_by_id("crm.person")

    assert found.published is True
    assert found.created == 1700000000
    assert found.entity_definition == structure.entity_definition
    args, kwargs = session.request.call_args
    assert args == ("GET", f"{BASE_URL}/crm.person")
    assert kwargs["json"] is None
    assert kwargs["timeout"].total == 60.0


@pytest.mark.asyncio
async def test_find_by_id_returns_none_when_missing():
    service = HTTPStructureService(ServerConfig(), aiohttp_session=make_session(status=404, reason="Not Found"))
    assert await service.find_by_id("crm.missing") is None


@pytest.mark.asyncio
async def test_create_posts_wire_document(structure):
    session = make_session(body="")
    service = HTTPStructureService(ServerConfig(), aiohttp_session=session)

    created = await service.create(structure)

    assert created is structure
    args, kwargs = session.request.call_args
    assert args == ("POST", BASE_URL)
    assert kwargs["json"]["entityDefinition"]["name"] == "Person"
    assert kwargs["json"]["id"] == "crm.person"


@pytest.mark.asyncio
async def test_save_publish_unpublish_delete_urls(structure):
    session = make_session(body=json.dumps(structure.to_wire()))
    service = HTTPStructureService(ServerConfig(url="https://structures.example.com", api_path="/v1/structures/"),
                                   aiohttp_session=session)

    await service.save(structure)
    await service.publish("crm.person")
    await service.un_publish("crm.person")
    await service.delete_by_id("crm.person")

    calls = [c.args for c in session.request.call_args_list]
    assert calls == [
        ("PUT", "https://structures.example.com/v1/structures/crm.person"),
        ("PUT", "https://structures.example.com/v1/structures/crm.person/publish"),
        ("PUT", "https://structures.example.com/v1/structures/crm.person/unpublish"),
        ("DELETE", "https://structures.example.com/v1/structures/crm.person"),
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_auth_errors(status):
    service = HTTPStructureService(ServerConfig(), aiohttp_session=make_session(status=status, body="denied"))
    with pytest.raises(StructuresAuthError) as exc_info:
        await service.publish("crm.person")
    assert exc_info.value.status == status
    assert exc_info.value.structure_id == "crm.person"


@pytest.mark.asyncio
async def test_server_error_status():
    service = HTTPStructureService(ServerConfig(), aiohttp_session=make_session(status=500, reason="Internal Server Error"))
    with pytest.raises(RemoteSyncError, match="HTTP error 500"):
        await service.delete_by_id("crm.person")


@pytest.mark.asyncio
async def test_invalid_json_response():
    service = HTTPStructureService(ServerConfig(), aiohttp_session=make_session(body="<html>"))
    with pytest.raises(RemoteSyncError, match="Failed to decode JSON") as exc_info:
        await service.find_by_id("crm.person")
    assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)


@pytest.mark.asyncio
async def test_invalid_structure_response():
    service = HTTPStructureService(ServerConfig(), aiohttp_session=make_session(body=json.dumps({"name": "x"})))
    with pytest.raises(RemoteSyncError, match="Invalid structure"):
        await service.find_by_id("crm.person")


@pytest.mark.asyncio
async def test_timeout_is_wrapped():
    session = make_session()
    session.request.side_effect = asyncio.TimeoutError()
    service = HTTPStructureService(ServerConfig(request_timeout_seconds=5), aiohttp_session=session)

    with pytest.raises(StructuresTimeoutError, match="timed out after 5.0s"):
        await service.find_by_id("crm.person")


@pytest.mark.asyncio
async def test_connection_errors_are_wrapped():
    session = make_session()
    session.request.side_effect = aiohttp.ClientConnectorError(MagicMock(), OSError("Connection refused"))
    service = HTTPStructureService(ServerConfig(), aiohttp_session=session)

    with pytest.raises(StructuresConnectionError, match="Connection failed") as exc_info:
        await service.publish("crm.person")
    assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectorError)

    session.request.side_effect = aiohttp.ClientPayloadError("truncated")
    with pytest.raises(StructuresConnectionError, match="HTTP client error"):
        await service.publish("crm.person")


@pytest.mark.asyncio
async def test_borrowed_session_is_not_closed():
    session = make_session()
    async with HTTPStructureService(ServerConfig(), aiohttp_session=session):
        pass
    session.close.assert_not_awaited()


@pytest.mark.asyncio
async def test_owned_session_uses_basic_auth_and_is_closed():
    created_session = make_session()
    config = ServerConfig(username="admin", password="secret")

    with patch("aiohttp.TCPConnector") as connector_cls, \
         patch("aiohttp.ClientSession", return_value=created_session) as session_cls:
        async with HTTPStructureService(config) as service:
            await service.publish("crm.person")

    connector_cls.assert_called_once_with(ssl=None)
    auth = session_cls.call_args.kwargs["auth"]
    assert auth == aiohttp.BasicAuth("admin", "secret")
    created_session.close.assert_awaited_once()
