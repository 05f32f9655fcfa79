"""
Тесты HTTP клиента индексатора
"""
import asyncio
import pytest
import aiohttp
from unittest.mock import Mock, AsyncMock, MagicMock

from app.clients.electrs_client import ElectrsClient
from app.errors import UpstreamError


def make_session(status: int = 200, body: str = ""):
    """Мок aiohttp сессии с одним ответом"""
    response = Mock()
    response.status = status
    response.text = AsyncMock(return_value=body)

    session = MagicMock()
    session.closed = False
    session.get.return_value.__aenter__.return_value = response
    session.get.return_value.__aexit__.return_value = False
    session.close = AsyncMock()
    return session


class TestElectrsClient:
    """Тесты ElectrsClient"""

    def test_initialization(self, test_settings):
        client = ElectrsClient(test_settings)

        assert client.base_url == "http://electrs.test:50010"
        assert client.timeout.total == 10.0
        assert client.total_requests == 0
        assert client.failed_requests == 0

    @pytest.mark.asyncio
    async def test_fetch_json(self, test_settings):
        session = make_session(body='[{"id": "00ff", "height": 1}]')
        client = ElectrsClient(test_settings, session=session)

        data = await client.fetch("/blocks")

        assert data == [{"id": "00ff", "height": 1}]
        assert session.get.call_args[0][0] == "http://electrs.test:50010/blocks"
        assert client.total_requests == 1

    @pytest.mark.asyncio
    async def test_fetch_plain_text(self, test_settings):
        """Высота приходит числом, хэш - строкой"""
        client = ElectrsClient(test_settings, session=make_session(body="840000"))
        assert await client.fetch("/blocks/tip/height") == 840000

        block_hash = "0000000000000000000" + "a" * 45
        client = ElectrsClient(test_settings, session=make_session(body=block_hash + "\n"))
        assert await client.fetch("/block-height/840000") == block_hash

    @pytest.mark.asyncio
    async def test_non_success_status(self, test_settings):
        client = ElectrsClient(test_settings, session=make_session(status=404, body="Block not found"))

        with pytest.raises(UpstreamError) as exc_info:
            await client.fetch("/block/deadbeef")

        assert exc_info.value.endpoint == "/block/deadbeef"
        assert exc_info.value.status == 404
        assert "404" in exc_info.value.message
        assert client.failed_requests == 1

    @pytest.mark.asyncio
    async def test_connection_error(self, test_settings):
        session = make_session()
        session.get.side_effect = aiohttp.ClientConnectionError("Connection refused")
        client = ElectrsClient(test_settings, session=session)

        with pytest.raises(UpstreamError) as exc_info:
            await client.fetch("/blocks")

        assert exc_info.value.message == "Connection refused"
        assert exc_info.value.status is None

    @pytest.mark.asyncio
    async def test_timeout(self, test_settings):
        session = make_session()
        session.get.return_value.__aenter__.side_effect = asyncio.TimeoutError()
        client = ElectrsClient(test_settings, session=session)

        with pytest.raises(UpstreamError) as exc_info:
            await client.fetch("/blocks")

        assert "timeout" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_fetch_optional(self, test_settings):
        client = ElectrsClient(test_settings, session=make_session(status=500))

        assert await client.fetch_optional("/mempool/recent", []) == []
        assert await client.fetch_optional("/mempool/recent") is None

    @pytest.mark.asyncio
    async def test_concurrent_fetches(self, test_settings):
        client = ElectrsClient(test_settings, session=make_session(body="1"))

        results = await asyncio.gather(*(client.fetch(f"/blocks/{i}") for i in range(5)))

        assert results == [1] * 5
        assert client.total_requests == 5

    @pytest.mark.asyncio
    async def test_close(self, test_settings):
        session = make_session()
        client = ElectrsClient(test_settings, session=session)

        await client.close()

        session.close.assert_awaited_once()
