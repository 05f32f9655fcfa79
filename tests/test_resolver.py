"""
Тесты определения сущности по поисковому запросу
"""
import logging
import pytest

from app.errors import NotFoundError
from app.services.resolver import EntityResolver, ResolvedEntity


class TestEntityResolver:
    """Порядок проверок и короткое замыкание"""

    @pytest.fixture
    def resolver(self, mock_client):
        return EntityResolver(mock_client)

    @pytest.mark.asyncio
    async def test_block_height(self, resolver, mock_client):
        block = mock_client.block_at(29)

        entity = await resolver.resolve("29")

        assert entity.kind == "block_height"
        assert entity.target == block["id"]
        assert entity.route == f"/block/{block['id']}"
        # Адрес уже не проверяется
        assert mock_client.requests == ["/block-height/29"]

    @pytest.mark.asyncio
    async def test_unknown_height_falls_through_to_address(self, resolver, mock_client):
        with pytest.raises(NotFoundError) as exc_info:
            await resolver.resolve("840000")

        assert mock_client.requests == ["/block-height/840000", "/address/840000"]
        assert exc_info.value.query == "840000"
        assert "840000" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_numeric_address(self, resolver, mock_client):
        mock_client.add_address("123456789", chain_stats={})

        entity = await resolver.resolve("123456789")

        assert entity.kind == "address"
        assert entity.route == "/address/123456789"

    @pytest.mark.asyncio
    async def test_block_hash(self, resolver, mock_client):
        block_hash = mock_client.block_at(10)["id"]

        entity = await resolver.resolve(block_hash)

        assert entity.kind == "block"
        assert entity.route == f"/block/{block_hash}"
        assert mock_client.requests == [f"/block/{block_hash}"]

    @pytest.mark.asyncio
    async def test_txid(self, resolver, mock_client):
        txid = mock_client.block_txs[mock_client.block_at(10)["id"]][1]["txid"]

        entity = await resolver.resolve(txid)

        assert entity.kind == "transaction"
        assert entity.route == f"/tx/{txid}"
        assert mock_client.requests == [f"/block/{txid}", f"/tx/{txid}"]

    @pytest.mark.asyncio
    async def test_unknown_hash(self, resolver, mock_client):
        query = "9" * 63 + "f"

        with pytest.raises(NotFoundError):
            await resolver.resolve(query)

        assert mock_client.requests == [f"/block/{query}", f"/tx/{query}", f"/address/{query}"]

    @pytest.mark.asyncio
    async def test_address(self, resolver, mock_client):
        entity = await resolver.resolve("  DTestAddress1111111111111111111111  ")

        assert entity == ResolvedEntity(
            kind="address",
            target="DTestAddress1111111111111111111111",
            query="DTestAddress1111111111111111111111"
        )
        assert mock_client.requests == ["/address/DTestAddress1111111111111111111111"]

    @pytest.mark.asyncio
    async def test_not_found(self, resolver):
        with pytest.raises(NotFoundError) as exc_info:
            await resolver.resolve("no-such-thing")

        assert exc_info.value.message == (
            "Could not find block, transaction, or address matching: no-such-thing"
        )

    @pytest.mark.asyncio
    async def test_try_resolve_returns_none(self, resolver):
        assert await resolver.try_resolve("no-such-thing") is None

    @pytest.mark.asyncio
    async def test_empty_query(self, resolver, mock_client):
        with pytest.raises(NotFoundError):
            await resolver.resolve("   ")

        assert mock_client.requests == []

    @pytest.mark.asyncio
    async def test_probe_failures_not_logged_as_errors(self, resolver, caplog):
        with caplog.at_level(logging.DEBUG, logger="app.services.resolver"):
            with pytest.raises(NotFoundError):
                await resolver.resolve("840000")

        resolver_records = [r for r in caplog.records if r.name == "app.services.resolver"]
        assert all(r.levelno < logging.WARNING for r in resolver_records)
        assert [r.event for r in resolver_records] == ["search_not_found"]

    def test_probe_order(self, resolver):
        assert len(resolver.probes("100")) == 2
        assert len(resolver.probes("1" * 64)) == 4
        assert len(resolver.probes("ab" * 32)) == 3
        assert len(resolver.probes("ab" * 31)) == 1

    @pytest.mark.asyncio
    async def test_all_digit_txid(self, resolver, mock_client):
        txid = "1" * 64
        mock_client.transactions[txid] = {"txid": txid, "vin": [], "vout": []}

        entity = await resolver.resolve(txid)

        assert entity.kind == "transaction"
        assert entity.route == f"/tx/{txid}"
        assert mock_client.requests == [f"/block-height/{txid}", f"/block/{txid}", f"/tx/{txid}"]
