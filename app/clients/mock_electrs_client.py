import asyncio
import hashlib
import re
import time
from typing import Optional, Dict, Any, List, Set
from urllib.parse import urlsplit, parse_qs

from app.errors import UpstreamError
from app.utils.constants import PAGE_SIZE
from app.utils.logging_config import StructuredLogger

logger = StructuredLogger(__name__)

# Electrs отдает 10 блоков на /blocks и /blocks/{height}
BLOCKS_PER_REQUEST = 10


def _fake_hash(*parts: Any) -> str:
    return hashlib.sha256(":".join(str(p) for p in parts).encode()).hexdigest()


class MockElectrsClient:
    """In-memory индексатор с контрактом ElectrsClient (тесты и локальная разработка)"""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.blocks: Dict[str, Dict] = {}  # hash -> блок
        self.block_txs: Dict[str, List[Dict]] = {}  # hash -> транзакции блока
        self.transactions: Dict[str, Dict] = {}
        self.addresses: Dict[str, Dict] = {}
        self.address_txs: Dict[str, Any] = {}
        self.address_utxos: Dict[str, Any] = {}
        self.mempool: List[Dict] = []
        self.supply: Optional[Dict] = None
        self.failing: Set[str] = set()  # эндпоинты (или префиксы), которые должны падать
        self.requests: List[str] = []

    # ========== НАПОЛНЕНИЕ ==========
    def add_block(self, height: int, timestamp: int, difficulty: float = 1.0,
                  txs: Optional[List[Dict]] = None, size: int = 1000) -> Dict:
        """Добавление блока поверх текущей вершины"""
        block_hash = _fake_hash("block", height, timestamp)
        prev = self.block_at(height - 1)
        txs = txs if txs is not None else [self.make_tx(f"coinbase-{height}", [None], [5000000000])]

        block = {
            "id": block_hash,
            "height": height,
            "timestamp": timestamp,
            "difficulty": difficulty,
            "size": size,
            "tx_count": len(txs),
            "previousblockhash": prev["id"] if prev else None,
        }
        self.blocks[block_hash] = block
        self.block_txs[block_hash] = txs
        for tx in txs:
            tx["status"] = {"confirmed": True, "block_height": height,
                            "block_hash": block_hash, "block_time": timestamp}
            self.transactions[tx["txid"]] = tx
        return block

    @staticmethod
    def make_tx(seed: str, input_values: List[Optional[int]], output_values: List[Optional[int]]) -> Dict:
        """Транзакция с заданными суммами входов и выходов"""
        return {
            "txid": _fake_hash("tx", seed),
            "vin": [
                {"prevout": None, "is_coinbase": True} if value is None
                else {"txid": _fake_hash("prev", seed, i), "vout": 0, "prevout": {"value": value}}
                for i, value in enumerate(input_values)
            ],
            "vout": [{"value": value} for value in output_values],
        }

    def add_address(self, address: str, chain_stats: Dict, mempool_stats: Optional[Dict] = None,
                    txs: Any = None, utxos: Any = None):
        self.addresses[address] = {
            "address": address,
            "chain_stats": chain_stats,
            "mempool_stats": mempool_stats or {},
        }
        self.address_txs[address] = txs if txs is not None else []
        self.address_utxos[address] = utxos if utxos is not None else []

    @classmethod
    def with_sample_chain(cls, length: int = 30, block_time: int = 120) -> "MockElectrsClient":
        """Цепочка из length блоков, последний добыт только что"""
        client = cls(delay=0.01)
        now = int(time.time())
        for height in range(length):
            client.add_block(height, now - (length - 1 - height) * block_time, difficulty=12345.6789)
        client.supply = {"total_amount_float": length * 50.0}
        return client

    def block_at(self, height: int) -> Optional[Dict]:
        for block in self.blocks.values():
            if block["height"] == height:
                return block
        return None

    @property
    def tip_height(self) -> int:
        return max((b["height"] for b in self.blocks.values()), default=0)

    # ========== КОНТРАКТ КЛИЕНТА ==========
    async def connect(self) -> None:
        return None

    async def close(self):
        return None

    async def fetch(self, endpoint: str) -> Any:
        """Ответ на GET запрос; неизвестные ресурсы дают UpstreamError(404)"""
        self.requests.append(endpoint)
        if self.delay:
            await asyncio.sleep(self.delay)

        if any(endpoint == f or endpoint.startswith(f + "?") for f in self.failing):
            logger.upstream_error(endpoint, "[MOCK] forced failure", 500)
            raise UpstreamError(endpoint, "Request failed with status code 500", 500)

        result = self._route(endpoint)
        if result is None:
            logger.upstream_error(endpoint, "[MOCK] not found", 404)
            raise UpstreamError(endpoint, "Request failed with status code 404", 404)
        return result

    async def fetch_optional(self, endpoint: str, default: Any = None) -> Any:
        try:
            return await self.fetch(endpoint)
        except UpstreamError:
            return default

    def _chain_from(self, start_height: int) -> List[Dict]:
        blocks = []
        for height in range(start_height, max(start_height - BLOCKS_PER_REQUEST, -1), -1):
            block = self.block_at(height)
            if block:
                blocks.append(block)
        return blocks

    def _route(self, endpoint: str) -> Any:
        parts = urlsplit(endpoint)
        path = parts.path
        query = {k: v[0] for k, v in parse_qs(parts.query).items()}
        start = int(query.get("start_index", 0))
        limit = int(query.get("limit", PAGE_SIZE))

        if path == "/blocks":
            return self._chain_from(self.tip_height) if self.blocks else []
        if path == "/blocks/tip/height":
            return self.tip_height if self.blocks else None
        if path == "/mempool/recent":
            return self.mempool
        if path == "/blockchain/getsupply":
            return self.supply

        if m := re.fullmatch(r"/blocks/(\d+)", path):
            return self._chain_from(int(m.group(1))) or None
        if m := re.fullmatch(r"/block-height/(\d+)", path):
            block = self.block_at(int(m.group(1)))
            return block["id"] if block else None
        if m := re.fullmatch(r"/block/([^/]+)/txs/(\d+)", path):
            txs = self.block_txs.get(m.group(1))
            return None if txs is None else txs[int(m.group(2)):int(m.group(2)) + PAGE_SIZE]
        if m := re.fullmatch(r"/block/([^/]+)", path):
            return self.blocks.get(m.group(1))
        if m := re.fullmatch(r"/tx/([^/]+)", path):
            return self.transactions.get(m.group(1))
        if m := re.fullmatch(r"/address/([^/]+)/txs", path):
            return self._page(self.address_txs.get(m.group(1)), "transactions", start, limit)
        if m := re.fullmatch(r"/address/([^/]+)/utxo", path):
            return self._page(self.address_utxos.get(m.group(1)), "utxos", start, limit)
        if m := re.fullmatch(r"/address/([^/]+)", path):
            return self.addresses.get(m.group(1))
        return None

    @staticmethod
    def _page(data: Any, key: str, start: int, limit: int) -> Any:
        """Страница списка; обертка {key: [...], "total": N} сохраняется как есть"""
        if data is None:
            return None
        if isinstance(data, dict):
            items = data.get(key, [])
            return {**data, key: items[start:start + limit]}
        return data[start:start + limit]
