"""
Сервис сборки страниц эксплорера из ответов индексатора
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Any, List, Optional
from urllib.parse import quote

from app.errors import UpstreamError, PageFailure
from app.schemas.upstream import (
    BlockSummary,
    Transaction,
    MempoolEntry,
    AddressInfo,
    AddressTxPage,
    UtxoPage,
    SupplyInfo,
)
from app.schemas.views import (
    DashboardView,
    BlockListView,
    BlockDetailView,
    TransactionListView,
    TransactionDetailView,
    AddressView,
    StatisticsView,
    DailyStat,
)
from app.services.metrics_service import chain_metrics
from app.services.resolver import EntityResolver
from app.utils.config import Settings
from app.utils.constants import (
    PAGE_SIZE,
    DASHBOARD_BLOCKS_LIMIT,
    TX_SCAN_BLOCKS,
    RECENT_TXS_LIMIT,
    DATE_FORMAT,
    PAGE_DASHBOARD,
    PAGE_BLOCKS,
    PAGE_TRANSACTIONS,
    PAGE_ADDRESS,
    PAGE_STATISTICS,
)
from app.utils.helpers import (
    format_hash,
    format_date,
    parse_page,
    calculate_total_pages,
    calculate_start_height,
)
from app.utils.logging_config import StructuredLogger

logger = StructuredLogger(__name__)


def _parse_blocks(payload: Any) -> List[BlockSummary]:
    return [BlockSummary.model_validate(item) for item in payload or []]


def _parse_txs(payload: Any) -> List[Transaction]:
    return [Transaction.model_validate(item) for item in payload or []]


class ExplorerService:
    """
    Сборка представлений страниц.

    Независимые запросы выполняются параллельно. Ошибка обязательного запроса
    превращается в PageFailure, ошибка необязательного заменяется значением
    по умолчанию.
    """

    def __init__(self, client, config: Settings):
        self.client = client
        self.config = config
        self.resolver = EntityResolver(client)

    @asynccontextmanager
    async def _building(self, page: str, summary: str):
        """Преобразует ошибки обязательных запросов в PageFailure"""
        try:
            yield
        except UpstreamError as e:
            logger.page_failure(page, summary, e.message, endpoint=e.endpoint)
            raise PageFailure(summary, e.message, page) from e
        except ValueError as e:
            # Ответ индексатора не соответствует схеме
            logger.page_failure(page, summary, str(e))
            raise PageFailure(summary, str(e), page) from e

    async def _optional(self, endpoint: str, default: Any) -> Any:
        """Необязательный запрос: ошибка заменяется default"""
        try:
            return await self.client.fetch(endpoint)
        except UpstreamError as e:
            logger.warning(
                "Необязательный запрос не выполнен, используется значение по умолчанию",
                event="optional_call_failed",
                endpoint=endpoint,
                error=e.message
            )
            return default

    async def _tip_height(self) -> int:
        return int(await self.client.fetch("/blocks/tip/height"))

    # ========== ГЛАВНАЯ ==========
    async def dashboard(self) -> DashboardView:
        """Последние блоки, вершина цепи, мемпул и эмиссия"""
        async with self._building(PAGE_DASHBOARD, "Failed to load dashboard"):
            blocks_data, tip_height, mempool, supply_data = await asyncio.gather(
                self.client.fetch("/blocks"),
                self._tip_height(),
                self._optional("/mempool/recent", []),
                self._optional("/blockchain/getsupply", {}),
            )
            blocks = _parse_blocks(blocks_data)

        difficulty, avg_block_time, hashrate = chain_metrics(blocks, self.config.block_time)
        supply = SupplyInfo.model_validate(supply_data) if isinstance(supply_data, dict) else SupplyInfo()

        return DashboardView(
            blocks=blocks[:DASHBOARD_BLOCKS_LIMIT],
            tip_height=tip_height,
            mempool_count=len(mempool) if isinstance(mempool, list) else 0,
            difficulty=difficulty,
            avg_block_time=avg_block_time,
            hashrate=hashrate,
            supply=supply.total_amount_float,
        )

    # ========== БЛОКИ ==========
    async def block_list(self, page: Optional[str] = None) -> BlockListView:
        """Страница списка блоков (страницы с 1, от вершины вниз)"""
        current_page = parse_page(page, default=1)

        async with self._building(PAGE_BLOCKS, "Failed to load blocks"):
            tip_height = await self._tip_height()
            start_height = calculate_start_height(tip_height, current_page)

            # Страница за пределами цепочки
            blocks = []
            if start_height >= 0:
                blocks = _parse_blocks(await self.client.fetch(f"/blocks/{start_height}"))

        return BlockListView(
            blocks=blocks,
            current_page=current_page,
            total_pages=calculate_total_pages(tip_height + 1),
            tip_height=tip_height,
        )

    async def block_detail(self, block_hash: str, tx_page: Optional[str] = None) -> BlockDetailView:
        """Блок, страница его транзакций и соседние блоки"""
        current_tx_page = parse_page(tx_page, default=0)

        segment = quote(block_hash, safe="")

        async with self._building(PAGE_BLOCKS, "Block not found"):
            block_data, txs_data = await asyncio.gather(
                self.client.fetch(f"/block/{segment}"),
                self.client.fetch(f"/block/{segment}/txs/{current_tx_page * PAGE_SIZE}"),
            )
            block = BlockSummary.model_validate(block_data)
            transactions = _parse_txs(txs_data)

        # Следующего блока может не быть - это не ошибка
        next_block = await self.client.fetch_optional(f"/block-height/{block.height + 1}")

        return BlockDetailView(
            title=f"Block {block.height}",
            block=block,
            transactions=transactions,
            tx_page=current_tx_page,
            total_tx_pages=calculate_total_pages(block.tx_count),
            prev_block=block.previousblockhash,
            next_block=str(next_block) if next_block is not None else None,
        )

    # ========== ТРАНЗАКЦИИ ==========
    async def _scan_recent_transactions(self, blocks: List[BlockSummary]) -> List[Transaction]:
        """Транзакции последних блоков; блок с ошибкой пропускается"""
        recent: List[Transaction] = []

        for block in blocks[:TX_SCAN_BLOCKS]:
            endpoint = f"/block/{block.id}/txs/0"
            try:
                txs_data = await self.client.fetch(endpoint)
                block_txs = [
                    Transaction.model_validate(
                        {**item, "block_height": block.height, "block_time": block.timestamp}
                    )
                    for item in txs_data or []
                ]
            except (UpstreamError, ValueError, TypeError) as e:
                logger.warning(
                    f"Пропуск блока {block.height} при сборе транзакций",
                    event="tx_scan_block_skipped",
                    block_height=block.height,
                    endpoint=endpoint,
                    error=e.message if isinstance(e, UpstreamError) else str(e)
                )
                continue

            recent.extend(block_txs)

            if len(recent) >= RECENT_TXS_LIMIT:
                break

        return recent[:RECENT_TXS_LIMIT]

    async def transaction_list(self) -> TransactionListView:
        """Мемпул и транзакции последних блоков"""
        async with self._building(PAGE_TRANSACTIONS, "Failed to load transactions"):
            mempool_data, blocks_data = await asyncio.gather(
                self._optional("/mempool/recent", []),
                self.client.fetch("/blocks"),
            )
            blocks = _parse_blocks(blocks_data)
            recent_txs = await self._scan_recent_transactions(blocks)

        mempool = [MempoolEntry.model_validate(item) for item in mempool_data] \
            if isinstance(mempool_data, list) else []

        return TransactionListView(mempool=mempool, recent_txs=recent_txs)

    async def transaction_detail(self, txid: str) -> TransactionDetailView:
        """Транзакция с суммами входов и выходов"""
        async with self._building(PAGE_TRANSACTIONS, "Transaction not found"):
            tx = Transaction.model_validate(await self.client.fetch(f"/tx/{quote(txid, safe='')}"))

        return TransactionDetailView(
            title=f"Transaction {format_hash(txid)}",
            tx=tx,
            total_input=tx.total_input(),
            total_output=tx.total_output(),
        )

    # ========== АДРЕСА ==========
    async def _utxo_page(self, address: str, utxo_page: int):
        """UTXO адреса; ошибка не ломает страницу, а возвращается текстом"""
        endpoint = (
            f"/address/{quote(address, safe='')}/utxo"
            f"?start_index={utxo_page * PAGE_SIZE}&limit={PAGE_SIZE}"
        )
        try:
            return UtxoPage.from_payload(await self.client.fetch(endpoint)), None
        except UpstreamError as e:
            error = e.message
        except ValueError as e:
            error = str(e)

        logger.warning(
            f"UTXO адреса {format_hash(address)} недоступны",
            event="optional_call_failed",
            endpoint=endpoint,
            error=error
        )
        return UtxoPage(), error

    async def address_detail(self, address: str, page: Optional[str] = None,
                             utxo_page: Optional[str] = None) -> AddressView:
        """Баланс, транзакции и UTXO адреса"""
        current_page = parse_page(page, default=0)
        current_utxo_page = parse_page(utxo_page, default=0)

        segment = quote(address, safe="")

        async with self._building(PAGE_ADDRESS, "Address not found"):
            info_data, txs_data = await asyncio.gather(
                self.client.fetch(f"/address/{segment}"),
                self.client.fetch(
                    f"/address/{segment}/txs?start_index={current_page * PAGE_SIZE}&limit={PAGE_SIZE}"
                ),
            )
            info = AddressInfo.model_validate(info_data)
            tx_page = AddressTxPage.from_payload(txs_data, fallback_total=info.chain_stats.tx_count)

        utxos, utxo_error = await self._utxo_page(address, current_utxo_page)

        return AddressView(
            title=f"Address {format_hash(address)}",
            address=address,
            address_info=info,
            transactions=tx_page.transactions,
            utxos=utxos.utxos,
            total_utxos=utxos.total,
            utxo_page=current_utxo_page,
            utxo_error=utxo_error,
            confirmed_balance=info.confirmed_balance(),
            pending_balance=info.pending_balance(),
            total_txs=tx_page.total,
            current_page=current_page,
            total_pages=calculate_total_pages(tx_page.total),
        )

    # ========== СТАТИСТИКА ==========
    async def statistics(self) -> StatisticsView:
        """Метрики сети и ряд по последним блокам"""
        async with self._building(PAGE_STATISTICS, "Failed to load statistics"):
            blocks_data, tip_height = await asyncio.gather(
                self.client.fetch("/blocks"),
                self._tip_height(),
            )
            blocks = _parse_blocks(blocks_data)

        difficulty, avg_block_time, hashrate = chain_metrics(blocks, self.config.block_time)

        return StatisticsView(
            tip_height=tip_height,
            avg_block_time=avg_block_time,
            hashrate=hashrate,
            difficulty=difficulty,
            daily_stats=[
                DailyStat(date=format_date(b.timestamp, DATE_FORMAT), tx_count=b.tx_count, size=b.size)
                for b in blocks
            ],
        )

    # ========== ПОИСК ==========
    async def search(self, query: Optional[str]) -> str:
        """
        Путь для перехода по поисковому запросу

        Returns:
            Путь страницы сущности; "/" для пустого запроса

        Raises:
            NotFoundError: сущность не найдена
        """
        query = (query or "").strip()
        if not query:
            return "/"

        entity = await self.resolver.resolve(query)
        return entity.route
