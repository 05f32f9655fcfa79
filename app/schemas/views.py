"""
Модели представлений страниц эксплорера
"""
from typing import Optional, List, Any, Dict

from pydantic import BaseModel, Field, ConfigDict, computed_field

from app.schemas.upstream import (
    BlockSummary,
    Transaction,
    MempoolEntry,
    AddressInfo,
    Utxo,
)
from app.utils.constants import (
    PAGE_DASHBOARD,
    PAGE_BLOCKS,
    PAGE_TRANSACTIONS,
    PAGE_ADDRESS,
    PAGE_STATISTICS,
    PAGE_ERROR,
)
from app.utils.helpers import (
    format_number,
    format_bytes,
    format_hashrate,
    format_difficulty,
    humanize_time_ago,
)


class PageView(BaseModel):
    """Базовое представление страницы"""
    title: str
    page: str

    model_config = ConfigDict(from_attributes=True)


class DashboardView(PageView):
    title: str = "Dashboard"
    page: str = PAGE_DASHBOARD
    blocks: List[BlockSummary]
    tip_height: int
    mempool_count: int
    difficulty: float
    avg_block_time: int
    hashrate: float
    supply: float

    @computed_field
    @property
    def hashrate_formatted(self) -> str:
        return format_hashrate(self.hashrate)

    @computed_field
    @property
    def difficulty_formatted(self) -> str:
        return format_difficulty(self.difficulty)

    @computed_field
    @property
    def supply_formatted(self) -> str:
        return format_number(self.supply)


class BlockListView(PageView):
    title: str = "Blocks"
    page: str = PAGE_BLOCKS
    blocks: List[BlockSummary]
    current_page: int
    total_pages: int
    tip_height: int


class BlockDetailView(PageView):
    page: str = PAGE_BLOCKS
    block: BlockSummary
    transactions: List[Transaction]
    tx_page: int
    total_tx_pages: int
    prev_block: Optional[str] = None
    next_block: Optional[str] = None

    @computed_field
    @property
    def size_formatted(self) -> str:
        return format_bytes(self.block.size)

    @computed_field
    @property
    def time_ago(self) -> str:
        return humanize_time_ago(self.block.timestamp)


class TransactionListView(PageView):
    title: str = "Transactions"
    page: str = PAGE_TRANSACTIONS
    mempool: List[MempoolEntry]
    recent_txs: List[Transaction]


class TransactionDetailView(PageView):
    page: str = PAGE_TRANSACTIONS
    tx: Transaction
    total_input: int
    total_output: int


class AddressView(PageView):
    page: str = PAGE_ADDRESS
    address: str
    address_info: AddressInfo
    transactions: List[Transaction]
    utxos: List[Utxo]
    total_utxos: int
    utxo_page: int
    utxo_error: Optional[str] = None
    confirmed_balance: int
    pending_balance: int
    total_txs: int
    current_page: int
    total_pages: int


class DailyStat(BaseModel):
    """Точка временного ряда на странице статистики"""
    date: str
    tx_count: int = Field(serialization_alias="txCount")
    size: int


class StatisticsView(PageView):
    title: str = "Statistics"
    page: str = PAGE_STATISTICS
    tip_height: int
    avg_block_time: int
    hashrate: float
    difficulty: float
    daily_stats: List[DailyStat]

    @computed_field
    @property
    def hashrate_formatted(self) -> str:
        return format_hashrate(self.hashrate)

    @computed_field
    @property
    def difficulty_formatted(self) -> str:
        return format_difficulty(self.difficulty)


class ErrorView(PageView):
    """Общая страница ошибки"""
    title: str = "Error"
    page: str = PAGE_ERROR
    message: str
    error: Optional[str] = None


class RenderedPage(BaseModel):
    """То, что уходит во внешний рендерер"""
    view: str
    config: Dict[str, Any]
    data: Dict[str, Any]
