"""
Pydantic схемы ответов индексатора (Electrs/Esplora API)

Все схемы допускают дополнительные поля: они передаются в представления как есть.
"""
from typing import Optional, List, Any

from pydantic import BaseModel, Field, ConfigDict


class UpstreamModel(BaseModel):
    """Базовая схема ответа индексатора"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)


# ========== БЛОКИ ==========
class BlockSummary(UpstreamModel):
    """Блок из /blocks, /blocks/{height}, /block/{hash}"""
    id: str = Field(description="Хэш блока")
    height: int = Field(ge=0)
    timestamp: int = 0
    difficulty: float = 0.0
    size: int = 0
    tx_count: int = 0
    previousblockhash: Optional[str] = None


# ========== ТРАНЗАКЦИИ ==========
class TxOutput(UpstreamModel):
    """Выход транзакции (или prevout входа)"""
    value: Optional[int] = None
    scriptpubkey_address: Optional[str] = None


class TxInput(UpstreamModel):
    """Вход транзакции; prevout отсутствует у coinbase"""
    txid: Optional[str] = None
    vout: Optional[int] = None
    prevout: Optional[TxOutput] = None
    is_coinbase: bool = False


class TxStatus(UpstreamModel):
    """Статус подтверждения"""
    confirmed: bool = False
    block_height: Optional[int] = None
    block_hash: Optional[str] = None
    block_time: Optional[int] = None


class Transaction(UpstreamModel):
    """Транзакция из /tx/{txid}, /block/{hash}/txs, /address/{address}/txs"""
    txid: str
    vin: List[TxInput] = Field(default_factory=list)
    vout: List[TxOutput] = Field(default_factory=list)
    status: Optional[TxStatus] = None
    # Метки блока, проставляемые при сканировании последних блоков
    block_height: Optional[int] = None
    block_time: Optional[int] = None

    def total_input(self) -> int:
        """Сумма prevout входов; отсутствующие значения считаются нулем"""
        return sum(
            vin.prevout.value
            for vin in self.vin
            if vin.prevout is not None and vin.prevout.value
        )

    def total_output(self) -> int:
        """Сумма выходов; отсутствующие значения считаются нулем"""
        return sum(vout.value or 0 for vout in self.vout)


class MempoolEntry(UpstreamModel):
    """Запись /mempool/recent"""
    txid: str
    fee: Optional[int] = None
    vsize: Optional[int] = None
    value: Optional[int] = None


# ========== АДРЕСА ==========
class ChainStats(UpstreamModel):
    """Статистика адреса (в цепочке или в мемпуле)"""
    funded_txo_count: int = 0
    funded_txo_sum: int = 0
    spent_txo_count: int = 0
    spent_txo_sum: int = 0
    tx_count: int = 0

    @property
    def balance(self) -> int:
        return self.funded_txo_sum - self.spent_txo_sum


class AddressInfo(UpstreamModel):
    """Ответ /address/{address}"""
    address: Optional[str] = None
    chain_stats: ChainStats = Field(default_factory=ChainStats)
    mempool_stats: ChainStats = Field(default_factory=ChainStats)

    def confirmed_balance(self) -> int:
        return self.chain_stats.balance

    def pending_balance(self) -> int:
        """Может быть отрицательным: чистое ожидающее списание"""
        return self.mempool_stats.balance


class Utxo(UpstreamModel):
    """Непотраченный выход адреса"""
    txid: str
    vout: int
    value: int = 0
    status: Optional[TxStatus] = None


class UtxoPage(BaseModel):
    """
    Страница UTXO адреса.

    Индексатор отдает либо объект {"utxos": [...], "total": N}, либо голый список.
    Если total отсутствует, используется длина полученной страницы.
    """
    utxos: List[Utxo] = Field(default_factory=list)
    total: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "UtxoPage":
        if isinstance(payload, dict):
            items = payload.get("utxos") or []
            total = payload.get("total")
        elif isinstance(payload, list):
            items = payload
            total = None
        else:
            items, total = [], None

        utxos = [Utxo.model_validate(item) for item in items]
        return cls(utxos=utxos, total=total or len(utxos))


class AddressTxPage(BaseModel):
    """
    Страница транзакций адреса.

    Формат как у UtxoPage ({"transactions": [...], "total": N} либо список).
    total: явное поле total, иначе chain_stats.tx_count адреса, иначе 0.
    """
    transactions: List[Transaction] = Field(default_factory=list)
    total: int = 0

    @classmethod
    def from_payload(cls, payload: Any, fallback_total: int = 0) -> "AddressTxPage":
        if isinstance(payload, dict):
            items = payload.get("transactions") or []
            total = payload.get("total")
        elif isinstance(payload, list):
            items = payload
            total = None
        else:
            items, total = [], None

        transactions = [Transaction.model_validate(item) for item in items]
        return cls(transactions=transactions, total=total or fallback_total or 0)


class SupplyInfo(UpstreamModel):
    """Ответ /blockchain/getsupply"""
    total_amount_float: float = 0.0
