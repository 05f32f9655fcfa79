"""
Конфигурация для тестов
"""
import pytest
import sys
import os
from datetime import datetime, UTC

# Добавляем корень проекта в sys.path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.clients.mock_electrs_client import MockElectrsClient
from app.services.explorer_service import ExplorerService
from app.utils.config import Settings

# Время первого блока тестовой цепочки
GENESIS_TIME = 1_700_000_000
CHAIN_LENGTH = 30
TXS_PER_BLOCK = 6  # coinbase + 5 обычных


@pytest.fixture
def test_settings():
    """Настройки без чтения .env"""
    return Settings(
        _env_file=None,
        electrs_api="http://electrs.test:50010/",
        explorer_name="TestExplorer",
        coin_ticker="TST",
        block_time=120,
        request_timeout=10.0
    )


@pytest.fixture
def current_timestamp():
    """Текущий timestamp для тестов"""
    return int(datetime.now(UTC).timestamp())


@pytest.fixture
def mock_client():
    """In-memory индексатор: 30 блоков по 120 секунд, адрес и мемпул"""
    client = MockElectrsClient()

    for height in range(CHAIN_LENGTH):
        txs = [MockElectrsClient.make_tx(f"coinbase-{height}", [None], [5000000000])]
        txs += [
            MockElectrsClient.make_tx(f"{height}-{i}", [1000 * (i + 1)], [900 * (i + 1)])
            for i in range(TXS_PER_BLOCK - 1)
        ]
        client.add_block(
            height,
            GENESIS_TIME + height * 120,
            difficulty=1000.0 + height,
            txs=txs,
            size=250 * (height + 1)
        )

    client.mempool = [
        {"txid": "a" * 64, "fee": 226, "vsize": 141, "value": 10000},
        {"txid": "b" * 64, "fee": 300, "vsize": 200, "value": 25000},
    ]
    client.supply = {"total_amount_float": 1500.5}

    client.add_address(
        "DTestAddress1111111111111111111111",
        chain_stats={"funded_txo_sum": 500, "spent_txo_sum": 200, "tx_count": 3},
        mempool_stats={"funded_txo_sum": 0, "spent_txo_sum": 50},
        txs=[
            MockElectrsClient.make_tx("addr-1", [700], [500, 150]),
            MockElectrsClient.make_tx("addr-2", [300], [200]),
        ],
        utxos={
            "utxos": [
                {"txid": "c" * 64, "vout": 0, "value": 200},
                {"txid": "d" * 64, "vout": 1, "value": 100},
            ],
            "total": 2
        }
    )
    return client


@pytest.fixture
def explorer_service(mock_client, test_settings):
    """ExplorerService поверх in-memory индексатора"""
    return ExplorerService(mock_client, test_settings)
