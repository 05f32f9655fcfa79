"""
Константы для всего приложения
"""
import re

# ========== ПАГИНАЦИЯ ==========
PAGE_SIZE = 25  # Размер страницы для блоков, транзакций и UTXO

# ========== СТРАНИЦЫ ==========
DASHBOARD_BLOCKS_LIMIT = 15  # Сколько последних блоков показывать на главной
TX_SCAN_BLOCKS = 5  # Сколько последних блоков просматривать для списка транзакций
RECENT_TXS_LIMIT = 25

# ========== ИНДЕКСАТОР ==========
REQUEST_TIMEOUT = 10.0  # секунды
DEFAULT_BLOCK_TIME = 120  # секунды
HASHES_PER_DIFFICULTY = 2 ** 32

# ========== ПОИСК ==========
BLOCK_HEIGHT_PATTERN = re.compile(r'^\d+$')
HASH_PATTERN = re.compile(r'^[a-fA-F0-9]{64}$')

# ========== ЕДИНИЦЫ ИЗМЕРЕНИЯ ==========
BYTE_UNITS = ["B", "KB", "MB", "GB"]

HASHRATE_UNITS = [
    ("EH/s", 1e18),
    ("PH/s", 1e15),
    ("TH/s", 1e12),
    ("GH/s", 1e9),
    ("MH/s", 1e6),
    ("KH/s", 1e3),
]

DIFFICULTY_UNITS = [
    ("T", 1e12),
    ("B", 1e9),
    ("M", 1e6),
    ("K", 1e3),
]

# ========== ФОРМАТЫ ==========
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"

# ========== НАВИГАЦИЯ ==========
PAGE_DASHBOARD = "dashboard"
PAGE_BLOCKS = "blocks"
PAGE_TRANSACTIONS = "transactions"
PAGE_ADDRESS = "address"
PAGE_STATISTICS = "statistics"
PAGE_SEARCH = "search"
PAGE_ERROR = "error"
