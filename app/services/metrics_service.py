"""
Расчет производных метрик сети по последним блокам
"""
import math
from typing import Sequence

from app.schemas.upstream import BlockSummary
from app.utils.constants import DEFAULT_BLOCK_TIME, HASHES_PER_DIFFICULTY


def average_block_time(blocks: Sequence[BlockSummary], default: int = DEFAULT_BLOCK_TIME) -> int:
    """
    Среднее время блока по выборке (новые блоки первыми)

    Args:
        blocks: Последние блоки, отсортированные от нового к старому
        default: Целевое время блока сети, если выборка меньше 2 блоков

    Returns:
        Среднее время между блоками в секундах (округлено)
    """
    if len(blocks) < 2:
        return default

    newest, oldest = blocks[0], blocks[-1]
    # Половина округляется вверх
    return math.floor((newest.timestamp - oldest.timestamp) / (len(blocks) - 1) + 0.5)


def estimate_hashrate(difficulty: float, avg_block_time: float) -> float:
    """Оценка хэшрейта сети: difficulty * 2^32 / среднее время блока"""
    if avg_block_time <= 0:
        return 0.0
    return difficulty * HASHES_PER_DIFFICULTY / avg_block_time


def chain_metrics(blocks: Sequence[BlockSummary], default_block_time: int = DEFAULT_BLOCK_TIME):
    """
    Сложность, среднее время блока и хэшрейт по последним блокам

    Returns:
        Кортеж (difficulty, avg_block_time, hashrate)
    """
    avg_time = average_block_time(blocks, default_block_time)
    # Выборка с одинаковыми timestamp дает 0, считаем по целевому времени
    hashrate_time = avg_time if avg_time > 0 else default_block_time
    difficulty = blocks[0].difficulty if blocks else 0.0
    return difficulty, avg_time, estimate_hashrate(difficulty, hashrate_time)
