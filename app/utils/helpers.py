"""
Форматирование метрик для отображения и арифметика пагинации
"""
import time
from datetime import datetime, UTC
from typing import Optional, Union

from app.utils.constants import (
    PAGE_SIZE,
    BYTE_UNITS,
    HASHRATE_UNITS,
    DIFFICULTY_UNITS,
    DATETIME_FORMAT,
)

Number = Union[int, float]


def format_hash(value: Optional[str], length: int = 16) -> str:
    """Сокращает хэш до вида 'abcdefgh...12345678'"""
    if not value:
        return ""
    if len(value) <= length:
        return value
    half = length // 2
    return f"{value[:half]}...{value[-half:]}"


def format_number(num: Optional[Number]) -> str:
    """Число с разделителями разрядов"""
    if num is None:
        return "0"
    return f"{num:,}"


def format_bytes(size: Number) -> str:
    """Размер в B/KB/MB/GB (основание 1024)"""
    if not size or size <= 0:
        return "0 B"

    index = 0
    while size >= 1024 and index < len(BYTE_UNITS) - 1:
        size /= 1024
        index += 1
    return f"{size:.2f} {BYTE_UNITS[index]}"


def humanize_time_ago(timestamp: Number, now: Optional[Number] = None) -> str:
    """Форматирует unix-время в человекочитаемый вид"""
    if now is None:
        now = time.time()

    diff = max(int(now - timestamp), 0)

    if diff < 60:
        return f"{diff} seconds ago"
    elif diff < 3600:
        return f"{diff // 60} minutes ago"
    elif diff < 86400:
        return f"{diff // 3600} hours ago"
    else:
        return f"{diff // 86400} days ago"


def format_date(timestamp: Number, fmt: str = DATETIME_FORMAT) -> str:
    """Unix-время в строку (UTC)"""
    return datetime.fromtimestamp(timestamp, UTC).strftime(fmt)


def format_hashrate(hashrate: Number) -> str:
    """Хэшрейт в EH/s ... KH/s (основание 1000)"""
    for unit, threshold in HASHRATE_UNITS:
        if hashrate >= threshold:
            return f"{hashrate / threshold:.2f} {unit}"
    return f"{hashrate:.2f} H/s"


def format_difficulty(difficulty: Number) -> str:
    """Сложность в T/B/M/K (основание 1000)"""
    for unit, threshold in DIFFICULTY_UNITS:
        if difficulty >= threshold:
            return f"{difficulty / threshold:.2f}{unit}"
    return f"{difficulty:.2f}"


def parse_page(raw: Optional[Union[str, int]], default: int) -> int:
    """
    Разбор номера страницы из query-параметра

    Args:
        raw: Значение параметра (может отсутствовать)
        default: Значение по умолчанию

    Returns:
        Положительный номер страницы либо default
    """
    if raw is None:
        return default
    try:
        page = int(str(raw).strip())
    except ValueError:
        return default
    return page if page > 0 else default


def calculate_total_pages(total: int, page_size: int = PAGE_SIZE) -> int:
    """Количество страниц для total записей"""
    if total <= 0 or page_size <= 0:
        return 0
    return (total + page_size - 1) // page_size


def calculate_start_height(tip_height: int, page: int, page_size: int = PAGE_SIZE) -> int:
    """Высота первого блока на странице списка блоков (страницы с 1)"""
    return tip_height - (page - 1) * page_size
