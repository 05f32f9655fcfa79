# app/utils/logging_config.py
"""
Конфигурация логирования для эксплорера
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
import json
from datetime import datetime, UTC
from typing import Dict, Any, Optional

from app.utils.config import Settings, settings as default_settings


# Стандартные атрибуты LogRecord, которые не нужно дублировать в JSON
_RESERVED_ATTRS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Форматировщик логов в JSON"""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        # extra поля (event, endpoint и т.д.)
        for key, value in record.__dict__.items():
            if key not in log_record and key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_record[key] = value

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """Цветной форматировщик для консоли"""

    COLORS = {
        'DEBUG': '\033[36m',  # Cyan
        'INFO': '\033[32m',  # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',  # Red
        'CRITICAL': '\033[41m',  # Red background
        'RESET': '\033[0m',  # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        log_time = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        message = super().format(record)

        return f"{log_time} {color}{record.levelname:8s}{reset} [{record.name}] {message}"


def setup_logging(config: Optional[Settings] = None, log_dir: Path = Path("logs")) -> logging.Logger:
    """
    Настройка логирования для приложения

    Args:
        config: Настройки (по умолчанию глобальные)
        log_dir: Директория для файлов логов

    Returns:
        Корневой логгер
    """
    config = config or default_settings
    level = logging.DEBUG if config.debug else logging.INFO

    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    # Консольный обработчик
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColorFormatter('%(message)s'))
    logger.addHandler(console_handler)

    # Файловый обработчик (ротация по размеру)
    file_handler = RotatingFileHandler(
        filename=log_dir / "explorer.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(JSONFormatter())
    logger.addHandler(file_handler)

    # Ошибки и предупреждения (отдельный файл)
    error_handler = RotatingFileHandler(
        filename=log_dir / "errors.log",
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.WARNING)
    error_handler.setFormatter(JSONFormatter())
    logger.addHandler(error_handler)

    # Логи внешних библиотек
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    logger.info("Логирование настроено")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Получение логгера с заданным именем

    Args:
        name: Имя логгера

    Returns:
        Настроенный логгер
    """
    return logging.getLogger(name)


class StructuredLogger:
    """
    Логгер для структурированного логирования
    """

    def __init__(self, name: str):
        self.logger = get_logger(name)

    def _log_with_context(self, level: int, msg: str, **kwargs):
        """Логирование с дополнительным контекстом через extra"""
        self.logger.log(level, msg, extra=kwargs, stacklevel=3)

    def info(self, msg: str, **kwargs):
        self._log_with_context(logging.INFO, msg, **kwargs)

    def debug(self, msg: str, **kwargs):
        self._log_with_context(logging.DEBUG, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        self._log_with_context(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        self._log_with_context(logging.ERROR, msg, **kwargs)

    def critical(self, msg: str, **kwargs):
        self._log_with_context(logging.CRITICAL, msg, **kwargs)

    def upstream_error(self, endpoint: str, message: str, status: Optional[int] = None, **kwargs):
        """Логирование ошибки запроса к индексатору"""
        self.warning(f"Ошибка запроса к индексатору {endpoint}: {message}",
                     event="upstream_error",
                     endpoint=endpoint,
                     error=message,
                     status_code=status,
                     **kwargs)

    def page_failure(self, page: str, summary: str, detail: str, **kwargs):
        """Логирование ошибки сборки страницы"""
        self.error(f"Страница не собрана ({page}): {summary}",
                   event="page_failure",
                   page_name=page,
                   summary=summary,
                   error=detail,
                   **kwargs)

    def search_resolved(self, query: str, kind: str, target: str, **kwargs):
        """Логирование успешного поиска"""
        self.info(f"Поиск '{query}' -> {kind}",
                  event="search_resolved",
                  query=query,
                  kind=kind,
                  target=target,
                  **kwargs)
