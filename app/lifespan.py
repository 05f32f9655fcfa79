from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging

from app.dependencies import container
from app.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan менеджер: HTTP сессия к индексатору открывается при запуске
    и закрывается при остановке приложения
    """

    # ========== STARTUP ==========
    setup_logging(container.config)
    logger.info(f"Запуск {container.config.explorer_name}...")

    await container.client.connect()
    logger.info(f"Индексатор: {container.config.api_base_url}"
                + (" (mock)" if container.config.use_mock_upstream else ""))

    yield

    # ========== SHUTDOWN ==========
    logger.info(f"Остановка {container.config.explorer_name}...")
    await container.client.close()
    logger.info("Очистка завершена")
