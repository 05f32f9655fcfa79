import aiohttp
import asyncio
import json

from typing import Optional, Any
from datetime import datetime, UTC

from app.errors import UpstreamError
from app.utils.logging_config import StructuredLogger
from app.utils.config import Settings

logger = StructuredLogger(__name__)


class ElectrsClient:
    """HTTP клиент индексатора Electrs (только GET запросы)"""

    def __init__(self, config: Settings, session: Optional[aiohttp.ClientSession] = None):
        self.base_url = config.api_base_url
        self.timeout = aiohttp.ClientTimeout(total=config.request_timeout)
        self.session = session
        self.start_time = datetime.now(UTC)
        self.total_requests = 0
        self.failed_requests = 0

        logger.info(
            "Инициализация клиента индексатора",
            event="upstream_client_init",
            base_url=self.base_url,
            timeout_seconds=config.request_timeout
        )

    async def connect(self) -> None:
        """Создание HTTP сессии"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers={"User-Agent": "Electrs-Explorer/1.0"}
            )

    async def close(self):
        """Закрытие соединения"""
        if self.session and not self.session.closed:
            uptime = (datetime.now(UTC) - self.start_time).total_seconds()
            await self.session.close()

            logger.info(
                "Соединение с индексатором закрыто",
                event="upstream_client_closed",
                total_requests=self.total_requests,
                failed_requests=self.failed_requests,
                uptime_seconds=uptime
            )

    def _fail(self, endpoint: str, message: str, status: Optional[int] = None) -> UpstreamError:
        self.failed_requests += 1
        logger.upstream_error(endpoint, message, status)
        return UpstreamError(endpoint, message, status)

    async def fetch(self, endpoint: str) -> Any:
        """
        GET запрос к индексатору

        Args:
            endpoint: Путь относительно базового URL, например /blocks/tip/height

        Returns:
            Разобранный JSON; текстовые ответы (высота, хэш) возвращаются строкой

        Raises:
            UpstreamError: транспортная ошибка, таймаут или не-2xx статус
        """
        await self.connect()
        self.total_requests += 1
        url = f"{self.base_url}{endpoint}"

        logger.debug("Запрос к индексатору", event="upstream_request", endpoint=endpoint)

        try:
            async with self.session.get(url, timeout=self.timeout) as response:
                body = await response.text()

                if not 200 <= response.status < 300:
                    message = f"Request failed with status code {response.status}"
                    if body:
                        message = f"{message}: {body[:200]}"
                    raise self._fail(endpoint, message, response.status)

        except asyncio.TimeoutError:
            raise self._fail(endpoint, f"timeout of {self.timeout.total:g}s exceeded")
        except aiohttp.ClientError as e:
            raise self._fail(endpoint, str(e) or type(e).__name__)

        # Electrs отдает высоту и хэши как text/plain
        try:
            return json.loads(body)
        except ValueError:
            return body.strip()

    async def fetch_optional(self, endpoint: str, default: Any = None) -> Any:
        """Запрос, ошибка которого заменяется значением по умолчанию"""
        try:
            return await self.fetch(endpoint)
        except UpstreamError:
            return default
