"""
Определение сущности по поисковому запросу
"""
from typing import Optional, Literal, Callable, Awaitable, List
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from app.errors import NotFoundError
from app.utils.constants import BLOCK_HEIGHT_PATTERN, HASH_PATTERN
from app.utils.logging_config import StructuredLogger

logger = StructuredLogger(__name__)

EntityKind = Literal["block_height", "block", "transaction", "address"]


class ResolvedEntity(BaseModel):
    """Результат поиска: вид сущности и идентификатор для перехода"""
    kind: EntityKind
    target: str
    query: str

    model_config = ConfigDict(frozen=True)

    @property
    def route(self) -> str:
        """Путь страницы сущности"""
        if self.kind in ("block_height", "block"):
            return f"/block/{quote(self.target, safe='')}"
        if self.kind == "transaction":
            return f"/tx/{quote(self.target, safe='')}"
        return f"/address/{quote(self.target, safe='')}"


Probe = Callable[[], Awaitable[Optional[ResolvedEntity]]]


class EntityResolver:
    """
    Проверяет кандидатов по порядку и останавливается на первом найденном:
    высота блока (только цифры), хэш блока и txid (64 hex символа), адрес.
    Неудачная проверка - штатная ситуация и не логируется.
    """

    def __init__(self, client):
        self.client = client

    async def _probe_height(self, query: str) -> Optional[ResolvedEntity]:
        block_hash = await self.client.fetch_optional(f"/block-height/{query}")
        if block_hash is None:
            return None
        return ResolvedEntity(kind="block_height", target=str(block_hash), query=query)

    async def _probe_block(self, query: str) -> Optional[ResolvedEntity]:
        if await self.client.fetch_optional(f"/block/{query}") is None:
            return None
        return ResolvedEntity(kind="block", target=query, query=query)

    async def _probe_transaction(self, query: str) -> Optional[ResolvedEntity]:
        if await self.client.fetch_optional(f"/tx/{query}") is None:
            return None
        return ResolvedEntity(kind="transaction", target=query, query=query)

    async def _probe_address(self, query: str) -> Optional[ResolvedEntity]:
        if await self.client.fetch_optional(f"/address/{quote(query, safe='')}") is None:
            return None
        return ResolvedEntity(kind="address", target=query, query=query)

    def probes(self, query: str) -> List[Probe]:
        """Упорядоченный список проверок для запроса"""
        probes: List[Probe] = []
        if BLOCK_HEIGHT_PATTERN.match(query):
            probes.append(lambda: self._probe_height(query))
        # 64 цифры подходят под оба шаблона
        if HASH_PATTERN.match(query):
            probes.append(lambda: self._probe_block(query))
            probes.append(lambda: self._probe_transaction(query))
        # Адрес проверяется всегда, в том числе для чисел
        probes.append(lambda: self._probe_address(query))
        return probes

    async def try_resolve(self, query: str) -> Optional[ResolvedEntity]:
        """Первая успешная проверка либо None"""
        for probe in self.probes(query):
            entity = await probe()
            if entity is not None:
                return entity
        return None

    async def resolve(self, query: str) -> ResolvedEntity:
        """
        Определение сущности по запросу

        Raises:
            NotFoundError: ни одна проверка не нашла сущность
        """
        query = query.strip()
        entity = await self.try_resolve(query) if query else None

        if entity is None:
            logger.info(f"Поиск '{query}' ничего не нашел", event="search_not_found", query=query)
            raise NotFoundError(query)

        logger.search_resolved(query, entity.kind, entity.target)
        return entity
