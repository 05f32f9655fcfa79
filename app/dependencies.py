"""
Файл для хранения глобальных зависимостей и предотвращения циклических импортов.
"""
from typing import Optional

from app.utils.config import Settings, settings
from app.api.renderer import JSONRenderer
from app.clients.electrs_client import ElectrsClient
from app.clients.mock_electrs_client import MockElectrsClient
from app.services.explorer_service import ExplorerService


class DependencyContainer:
    """Ленивое создание клиента, сервиса и рендерера из одних настроек"""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings
        self._client = None
        self._explorer_service: Optional[ExplorerService] = None
        self._renderer: Optional[JSONRenderer] = None

    @property
    def client(self):
        if self._client is None:
            if self.config.use_mock_upstream:
                self._client = MockElectrsClient.with_sample_chain(block_time=self.config.block_time)
            else:
                self._client = ElectrsClient(self.config)
        return self._client

    @property
    def explorer_service(self) -> ExplorerService:
        if self._explorer_service is None:
            self._explorer_service = ExplorerService(self.client, self.config)
        return self._explorer_service

    @property
    def renderer(self) -> JSONRenderer:
        if self._renderer is None:
            self._renderer = JSONRenderer(self.config)
        return self._renderer

    def get_stats(self) -> dict:
        """Какие зависимости уже созданы"""
        return {
            "client": self._client is not None,
            "explorer_service": self._explorer_service is not None,
            "renderer": self._renderer is not None,
        }


container = DependencyContainer()


# Функции для зависимостей (для FastAPI Depends)
def get_client():
    return container.client


def get_explorer_service() -> ExplorerService:
    return container.explorer_service


def get_renderer() -> JSONRenderer:
    return container.renderer


__all__ = [
    "DependencyContainer",
    "container",
    "get_client",
    "get_explorer_service",
    "get_renderer",
]
