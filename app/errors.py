"""
Исключения эксплорера
"""
from typing import Optional


class ExplorerError(Exception):
    """Базовое исключение эксплорера"""
    pass


class UpstreamError(ExplorerError):
    """Ошибка запроса к индексатору: транспорт, таймаут или не-2xx статус"""

    def __init__(self, endpoint: str, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.message = message
        self.status = status


class NotFoundError(ExplorerError):
    """Поисковый запрос не соответствует ни одной сущности"""

    def __init__(self, query: str):
        self.query = query
        self.message = f"Could not find block, transaction, or address matching: {query}"
        super().__init__(self.message)


class PageFailure(ExplorerError):
    """Обязательный запрос страницы завершился ошибкой"""

    def __init__(self, summary: str, detail: str, page: str = "error"):
        super().__init__(f"{summary}: {detail}")
        self.summary = summary
        self.detail = detail
        self.page = page
