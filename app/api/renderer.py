"""
Граница представления: view model -> ответ для внешнего рендерера
"""
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.schemas.views import RenderedPage
from app.utils.config import Settings


class JSONRenderer:
    """
    Отдает view model как JSON вместе с публичными настройками эксплорера.
    Шаблоны и разметка - ответственность потребителя.
    """

    def __init__(self, config: Settings):
        self.config = config

    def render(self, view: str, model: BaseModel, status_code: int = 200) -> JSONResponse:
        page = RenderedPage(
            view=view,
            config=self.config.branding(),
            data=model.model_dump(mode="json", by_alias=True),
        )
        return JSONResponse(content=page.model_dump(mode="json"), status_code=status_code)
