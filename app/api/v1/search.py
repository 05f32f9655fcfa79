from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from app.dependencies import get_explorer_service
from app.services.explorer_service import ExplorerService

router = APIRouter(tags=["search"])


@router.get(
    "/search",
    summary="Поиск",
    response_description="Переход на страницу найденного блока, транзакции или адреса"
)
async def search(
        q: Optional[str] = None,
        service: ExplorerService = Depends(get_explorer_service)
):
    """
    Поиск по высоте блока, хэшу блока, txid или адресу.
    Пустой запрос ведет на главную, ненайденный - на страницу ошибки.
    """
    target = await service.search(q)
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
