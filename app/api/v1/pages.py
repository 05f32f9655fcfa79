from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.renderer import JSONRenderer
from app.dependencies import get_explorer_service, get_renderer
from app.services.explorer_service import ExplorerService

router = APIRouter(tags=["pages"])


@router.get(
    "/",
    summary="Главная",
    response_description="Последние блоки, мемпул и метрики сети"
)
async def dashboard(
        service: ExplorerService = Depends(get_explorer_service),
        renderer: JSONRenderer = Depends(get_renderer)
):
    return renderer.render("index", await service.dashboard())


@router.get(
    "/blocks",
    summary="Список блоков",
    response_description="Страница блоков от вершины цепи вниз"
)
async def blocks(
        page: Optional[str] = None,
        service: ExplorerService = Depends(get_explorer_service),
        renderer: JSONRenderer = Depends(get_renderer)
):
    """
    - **page**: Номер страницы, начиная с 1 (по умолчанию 1)
    """
    return renderer.render("blocks", await service.block_list(page))


@router.get(
    "/block/{block_hash}",
    summary="Блок",
    response_description="Блок и страница его транзакций"
)
async def block(
        block_hash: str,
        tx_page: Optional[str] = Query(default=None, alias="txPage"),
        service: ExplorerService = Depends(get_explorer_service),
        renderer: JSONRenderer = Depends(get_renderer)
):
    """
    - **txPage**: Страница транзакций блока, начиная с 0
    """
    return renderer.render("block", await service.block_detail(block_hash, tx_page))


@router.get(
    "/transactions",
    summary="Транзакции",
    response_description="Мемпул и транзакции последних блоков"
)
async def transactions(
        service: ExplorerService = Depends(get_explorer_service),
        renderer: JSONRenderer = Depends(get_renderer)
):
    return renderer.render("transactions", await service.transaction_list())


@router.get(
    "/tx/{txid}",
    summary="Транзакция",
    response_description="Транзакция с суммами входов и выходов"
)
async def transaction(
        txid: str,
        service: ExplorerService = Depends(get_explorer_service),
        renderer: JSONRenderer = Depends(get_renderer)
):
    return renderer.render("transaction", await service.transaction_detail(txid))


@router.get(
    "/address/{address}",
    summary="Адрес",
    response_description="Баланс, транзакции и UTXO адреса"
)
async def address(
        address: str,
        page: Optional[str] = None,
        utxo_page: Optional[str] = None,
        service: ExplorerService = Depends(get_explorer_service),
        renderer: JSONRenderer = Depends(get_renderer)
):
    """
    - **page**: Страница транзакций, начиная с 0
    - **utxo_page**: Страница UTXO, начиная с 0
    """
    return renderer.render("address", await service.address_detail(address, page, utxo_page))


@router.get(
    "/statistics",
    summary="Статистика",
    response_description="Метрики сети и ряд по последним блокам"
)
async def statistics(
        service: ExplorerService = Depends(get_explorer_service),
        renderer: JSONRenderer = Depends(get_renderer)
):
    return renderer.render("statistics", await service.statistics())
