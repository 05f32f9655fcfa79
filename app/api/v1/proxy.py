from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.dependencies import get_client
from app.errors import UpstreamError

router = APIRouter(prefix="/api", tags=["proxy"])


@router.get(
    "/{path:path}",
    summary="Прокси к индексатору",
    response_description="Ответ индексатора без изменений"
)
async def proxy(path: str, request: Request, client=Depends(get_client)):
    """
    GET /api/<endpoint>?<query> -> GET <electrs>/<endpoint>?<query>
    """
    endpoint = f"/{path}"
    if request.url.query:
        endpoint = f"{endpoint}?{request.url.query}"

    try:
        data = await client.fetch(endpoint)
    except UpstreamError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": e.message}
        )
    return JSONResponse(content=data)
