from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
import time

import uvicorn

from app.api.v1.pages import router as pages_router
from app.api.v1.search import router as search_router
from app.api.v1.proxy import router as proxy_router
from app.dependencies import container, get_renderer
from app.errors import PageFailure, NotFoundError
from app.lifespan import lifespan
from app.schemas.views import ErrorView
from app.utils.constants import PAGE_SEARCH

logger = logging.getLogger(__name__)

app = FastAPI(
    title=container.config.explorer_name,
    version=container.config.version,
    description=container.config.coin_tagline,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(proxy_router)
app.include_router(search_router)
app.include_router(pages_router)


# ========== ОБРАБОТЧИКИ ОШИБОК ==========
def _renderer(request: Request):
    """Рендерер с учетом dependency_overrides"""
    provider = request.app.dependency_overrides.get(get_renderer, get_renderer)
    return provider()


@app.exception_handler(PageFailure)
async def page_failure_handler(request: Request, exc: PageFailure):
    view = ErrorView(message=exc.summary, error=exc.detail)
    return _renderer(request).render("error", view, status_code=502)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    view = ErrorView(title="Not Found", page=PAGE_SEARCH, message="No results found", error=exc.message)
    return _renderer(request).render("error", view, status_code=404)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Необработанная ошибка {request.url.path}: {exc}")
    view = ErrorView(message="Internal Server Error", error=str(exc))
    return _renderer(request).render("error", view, status_code=500)


@app.get("/health")
async def health():
    """Базовая проверка здоровья сервиса"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "service": container.config.software_name,
        "version": container.config.version,
        "upstream": container.config.api_base_url
    }


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=container.config.host, port=container.config.port)
