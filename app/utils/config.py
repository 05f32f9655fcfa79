from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Dict

from app.utils.constants import REQUEST_TIMEOUT, DEFAULT_BLOCK_TIME


class Settings(BaseSettings):
    # HTTP сервер эксплорера
    host: str = "0.0.0.0"
    port: int = 3000

    # Electrs API (индексатор)
    electrs_api: str = "http://127.0.0.1:50010"
    request_timeout: float = REQUEST_TIMEOUT
    use_mock_upstream: bool = False  # Работа без индексатора (in-memory данные)

    # Брендинг
    explorer_name: str = "DedooExplorer"
    coin_name: str = "Coin"
    coin_ticker: str = "COIN"
    coin_tagline: str = "A blockchain explorer"
    logo_url: str = "/img/logo.png"
    website_url: str = ""
    github_url: str = ""
    telegram_url: str = ""
    twitter_url: str = ""
    discord_url: str = ""

    # Майнинг / консенсус
    algorithm: str = "SHA256"
    diff_adjustment: str = "DGW3"
    block_time: int = DEFAULT_BLOCK_TIME  # целевое время блока

    # Версия
    software_name: str = "electrs-explorer"
    version: str = "1.0.0"

    # Разработка
    debug: bool = False

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True
    )

    @property
    def api_base_url(self) -> str:
        """Базовый URL индексатора без завершающего слэша"""
        return self.electrs_api.rstrip("/")

    def branding(self) -> Dict[str, object]:
        """Публичная часть настроек, доступная во всех представлениях"""
        return {
            "explorer_name": self.explorer_name,
            "coin_name": self.coin_name,
            "coin_ticker": self.coin_ticker,
            "coin_tagline": self.coin_tagline,
            "logo_url": self.logo_url,
            "website_url": self.website_url,
            "github_url": self.github_url,
            "telegram_url": self.telegram_url,
            "twitter_url": self.twitter_url,
            "discord_url": self.discord_url,
            "algorithm": self.algorithm,
            "diff_adjustment": self.diff_adjustment,
            "block_time": self.block_time,
            "software_name": self.software_name,
            "version": self.version,
        }


settings = Settings()
