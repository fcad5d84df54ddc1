import os
from dataclasses import dataclass
from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    base_url: str = "https://openrouter.ai/api/v1"
    http_referer: str = "https://n8n.io"
    app_title: str = "n8n OpenRouter Node"
    openrouter_api_key: str | None = None
    request_timeout: float = 60.0
    log_level: str = "INFO"

    def url(self, path: str) -> str:
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")


def get_settings() -> Settings:
    # Load .env if present
    load_dotenv(override=False)
    return Settings(
        base_url=os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
        http_referer=os.getenv("OPENROUTER_HTTP_REFERER", "https://n8n.io"),
        app_title=os.getenv("OPENROUTER_APP_TITLE", "n8n OpenRouter Node"),
        openrouter_api_key=os.getenv("OPENROUTER_API_KEY"),
        request_timeout=float(os.getenv("OPENROUTER_TIMEOUT", "60")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
