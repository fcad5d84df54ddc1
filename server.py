from __future__ import annotations

import os

from fastapi import FastAPI

from hub.api_nodes import router as nodes_router
from openrouter_nodes import __version__
from openrouter_nodes.config import get_settings
from openrouter_nodes.logging_config import setup_logging


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)
    app = FastAPI(title="OpenRouter Nodes", version=__version__)
    app.include_router(nodes_router)

    @app.get("/api/health")
    def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=int(os.getenv("WEB_PORT", "8000")))
