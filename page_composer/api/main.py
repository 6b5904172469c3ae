"""
PAGE_COMPOSER — FastAPI app
Démarrer : uvicorn page_composer.api.main:app --reload --port 8000
"""
import logging
from fastapi import FastAPI

from .router import router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="PAGE_COMPOSER — Éditeur de pages", version="1.0.0", docs_url="/docs")
    app.include_router(router)

    @app.on_event("startup")
    def startup():
        from ..persistence.database import init_db
        init_db()
        log.info("DB initialisée (SQLite)")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
