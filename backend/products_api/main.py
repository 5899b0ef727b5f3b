# backend/products_api/main.py

from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from products_api.api.responses import register_exception_handlers
from products_api.api.routes import router as products_router
from products_api.core.config import Settings, settings as default_settings
from products_api.core.database import build_engine, build_session_factory
from products_api.core.logs import access_log, configure_logging


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Build the app and its store handles once; handlers reach them via ``app.state``.

    Nothing is built at import time. Serve with ``python -m products_api`` or
    ``uvicorn --factory products_api.main:create_app``.
    """
    settings = settings or default_settings
    engine = engine or build_engine(settings)

    configure_logging(settings.log_level)

    app = FastAPI(title="Products API", version="0.1.0")

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    register_exception_handlers(app)
    if settings.access_log:
        app.middleware("http")(access_log)

    app.include_router(products_router, prefix="/api/products", tags=["products"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app

