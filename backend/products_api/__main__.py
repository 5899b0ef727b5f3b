# backend/products_api/__main__.py

import logging
import sys

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from products_api.core.config import settings
from products_api.main import create_app

log = logging.getLogger("products_api")


def main() -> None:
    app = create_app(settings)

    # fail fast when the store is unreachable at startup
    try:
        with app.state.engine.connect():
            pass
    except SQLAlchemyError as exc:
        log.critical("cannot open store connection: %s", exc)
        sys.exit(1)

    log.info("listening on %s:%s", settings.server_host, settings.server_port)
    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        access_log=False,
        log_config=None,
    )


if __name__ == "__main__":
    main()
