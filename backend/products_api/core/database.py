from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from products_api.core.config import Settings

Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    url = settings.store_url()

    # SQLite needs check_same_thread, MySQL/Postgres must NOT have it
    connect_args = {"check_same_thread": False} if url.get_backend_name() == "sqlite" else {}

    return create_engine(url, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create the users and products tables if they are missing (dev/test only)."""
    from products_api.models import product, user  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
