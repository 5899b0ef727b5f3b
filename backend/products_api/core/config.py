# backend/products_api/core/config.py

from typing import Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    app_env: str = "dev"

    server_host: str = "0.0.0.0"
    server_port: int = 8000

    # Store connection. DATABASE_URL wins over the individual parts when set.
    database_url: Optional[str] = None
    db_driver: str = "mysql+pymysql"
    db_username: str = "root"
    db_password: str = ""
    db_host: str = "127.0.0.1"
    db_port: int = 3306
    db_name: str = "products"

    log_level: str = "INFO"
    access_log: bool = True

    class Config:
        env_prefix = "PRODUCTS_"
        env_file = ".env"

    def store_url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            self.db_driver,
            username=self.db_username,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


settings = Settings()
