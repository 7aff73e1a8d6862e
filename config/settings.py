"""
Application settings loaded from environment variables.
"""

from sqlalchemy.engine import URL
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3000
    host: str = "0.0.0.0"
    debug: bool = False

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = ""              # full URL, overrides the db_* fields below
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "nyc58"
    db_pool_size: int = 10
    db_max_overflow: int = 0
    db_pool_timeout: float = 10         # seconds to wait for a free connection
    db_pool_recycle: int = 3600

    # ── HTTP ─────────────────────────────────────────────────────────────
    max_body_size: int = 1024 * 1024    # 1 MiB
    session_cookie_name: str = "sessionId"

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    def get_database_url(self) -> str:
        """Return ``database_url`` or build a MySQL URL from the ``db_*`` fields."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


config = Settings()
