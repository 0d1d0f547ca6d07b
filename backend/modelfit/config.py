from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "modelfit-dev-secret-change-in-production"
DEFAULT_ADMIN_INIT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    # App
    app_name: str = "ModelFit"
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "modelfit"
    postgres_password: str = "modelfit"
    postgres_db: str = "modelfit"
    # Full URL override (e.g. "sqlite+aiosqlite://" for tests)
    database_url_override: str = ""

    # Connection pool (ignored for SQLite)
    db_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Tokens
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 7 * 24 * 60

    # Password hashing
    bcrypt_rounds: int = 10

    # Super-admin bootstrap
    admin_init_secret: str = DEFAULT_ADMIN_INIT_SECRET
    admin_init_enabled: bool = True

    # Read surfaces
    history_limit: int = 50
    stats_trend_days: int = 30
    stats_top_k: int = 10
    stats_recent_days: int = 7
    announcement_history_limit: int = 10

    @property
    def insecure_defaults(self) -> list[str]:
        """Names of secrets still set to their development defaults."""
        found = []
        if self.jwt_secret == DEFAULT_JWT_SECRET:
            found.append("jwt_secret")
        if self.admin_init_secret == DEFAULT_ADMIN_INIT_SECRET:
            found.append("admin_init_secret")
        return found

    model_config = {"env_prefix": "MODELFIT_", "env_file": ".env"}


settings = Settings()
