from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    DEBUG: bool = True
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Database – SQLite for local development, PostgreSQL (asyncpg) in production
    DATABASE_URL: str = "sqlite+aiosqlite:///./sigo.db"

    # Acting user recorded in the audit trail when no X-User header is sent
    DEFAULT_USER: str = "SISTEMA"

    # Dashboard: how many days ahead an ending leave/restriction counts as "expiring"
    EXPIRATION_WINDOW_DAYS: int = 7

    # Pagination
    PAGE_SIZE_DEFAULT: int = 50
    PAGE_SIZE_MAX: int = 100

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
