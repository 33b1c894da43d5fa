from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str

    # Ambiente
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # API
    API_TITLE: str = "DocTemplates API"
    RPC_PREFIX: str = "/rpc"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Regras de negócio
    TRIAL_DAYS: int = 7
    DEFAULT_CURRENCY: str = "EUR"
    # Quando True, createUserDocument valida o acesso premium no servidor
    ENFORCE_PREMIUM_ACCESS: bool = False

    # Rate Limiting (memory:// ou redis://host:6379/0)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_IP: str = "120/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Em desenvolvimento: cria tabelas e insere o catálogo padrão no startup
    # (em produção usar alembic upgrade head)
    AUTO_CREATE_TABLES: bool = False
    SEED_CATALOG_ON_STARTUP: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )


settings = Settings()
