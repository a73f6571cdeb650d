from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    redis_timeout_seconds: float = 2.0

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "memberhub"
    jwt_audience: str = "memberhub"
    jwt_expires_minutes: int = 600

    # batch invite worker pool
    invite_max_workers: int = 8

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_auth_login_per_min: int = 30
    rate_limit_auth_register_per_min: int = 20

settings = Settings()
