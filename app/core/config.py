from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    DATABASE_URL: str = "sqlite+aiosqlite:///./dev.db"
    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_MINUTES: int = 15
    LOG_LEVEL: str = "INFO"
    OPENAI_API_KEY: str | None = None

    # Progressive overload rules
    COMPOUND_MUSCLE_GROUPS: list[str] = ["pectoraux", "dos", "quadriceps", "ischios", "fessiers"]
    WEIGHT_INCREMENT_COMPOUND: float = 5.0
    WEIGHT_INCREMENT_ISOLATION: float = 2.5
    REP_INCREMENT: int = 2
    COOLDOWN_SESSIONS: int = 3
    MIN_SUCCESSFUL_SESSIONS: int = 3
    STABILITY_SCAN_SLACK: int = 2

settings = Settings()
