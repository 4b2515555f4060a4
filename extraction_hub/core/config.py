import os
from urllib.parse import quote_plus
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # DATABASE
    # DATABASE_URL wins when set (e.g. sqlite:// for tests)
    DATABASE_URL = os.getenv("DATABASE_URL")
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = os.getenv("DB_PORT", "5432")
    DB_NAME = os.getenv("DB_NAME", "extraction_hub")
    DB_USER = os.getenv("DB_USER", "postgres")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")

    # AUTH
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # HTTP
    CORS_ORIGINS = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if o.strip()
    ]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # SCHEDULER
    SCHEDULER_ENABLED = _as_bool(os.getenv("SCHEDULER_ENABLED", "true"))
    SCHEDULE_SYNC_MINUTES = int(os.getenv("SCHEDULE_SYNC_MINUTES", "5"))

    # EXECUTION SIMULATION
    # 0 disables the artificial waits entirely
    EXECUTION_DELAY_SCALE = float(os.getenv("EXECUTION_DELAY_SCALE", "1.0"))
    CONNECTION_TEST_SUCCESS_RATE = float(os.getenv("CONNECTION_TEST_SUCCESS_RATE", "0.8"))

    # LIMITS
    HISTORY_DEFAULT_LIMIT = int(os.getenv("HISTORY_DEFAULT_LIMIT", "50"))
    HISTORY_MAX_LIMIT = 200

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        password = quote_plus(self.DB_PASSWORD or "")
        return f"postgresql://{self.DB_USER}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

settings = Settings()
