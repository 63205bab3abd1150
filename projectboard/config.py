from pathlib import Path
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
DEFAULT_SA_PATH = BASE_DIR / "serviceAccountKey.json"
load_dotenv(ENV_PATH)

class Settings(BaseSettings):
    #FIREBASE
    FIREBASE_API_KEY: str | None = None
    FIREBASE_PROJECT_ID: str | None = None
    GOOGLE_APPLICATION_CREDENTIALS: str = str(DEFAULT_SA_PATH)
    FIREBASE_SERVICE_ACCOUNT_JSON: str | None = None

    #Storage
    STORE_BACKEND: Literal["firestore", "memory"] = "firestore"
    KV_COLLECTION: str = "kv_store"

    #HTTP
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"
    API_PREFIX: str = ""

    #Admin bootstrap
    BOOTSTRAP_ADMIN_EMAIL: str | None = None
    BOOTSTRAP_ADMIN_NAME: str = "Administrator"

    ## Maintenance
    SWEEP_INTERVAL_SECONDS: int = 0

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
