# FILE: backend/feedhub/core/config.py
# 1. Mongo credentials are assembled into an Atlas SRV URI unless DATABASE_URI is set.
# 2. Weather polling and pagination are tunable from the environment.

from pydantic_settings import BaseSettings, SettingsConfigDict
from urllib.parse import quote_plus

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    # --- Server ---
    PORT: int = 8080

    # --- Auth ---
    SECRET_KEY: str = "somesupersecretsecret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # --- Database ---
    MONGO_USER: str = ""
    MONGO_PSWD: str = ""
    MONGO_DEFAULT_DB: str = "feed"
    MONGO_HOST: str = "cluster0-hy9v3.mongodb.net"
    DATABASE_URI: str = ""

    # --- Storage & Logs ---
    IMAGES_DIR: str = "images"
    ACCESS_LOG_PATH: str = "access.log"

    # --- Weather Feed ---
    WEATHER_API_URL: str = "https://api.darksky.net/forecast/cb39351be416768d79dd6ffd44df71d6/37.8267,-122.4233"
    WEATHER_POLL_SECONDS: float = 10.0
    WEATHER_TIMEOUT_SECONDS: float = 5.0

    # --- GraphQL ---
    POSTS_PER_PAGE: int = 2

    @property
    def mongo_uri(self) -> str:
        if self.DATABASE_URI:
            return self.DATABASE_URI
        user = quote_plus(self.MONGO_USER)
        password = quote_plus(self.MONGO_PSWD)
        return (
            f"mongodb+srv://{user}:{password}@{self.MONGO_HOST}/"
            f"{self.MONGO_DEFAULT_DB}?retryWrites=true&w=majority"
        )

settings = Settings()
