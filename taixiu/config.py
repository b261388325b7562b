from pydantic_settings import BaseSettings
import os

class Settings(BaseSettings):
    source_url: str = os.getenv("SOURCE_URL", "https://sunai.onrender.com/api/taixiu/history")
    source_timeout: float = float(os.getenv("SOURCE_TIMEOUT", 10.0))
    max_history: int = int(os.getenv("MAX_HISTORY", 300))
    perf_lookback: int = int(os.getenv("PERF_LOOKBACK", 15))
    debug_history_limit: int = int(os.getenv("DEBUG_HISTORY_LIMIT", 50))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "1").lower() in ("1", "true", "yes")
    api_key: str | None = os.getenv("API_KEY")

settings = Settings()
