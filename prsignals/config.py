import os
from dotenv import load_dotenv

if not os.getenv("FLY_APP_NAME"):
    load_dotenv(override=False)

class Settings:
    GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
    GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
    GITHUB_TIMEOUT_SECONDS = float(os.getenv("GITHUB_TIMEOUT_SECONDS", "15"))
    GITHUB_MAX_ATTEMPTS = int(os.getenv("GITHUB_MAX_ATTEMPTS", "8"))
    GITHUB_PER_PAGE = int(os.getenv("GITHUB_PER_PAGE", "100"))
    # predicate traces are off unless explicitly requested
    SIGNALS_DEBUG = os.getenv("SIGNALS_DEBUG", "false").lower() == "true"


settings = Settings()


def debug(msg: str) -> None:
    if settings.SIGNALS_DEBUG:
        print(f"[signals] {msg}")
