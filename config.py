from dotenv import load_dotenv; load_dotenv()
import os

ENV = os.getenv("ENV", "production").lower()
IS_DEV = ENV == "development"

def require(name: str) -> str:
    v = os.getenv(name)
    if not v:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return v

def _int_list(raw: str | None) -> list[int]:
    if not raw:
        return []
    return [int(p) for p in raw.replace(" ", "").split(",") if p]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
GUILD_ID = int(os.getenv("GUILD_ID")) if os.getenv("GUILD_ID") else None
GUILD_IDS = [GUILD_ID] if GUILD_ID else None

# Paginator defaults
PAGINATOR_TIMEOUT = float(os.getenv("PAGINATOR_TIMEOUT", "60"))
ITEMS_PER_PAGE = int(os.getenv("ITEMS_PER_PAGE", "10"))
PAGINATOR_ROLE_IDS = _int_list(os.getenv("PAGINATOR_ROLE_IDS"))
