# config.py
import os

from pydantic import BaseModel, Field


class Settings(BaseModel):
    store_dir: str = "data"
    slot_minutes: int = Field(default=30, gt=0)
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment (call load_dotenv() first to pick up .env)."""
    env = {
        "store_dir": os.environ.get("SCHEDULER_STORE_DIR"),
        "slot_minutes": os.environ.get("SCHEDULER_SLOT_MINUTES"),
        "log_level": os.environ.get("SCHEDULER_LOG_LEVEL"),
    }
    return Settings(**{k: v for k, v in env.items() if v})
