import os
from dotenv import load_dotenv

from pathlib import Path

env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

class Config:
    DATAJUD_API_KEY = os.getenv("DATAJUD_API_KEY")
    DATAJUD_BASE_URL = os.getenv("DATAJUD_BASE_URL", "https://api-publica.datajud.cnj.jus.br/")
    DATAJUD_TIMEOUT = float(os.getenv("DATAJUD_TIMEOUT", "30"))

    # Bulk search limits
    BULK_MAX_ITEMS = int(os.getenv("BULK_MAX_ITEMS", "1000"))
    BULK_BATCH_SIZE = int(os.getenv("BULK_BATCH_SIZE", "10"))
    BULK_INTER_BATCH_DELAY = float(os.getenv("BULK_INTER_BATCH_DELAY", "1.0"))

    # Where search history, favorites and follows are kept
    DATA_DIR = os.getenv("DATA_DIR", ".")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
