# ecorater/config.py
import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

from ecorater.models import PRODUCT_FIELDS

load_dotenv()

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_BASE    = os.getenv("GEMINI_BASE", "https://generativelanguage.googleapis.com/v1beta/openai/")
MODEL          = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
LLM_TIMEOUT    = float(os.getenv("LLM_TIMEOUT", "30"))

SEARCH_API_KEY   = os.getenv("SEARCH_API_KEY", "")
SEARCH_ENGINE_ID = os.getenv("SEARCH_ENGINE_ID", "")
SEARCH_URL       = os.getenv("SEARCH_URL", "https://www.googleapis.com/customsearch/v1")
SEARCH_TIMEOUT   = float(os.getenv("SEARCH_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT      = int(os.getenv("PORT", "3000"))

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def parse_fields(raw: Optional[str]) -> List[str]:
    """Comma list -> known ProductQuery field names (ordered, no duplicates)."""
    out: List[str] = []
    for part in (raw or "").split(","):
        name = part.strip().lower()
        if name in PRODUCT_FIELDS and name not in out:
            out.append(name)
    return out


REQUIRED_FIELDS = parse_fields(os.getenv("REQUIRED_FIELDS", ",".join(PRODUCT_FIELDS)))


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
