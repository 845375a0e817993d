# ecorater/search.py
from __future__ import annotations

import logging
from typing import List, Optional

import requests

from ecorater import config
from ecorater.errors import UpstreamError
from ecorater.models import SearchItem

logger = logging.getLogger(__name__)


# ========= Result parsing =========
def _first_src(pagemap: dict, key: str) -> Optional[str]:
    entries = pagemap.get(key) or []
    if entries and isinstance(entries[0], dict):
        return entries[0].get("src") or None
    return None


def _to_item(raw: dict) -> Optional[SearchItem]:
    link = (raw.get("link") or "").strip()
    if not link:
        return None
    pagemap = raw.get("pagemap") or {}
    thumb = _first_src(pagemap, "cse_thumbnail") or _first_src(pagemap, "cse_image")
    return SearchItem(title=(raw.get("title") or "").strip(), link=link, thumbnail=thumb)


# ========= Core class =========
class ProductSearch:
    """Google Custom Search JSON API, reduced to {title, link, thumbnail} items."""

    def __init__(
        self,
        *,
        api_key: str = config.SEARCH_API_KEY,
        engine_id: str = config.SEARCH_ENGINE_ID,
        url: str = config.SEARCH_URL,
        timeout: float = config.SEARCH_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.engine_id = engine_id
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self.api_key and self.engine_id)

    def search_products(self, query: str, num: int = 10) -> List[SearchItem]:
        if not query or not query.strip():
            return []

        params = {"key": self.api_key, "cx": self.engine_id, "q": query.strip(), "num": int(num)}
        try:
            r = self.session.get(self.url, params=params, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            raise UpstreamError("search", str(e)) from e
        except ValueError as e:
            raise UpstreamError("search", f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise UpstreamError("search", "unexpected response shape")

        items = []
        for raw in data.get("items") or []:
            item = _to_item(raw) if isinstance(raw, dict) else None
            if item is not None:
                items.append(item)
        logger.debug("search %r -> %d items", query, len(items))
        return items
