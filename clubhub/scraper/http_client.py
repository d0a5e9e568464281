"""HTTP fetching for the scrapers with a small linear backoff between attempts."""

import logging
import time
from typing import Optional

import requests

from clubhub.config import settings

logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


class HttpError(RuntimeError):
    pass


def fetch(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: Optional[int] = None,
    retries: Optional[int] = None,
    backoff_seconds: float = 1.0,
) -> str:
    """GET a page as text; waits backoff_seconds * attempt between tries"""
    timeout = timeout or settings.scraper_timeout
    retries = retries if retries is not None else settings.scraper_retries
    http = session or requests
    headers = {"User-Agent": settings.scraper_user_agent, **BROWSER_HEADERS}

    for attempt in range(1, retries + 1):
        try:
            response = http.get(url, headers=headers, timeout=timeout)
            response.raise_for_status()
            return response.text
        except requests.RequestException as e:
            logger.warning("Attempt %d/%d failed for %s: %s", attempt, retries, url, e)
            if attempt == retries:
                raise HttpError(f"Failed to fetch {url} after {retries} attempts: {e}") from e
            time.sleep(backoff_seconds * attempt)
    raise HttpError(f"Failed to fetch {url}: no attempts made")
