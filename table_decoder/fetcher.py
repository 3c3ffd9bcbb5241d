"""
Retrieval of published documents over HTTP.
"""

from typing import Optional

import requests

from .config import Config, DEFAULT_CONFIG
from .utils import setup_logger


logger = setup_logger(__name__)


class DocumentFetcher:
    """Fetches raw HTML for a URL; failures are logged and yield None."""

    def __init__(self, config: Optional[Config] = None, session: Optional[requests.Session] = None):
        """
        Initialize fetcher.

        Args:
            config: Configuration object (uses DEFAULT_CONFIG if None)
            session: Optional requests session to reuse
        """
        self.config = config or DEFAULT_CONFIG
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = self.config.user_agent

    def fetch(self, url: str) -> Optional[str]:
        """
        Download a document.

        Args:
            url: Document URL

        Returns:
            Response text, or None on network error, non-200 status or
            unexpected content type

        Raises:
            ValueError: url is empty
        """
        if not url or not url.strip():
            raise ValueError("Url is required.")
        url = url.strip()

        logger.info(f"Fetching document: {url}")
        try:
            response = self.session.get(url, timeout=self.config.request_timeout)
        except requests.RequestException as e:
            logger.error(f"Got error: {e}")
            return None

        try:
            if response.status_code != 200:
                logger.error(f"Request Failed. Status Code: {response.status_code}")
                return None

            content_type = response.headers.get("Content-Type", "")
            if not content_type.lower().startswith(self.config.expected_content_type):
                logger.error(
                    f"Invalid content-type. Expected {self.config.expected_content_type} "
                    f"but received {content_type or 'nothing'}"
                )
                return None

            if response.encoding is None:
                response.encoding = "utf-8"
            text = response.text
        finally:
            response.close()

        logger.debug(f"Fetched {len(text)} characters")
        return text
