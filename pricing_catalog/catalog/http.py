"""
==============================================================================
HTTP Transport Module
==============================================================================

Thin wrapper around a requests Session used by the offer index resolver
and the catalog source.

Behaviour:
---------
- One GET per call, no retries
- The configured timeout is always applied
- Transport errors and non-success statuses raise RetrievalError

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from pricing_catalog.config import get_settings
from pricing_catalog.core.exceptions import RetrievalError


# Module logger
logger = logging.getLogger(__name__)


def build_json_headers(user_agent: str) -> Dict[str, str]:
    """
    Build request headers for JSON catalog downloads.

    Args:
        user_agent: User-Agent header value

    Returns:
        Dictionary of HTTP headers
    """
    return {
        "User-Agent": user_agent,
        "Accept": "application/json",
        "Accept-Encoding": "gzip, deflate",
    }


class HttpClient:
    """
    Blocking HTTP client for catalog documents.

    Attributes:
        timeout: Seconds before a request is abandoned

    Example:
        >>> client = HttpClient()
        >>> body = client.get_bytes("https://pricing.us-east-1.amazonaws.com/offers/v1.0/aws/index.json")
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None
    ) -> None:
        """
        Initialize the client.

        Args:
            session: Optional requests Session (a new one is created if None)
            timeout: Request timeout in seconds (uses settings if None)
            user_agent: User-Agent header (uses settings if None)
        """
        settings = get_settings()
        self._session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._headers = build_json_headers(user_agent or settings.user_agent)

    def get_bytes(self, url: str) -> bytes:
        """
        Download a document.

        Args:
            url: Fully-qualified URL

        Returns:
            Raw response body

        Raises:
            RetrievalError: On transport failure or non-success status
        """
        logger.debug(f"GET {url} (timeout={self.timeout}s)")

        try:
            response = self._session.get(url, headers=self._headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"HTTP error for {url}: {status}")
            raise RetrievalError(f"HTTP {status} fetching {url}", url=url, status=status) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error for {url}: {e}")
            raise RetrievalError(f"Failed to fetch {url}: {e}", url=url) from e

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response.content

    def close(self) -> None:
        """Release pooled connections held by the session."""
        self._session.close()
        logger.debug("HTTP session closed")
