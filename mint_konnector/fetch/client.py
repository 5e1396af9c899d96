"""HTTP client with a cookie jar and error classification."""
import logging
from typing import Any, Optional

import httpx
from selectolax.parser import HTMLParser

from mint_konnector.auth.session import SessionManager
from mint_konnector.config import KonnectorSettings, config, settings as default_settings
from mint_konnector.errors import VendorDownError
from mint_konnector.parse.models import Credentials

logger = logging.getLogger(__name__)


class FetchClient:
    """HTTP client owning the run's session cookies."""

    def __init__(
        self,
        settings: KonnectorSettings = default_settings,
        credentials: Optional[Credentials] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.credentials = credentials
        # Cookies persist in client.cookies across every request of the run
        self.client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else config.TIMEOUT,
            follow_redirects=True,
            transport=transport,
        )
        self.session_manager = SessionManager(self, settings)

    async def __aenter__(self):
        if self.credentials is not None:
            try:
                await self.session_manager.authenticate(self.credentials.login, self.credentials.password)
            except Exception:
                await self.client.aclose()
                raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    async def fetch(self, url: str, method: str = "GET", **kwargs: Any) -> httpx.Response:
        """Send one request; request failures become VendorDownError."""
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.warning(f"Network error for {method} {url}: {e!r}")
            raise VendorDownError(f"{type(e).__name__} on {method} {url}") from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    async def fetch_html(self, url: str) -> HTMLParser:
        """GET a page and parse it; non-2xx answers become VendorDownError."""
        response = await self.fetch(url)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise VendorDownError(f"HTTP {response.status_code} on GET {url}") from e
        return HTMLParser(response.text)
