"""Form-based login over the shared cookie-carrying client."""
import logging
from typing import TYPE_CHECKING
from urllib.parse import urljoin

from selectolax.parser import HTMLParser

from mint_konnector.auth.login_detector import validate_login
from mint_konnector.config import KonnectorSettings, settings as default_settings
from mint_konnector.errors import LoginFailedError, VendorDownError
from mint_konnector.fetch.endpoints import get_login_url
from mint_konnector.parse.html_parser import serialize_form
from mint_konnector.parse.models import LoginResult
from mint_konnector.parse.redact import redact_dict

if TYPE_CHECKING:
    from mint_konnector.fetch.client import FetchClient

logger = logging.getLogger(__name__)


class SessionManager:
    """Authenticates the run's session; cookies stay in the client's jar."""

    def __init__(self, fetch_client: "FetchClient", settings: KonnectorSettings = default_settings):
        self.fetch_client = fetch_client
        self.settings = settings
        self._authenticated = False

    async def authenticate(self, username: str, password: str) -> LoginResult:
        """Submit the login form and validate the resulting page.

        Raises LoginFailedError when the account page marker is missing and
        VendorDownError on transport failure.
        """
        login_url = get_login_url(self.settings)
        logger.debug(f"Login URL: {login_url}")

        # Initial GET sets the session cookie and any hidden form tokens
        page = await self.fetch_client.fetch(login_url)
        if page.status_code >= 500:
            raise VendorDownError(f"Login page returned HTTP {page.status_code}")

        action_url, form_data = self._build_form(HTMLParser(page.text), str(page.url))
        form_data.update(
            {
                self.settings.login_field: username,
                self.settings.password_field: password,
                self.settings.submit_field: self.settings.submit_value,
            }
        )
        logger.debug(f"Submitting login form to {action_url}: {redact_dict(form_data)}")

        response = await self.fetch_client.fetch(action_url, method="POST", data=form_data)
        if response.status_code >= 500:
            raise VendorDownError(f"Login submit returned HTTP {response.status_code}")

        result = validate_login(
            response.status_code,
            HTMLParser(response.text),
            str(response.url),
            settings=self.settings,
        )
        if not result.ok:
            self._authenticated = False
            raise LoginFailedError(result.message)

        self._authenticated = True
        return result

    def _build_form(self, parser: HTMLParser, page_url: str) -> tuple[str, dict[str, str]]:
        """Return the submit URL and pre-filled fields of the login form."""
        form = parser.css_first(self.settings.form_selector)
        if form is None:
            logger.debug("No login form on page, posting to login URL")
            return get_login_url(self.settings), {}

        action = form.attributes.get("action")
        action_url = urljoin(page_url, action) if action else page_url
        return action_url, serialize_form(form)

    def is_authenticated(self) -> bool:
        """Check whether the last authentication succeeded."""
        return self._authenticated
