"""Decide whether the page returned by the login POST is the account page."""
import logging

from selectolax.parser import HTMLParser

from mint_konnector.config import KonnectorSettings, settings as default_settings
from mint_konnector.parse.html_parser import extract_text_by_selector, query_all
from mint_konnector.parse.models import LoginResult

logger = logging.getLogger(__name__)


def validate_login(
    status_code: int,
    parser: HTMLParser,
    final_url: str,
    settings: KonnectorSettings = default_settings,
) -> LoginResult:
    """
    Login succeeded iff the exit link (only rendered on "my account" pages)
    matches exactly once. On failure the portal's error box text is returned,
    possibly empty.
    """
    logger.debug(f"Login response: status={status_code} url={final_url}")

    if len(query_all(parser, settings.success_selector)) == 1:
        return LoginResult(ok=True)

    message = extract_text_by_selector(parser, settings.error_selector)
    logger.error(f"Login rejected: {message or '(no error message on page)'}")
    return LoginResult(ok=False, message=message)
