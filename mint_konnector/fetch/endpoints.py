"""URL builders for Mint Energie endpoints."""
from urllib.parse import urljoin

from mint_konnector.config import KonnectorSettings


def get_login_url(settings: KonnectorSettings) -> str:
    """Login page, also the form's submit target."""
    return urljoin(settings.base_url, settings.login_path)


def get_bills_url(settings: KonnectorSettings) -> str:
    """Billing-history page listing the invoices."""
    return urljoin(settings.base_url, settings.bills_path)
