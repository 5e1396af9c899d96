"""Extract bill records from the billing-history page."""
import logging
from typing import TYPE_CHECKING

from selectolax.parser import HTMLParser

from mint_konnector.config import KonnectorSettings, settings as default_settings
from mint_konnector.fetch.endpoints import get_bills_url
from mint_konnector.parse.html_parser import FieldSpec, scrape
from mint_konnector.parse.models import BillRecord
from mint_konnector.parse.normalize import build_filename, normalize_price, to_epoch

if TYPE_CHECKING:
    from mint_konnector.fetch.client import FetchClient

logger = logging.getLogger(__name__)


def bill_fields(settings: KonnectorSettings) -> dict[str, FieldSpec]:
    """Field specs for one invoice block."""
    return {
        "date": {"sel": settings.date_selector, "parse": to_epoch},
        "amount": {"sel": settings.amount_selector, "parse": normalize_price},
        "fileurl": {"sel": settings.file_selector, "attr": "href"},
    }


def parse_documents(parser: HTMLParser, settings: KonnectorSettings = default_settings) -> list[BillRecord]:
    """
    Build one BillRecord per invoice block, in document order.
    Blocks with unreadable fields are kept with a None date or NaN amount.
    """
    docs = scrape(parser, bill_fields(settings), settings.bill_selector)
    bills = []
    for doc in docs:
        vendor_ref = doc.get("vendor_ref")
        bills.append(
            BillRecord(
                date=doc["date"],
                amount=doc["amount"],
                currency=settings.currency,
                fileurl=doc["fileurl"],
                filename=build_filename(
                    doc["date"], doc["amount"], settings.vendor, vendor_ref, currency=settings.currency
                ),
                vendor=settings.vendor,
                vendor_ref=vendor_ref,
            )
        )
    logger.info(f"Found {len(bills)} bills")
    return bills


async def fetch_bills(client: "FetchClient", settings: KonnectorSettings = default_settings) -> list[BillRecord]:
    """Fetch the billing-history page with the authenticated session and parse it."""
    logger.info("Fetching the list of documents")
    parser = await client.fetch_html(get_bills_url(settings))
    logger.info("Parsing list of documents")
    return parse_documents(parser, settings)
