"""Tests for bill extraction from the billing-history page."""
import math
from datetime import datetime

import httpx
import pytest
from selectolax.parser import HTMLParser

from conftest import THREE_BILLS_PAGE, bill_block, bills_page
from mint_konnector.errors import VendorDownError
from mint_konnector.fetch.client import FetchClient
from mint_konnector.parse.bills import fetch_bills, parse_documents


def test_parse_documents_three_bills(settings):
    """Test extraction of the three fixture invoices in document order."""
    bills = parse_documents(HTMLParser(THREE_BILLS_PAGE), settings)

    assert [bill.filename for bill in bills] == [
        "2020-06-17_mint-energie_12.50EUR.pdf",
        "2020-01-01_mint-energie_5.00EUR.pdf",
        "2019-12-31_mint-energie_100.00EUR.pdf",
    ]
    assert [bill.fileurl for bill in bills] == ["/doc1.pdf", "/doc2.pdf", "/doc3.pdf"]
    assert [bill.amount for bill in bills] == [12.5, 5.0, 100.0]
    assert bills[0].date == datetime(2020, 6, 17, 12, 0, 0)
    for bill in bills:
        assert bill.currency == "EUR"
        assert bill.vendor == "mint-energie"
        assert bill.vendor_ref is None


def test_parse_documents_empty_page(settings):
    """Test that a page without invoice blocks yields no records."""
    assert parse_documents(HTMLParser(bills_page()), settings) == []


def test_parse_documents_idempotent(settings):
    """Test that parsing twice gives identical records."""
    first = parse_documents(HTMLParser(THREE_BILLS_PAGE), settings)
    second = parse_documents(HTMLParser(THREE_BILLS_PAGE), settings)
    assert [b.model_dump_json() for b in first] == [b.model_dump_json() for b in second]


def test_parse_documents_keeps_malformed_blocks(settings):
    """Test that corrupt fields degrade the record instead of dropping it."""
    html = bills_page(
        bill_block("pas de date", "n/a", "/doc.pdf"),
        '<div class="factulist"><div class="colA"><b>02/03/2021</b></div></div>',
    )
    bills = parse_documents(HTMLParser(html), settings)

    assert len(bills) == 2
    assert bills[0].date is None
    assert math.isnan(bills[0].amount)
    assert bills[0].filename == "invalid-date_mint-energie_NaNEUR.pdf"
    assert bills[1].date == datetime(2021, 3, 2, 12, 0, 0)
    assert bills[1].fileurl is None


@pytest.mark.anyio
async def test_fetch_bills_uses_bills_url(settings):
    """Test that fetch_bills GETs the billing-history page."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, html=THREE_BILLS_PAGE)

    async with FetchClient(settings=settings, transport=httpx.MockTransport(handler)) as client:
        bills = await fetch_bills(client, settings)

    assert seen == ["https://portal.test/Pages/Compte/informations_paiement.aspx"]
    assert len(bills) == 3


@pytest.mark.anyio
async def test_fetch_bills_server_error(settings):
    """Test that an error status on the bills page is a vendor-down error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async with FetchClient(settings=settings, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(VendorDownError):
            await fetch_bills(client, settings)


def test_parse_documents_non_ascii_digits_in_date(settings):
    """Test that superscript digits in a date degrade the record instead of raising."""
    html = bills_page(
        bill_block("1²/06/2020", "12.50€", "/doc1.pdf"),
        bill_block("01/01/2020", "5.00€", "/doc2.pdf"),
    )
    bills = parse_documents(HTMLParser(html), settings)

    assert len(bills) == 2
    assert bills[0].date is None
    assert bills[0].filename == "invalid-date_mint-energie_12.50EUR.pdf"
    assert bills[1].filename == "2020-01-01_mint-energie_5.00EUR.pdf"


@pytest.mark.anyio
async def test_fetch_bills_redirect_loop(settings):
    """Test that a redirect loop on the bills page is a vendor-down error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": str(request.url)})

    async with FetchClient(settings=settings, transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(VendorDownError):
            await fetch_bills(client, settings)
