"""Shared fixtures: a fake Mint Energie portal served through httpx.MockTransport."""
import httpx
import pytest

from mint_konnector.config import KonnectorSettings

BASE_URL = "https://portal.test"
GOOD_LOGIN = "client@example.com"
GOOD_PASSWORD = "s3cret"
ERROR_TEXT = "Identifiant ou mot de passe incorrect"

LOGIN_PAGE = """
<html><body>
<form method="post" action="./connexion.aspx" id="form1">
  <input type="hidden" name="__VIEWSTATE" value="vs-token" />
  <input type="hidden" name="__EVENTVALIDATION" value="ev-token" />
  <input type="text" name="TB_Login" value="" />
  <input type="password" name="TB_Password" />
  <input type="submit" name="BT_Connexion" value="se connecter" />
</form>
</body></html>
"""

ACCOUNT_PAGE = """
<html><body>
<div id="header1"><a id="header1_LB_Exit" href="/logout">Quitter</a></div>
<h1>Mon compte</h1>
</body></html>
"""

REJECTED_PAGE = f"""
<html><body>
<form method="post" action="./connexion.aspx"></form>
<span class="error">{ERROR_TEXT}</span>
</body></html>
"""


def bill_block(date: str, amount: str, href: str) -> str:
    return (
        '<div class="factulist">'
        f'<div class="colA"><b>{date}</b><b>ignored</b></div>'
        f'<div class="colB"><b>{amount}</b></div>'
        f'<div class="colC"><a href="{href}">Télécharger</a></div>'
        "</div>"
    )


def bills_page(*blocks: str) -> str:
    return f"<html><body><div id='factures'>{''.join(blocks)}</div></body></html>"


THREE_BILLS_PAGE = bills_page(
    bill_block("17/06/2020", "12.50€", "/doc1.pdf"),
    bill_block("01/01/2020", "5.00€", "/doc2.pdf"),
    bill_block("31/12/2019", " 100.00 € ", "/doc3.pdf"),
)


class FakePortal:
    """Records requests and answers like the real portal."""

    def __init__(self, bills_html: str = THREE_BILLS_PAGE):
        self.bills_html = bills_html
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/Pages/Connexion/connexion.aspx" and request.method == "GET":
            return httpx.Response(
                200, html=LOGIN_PAGE, headers={"Set-Cookie": "ASP.NET_SessionId=abc123; path=/"}
            )

        if path == "/Pages/Connexion/connexion.aspx" and request.method == "POST":
            form = dict(httpx.QueryParams(request.content.decode()))
            if form.get("TB_Login") == GOOD_LOGIN and form.get("TB_Password") == GOOD_PASSWORD:
                return httpx.Response(
                    200, html=ACCOUNT_PAGE, headers={"Set-Cookie": ".ASPXAUTH=authcookie; path=/"}
                )
            return httpx.Response(200, html=REJECTED_PAGE)

        if path == "/Pages/Compte/informations_paiement.aspx":
            if ".ASPXAUTH=authcookie" not in request.headers.get("cookie", ""):
                return httpx.Response(302, headers={"Location": "/Pages/Connexion/connexion.aspx"})
            return httpx.Response(200, html=self.bills_html)

        return httpx.Response(404)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> KonnectorSettings:
    return KonnectorSettings(base_url=BASE_URL)


@pytest.fixture
def portal() -> FakePortal:
    return FakePortal()
