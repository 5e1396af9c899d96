"""Job runner: login, fetch the bills page, hand the records to the saver."""
import inspect
import logging
import sys
from typing import Any, Awaitable, Callable, Optional, Union

import httpx
import orjson

from mint_konnector.config import KonnectorSettings, settings as default_settings
from mint_konnector.fetch.client import FetchClient
from mint_konnector.parse.bills import fetch_bills
from mint_konnector.parse.models import BillRecord, Credentials
from mint_konnector.parse.redact import redact_dict

logger = logging.getLogger(__name__)

SaveBills = Callable[[list[BillRecord], dict[str, Any], dict[str, Any]], Union[None, Awaitable[None]]]


def print_bills(documents: list[BillRecord], fields: dict[str, Any], options: dict[str, Any]) -> None:
    """Default bill saver for standalone runs: dump records as JSON on stdout."""
    payload = {
        "bills": [doc.model_dump(mode="json") for doc in documents],
        "identifiers": list(options.get("identifiers", [])),
    }
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode() + "\n")


class KonnectorRunner:
    """Runs the pipeline once for one account."""

    def __init__(
        self,
        fields: dict[str, Any],
        cozy_parameters: Optional[dict[str, Any]] = None,
        save_bills: SaveBills = print_bills,
        settings: KonnectorSettings = default_settings,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.fields = fields
        self.cozy_parameters = cozy_parameters
        self.save_bills = save_bills
        self.settings = settings
        self.timeout = timeout
        self.transport = transport

    async def run(self) -> list[BillRecord]:
        """Run the pipeline; errors propagate before anything is saved."""
        credentials = Credentials(login=self.fields["login"], password=self.fields["password"])

        logger.info("Authenticating ...")
        if self.cozy_parameters:
            logger.debug("Found COZY_PARAMETERS")

        async with FetchClient(
            settings=self.settings,
            credentials=credentials,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            logger.info("Successfully logged in")
            documents = await fetch_bills(client, self.settings)

        logger.info("Saving data to Cozy")
        logger.debug(f"Account fields: {redact_dict(self.fields)}")
        result = self.save_bills(documents, self.fields, {"identifiers": list(self.settings.identifiers)})
        if inspect.isawaitable(result):
            await result

        return documents
