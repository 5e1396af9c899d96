"""Configuration management from environment variables."""
import json
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load .env file
load_dotenv()


class Config:
    """Application configuration."""

    # Account fields (standalone mode only, normally supplied by the caller)
    LOGIN: str | None = os.getenv("LOGIN")
    PASSWORD: str | None = os.getenv("PASSWORD")
    COZY_PARAMETERS: str | None = os.getenv("COZY_PARAMETERS")

    # HTTP
    TIMEOUT: float = float(os.getenv("TIMEOUT", "20"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        errors = []
        if not cls.LOGIN:
            errors.append("LOGIN is required")
        if not cls.PASSWORD:
            errors.append("PASSWORD is required")
        if cls.TIMEOUT <= 0:
            errors.append("TIMEOUT must be positive")
        if cls.COZY_PARAMETERS:
            try:
                json.loads(cls.COZY_PARAMETERS)
            except ValueError:
                errors.append("COZY_PARAMETERS must be valid JSON")
        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

    @classmethod
    def fields(cls) -> dict[str, str]:
        """Account fields as the konnector expects them."""
        return {"login": cls.LOGIN or "", "password": cls.PASSWORD or ""}

    @classmethod
    def cozy_parameters(cls) -> dict[str, Any] | None:
        if not cls.COZY_PARAMETERS:
            return None
        return json.loads(cls.COZY_PARAMETERS)


class KonnectorSettings(BaseModel):
    """Site constants for the Mint Energie portal.

    Endpoints and selectors are fixed for the real site; the record is passed
    explicitly to the authenticator and the extractor so a fixture host can
    stand in for it.
    """

    model_config = ConfigDict(frozen=True)

    vendor: str = "mint-energie"
    base_url: str = "https://www.mint-energie.com"
    login_path: str = "/Pages/Connexion/connexion.aspx"
    bills_path: str = "/Pages/Compte/informations_paiement.aspx"
    currency: str = "EUR"
    identifiers: tuple[str, ...] = ("budget telecom",)

    # Login form
    form_selector: str = "form"
    login_field: str = "TB_Login"
    password_field: str = "TB_Password"
    submit_field: str = "BT_Connexion"
    submit_value: str = "se connecter"
    success_selector: str = "#header1_LB_Exit"
    error_selector: str = ".error"

    # Bills list
    bill_selector: str = ".factulist"
    date_selector: str = "div.colA b:nth-child(1)"
    amount_selector: str = "div.colB b:nth-child(1)"
    file_selector: str = "div.colC a"


config = Config()
settings = KonnectorSettings()
