"""Data models for scraped records."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Account fields supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    login: str
    password: str = Field(..., repr=False)


class LoginResult(BaseModel):
    """Outcome of validating the page returned by the login POST."""

    ok: bool
    message: str = ""


class BillRecord(BaseModel):
    """One invoice entry from the billing-history page."""

    model_config = ConfigDict(frozen=True)

    date: Optional[datetime] = Field(..., description="Invoice day at local noon, None when unparseable")
    amount: float = Field(..., description="Amount in currency units, NaN when unparseable")
    currency: str = Field(default="EUR")
    fileurl: Optional[str] = Field(default=None, description="href of the document link, as found")
    filename: str = Field(..., description="Normalized storage file name")
    vendor: str = Field(...)
    vendor_ref: Optional[str] = Field(default=None, description="Vendor reference appended to the file name")
