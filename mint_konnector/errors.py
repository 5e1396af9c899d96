"""Error taxonomy shared by the authenticator and the extractor."""


class KonnectorError(Exception):
    """Base class for classified run failures."""

    code = "UNKNOWN_ERROR"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message


class VendorDownError(KonnectorError):
    """Network, DNS, TLS or timeout failure talking to the vendor site.

    Callers should treat it as temporary.
    """

    code = "VENDOR_DOWN"


class LoginFailedError(KonnectorError):
    """The success marker was absent after submitting the login form."""

    code = "LOGIN_FAILED"
