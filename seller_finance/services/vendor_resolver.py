import logging

from seller_finance.core.exceptions import ValidationError, VendorNotFound
from seller_finance.services import queries
from seller_finance.services.ledger_reader import LedgerReader

logger = logging.getLogger(__name__)


def looks_like_vendor_id(value: str) -> bool:
    return value.isascii() and value.isdigit()


def looks_like_handle(value: str) -> bool:
    """Vendor ids are numeric; anything with a letter in it is a handle."""
    return any(ch.isalpha() for ch in value)


class VendorResolver:
    def __init__(self, reader: LedgerReader):
        self.reader = reader

    def resolve(self, handle: str) -> str:
        """
        Exact, case-sensitive handle lookup among live vendors.
        Duplicated handles resolve to the lowest vendor id.
        """
        if not handle or not handle.strip():
            raise ValidationError("Vendor handle is required")

        rows = self.reader.fetch_all(queries.vendor_by_handle(handle))
        if not rows:
            raise VendorNotFound(handle)

        if len(rows) > 1:
            logger.warning(
                f"Handle '{handle}' matches more than one vendor; using lowest id {rows[0]['id']}"
            )
        return str(rows[0]["id"])

    def resolve_seller(self, value: str) -> str:
        """Accept either a vendor id or a handle and return the vendor id.

        All digits means an id and a letter means a handle. Anything else is
        rejected with a ValidationError.
        """
        if not value or not value.strip():
            raise ValidationError("Vendor ID is required")

        value = value.strip()
        if looks_like_vendor_id(value):
            return value
        if looks_like_handle(value):
            return self.resolve(value)
        raise ValidationError(f"Not a vendor ID or handle: '{value}'")
