"""Domain exceptions for the seller finance API.

Every error raised by the query layer or the request handlers inherits from
FinanceAPIError. Each class carries the HTTP status it is reported with, so
the handlers registered in ``seller_finance.main`` can translate any of them
into an ``{"error": message}`` response.
"""


class FinanceAPIError(Exception):
    """Base exception for all seller finance errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FinanceAPIError):
    """Raised when a request parameter is missing or malformed.

    Examples:
    - Blank vendor identifier
    - Unknown payout status filter
    - Pagination values out of range
    """

    status_code = 400


class NotFoundError(FinanceAPIError):
    """Raised when a requested vendor, order or statement does not exist."""

    status_code = 404


class VendorNotFound(NotFoundError):
    """Raised when a vendor handle does not resolve to any vendor row."""

    def __init__(self, handle: str):
        super().__init__(f"Vendor not found: {handle}")
        self.handle = handle


class QueryExecutionError(FinanceAPIError):
    """Raised when the warehouse cannot run a query.

    This covers an unreachable warehouse, malformed SQL and results that
    cannot be decoded as rows. The warehouse message is kept verbatim.
    """

    status_code = 500


class ConfigurationError(FinanceAPIError):
    """Raised at startup when required configuration is absent or invalid."""

    status_code = 500
