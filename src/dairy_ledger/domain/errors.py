"""Domain exceptions."""


class DairyLedgerError(Exception):
    """Base exception for all dairy ledger service errors."""


class EntryValidationError(DairyLedgerError):
    """Malformed identifier, unparseable date or negative quantity."""


class EntryNotFoundError(DairyLedgerError):
    """No milk entry exists for the requested key."""


class CatalogValidationError(DairyLedgerError):
    """Invalid extension, customer, product or price payload."""


class CatalogNotFoundError(DairyLedgerError):
    """Extension, customer or product does not exist."""
