"""Client layer for the remote ledger service."""

from ledgerbook.client.base import LedgerBackend
from ledgerbook.client.errors import BackendError
from ledgerbook.client.factories import create_http_backend

__all__ = ["LedgerBackend", "BackendError", "create_http_backend"]
