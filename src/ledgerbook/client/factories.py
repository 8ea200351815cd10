"""Factory functions for creating ledger service clients."""

import os
from typing import Optional

from ledgerbook.client.http import HttpLedgerBackend

DEFAULT_API_URL = "http://localhost:9000"
DEFAULT_TIMEOUT = 10.0


def create_http_backend(
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
) -> HttpLedgerBackend:
    """Create an HTTP ledger backend.

    Args:
        base_url: Service root. If None, checks LEDGERBOOK_API_URL, then
            defaults to http://localhost:9000
        token: Bearer token. If None, checks LEDGERBOOK_TOKEN
        timeout: Request timeout in seconds. If None, checks
            LEDGERBOOK_TIMEOUT, then defaults to 10 seconds

    Returns:
        HttpLedgerBackend instance
    """
    if base_url is None:
        base_url = os.environ.get("LEDGERBOOK_API_URL", DEFAULT_API_URL)

    if token is None:
        token = os.environ.get("LEDGERBOOK_TOKEN") or None

    if timeout is None:
        raw_timeout = os.environ.get("LEDGERBOOK_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise ValueError(f"LEDGERBOOK_TIMEOUT must be a number of seconds, got '{raw_timeout}'")

    return HttpLedgerBackend(base_url, token=token, timeout=timeout)
