"""Errors raised by the ledger service client."""


class BackendError(RuntimeError):
    """The service could not be reached or rejected the request.

    The message is the service's own message when it sent one, so it can be
    shown to the user verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None, code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
