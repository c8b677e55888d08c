# backend/errors.py
from typing import Optional


class TransportError(RuntimeError):
    """
    A call to the pinning service or its gateway failed: the network was
    unreachable or the response was not a success. The requests exception
    that caused it is kept as __cause__.
    """

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ContractConfigError(RuntimeError):
    pass
