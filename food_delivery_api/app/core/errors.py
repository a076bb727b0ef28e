"""
Error types raised by the service layer.

Domain failures are raised as one of the four ``DomainError``
subclasses.  Each carries a free-text ``msg``; callers are expected to
branch on the ``kind`` rather than on the message.  The exception
handler installed in ``main`` renders them as JSON responses.

``IdCounterCorrupted`` is deliberately not a ``DomainError``: a broken
id counter means the persistent state can no longer be trusted, so it
propagates as an unhandled error.
"""


class DomainError(Exception):
    """Base class for failures reported back to the caller."""

    kind = "DomainError"
    status_code = 400

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def to_dict(self) -> dict:
        return {"kind": self.kind, "detail": self.msg}


class NotFound(DomainError):
    kind = "NotFound"
    status_code = 404


class AlreadyDelivered(DomainError):
    kind = "AlreadyDelivered"
    status_code = 409


class InvalidPayload(DomainError):
    kind = "InvalidPayload"
    status_code = 422


class Unauthorized(DomainError):
    """Caller identity missing or not matching the record owner.

    ``authenticated`` distinguishes a missing/invalid token (401) from
    an ownership mismatch (403).
    """

    kind = "Unauthorized"

    def __init__(self, msg: str, authenticated: bool = True) -> None:
        super().__init__(msg)
        self.authenticated = authenticated
        self.status_code = 403 if authenticated else 401


class IdCounterCorrupted(RuntimeError):
    """The persistent id counter cell is missing or unreadable."""
