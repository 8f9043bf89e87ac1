"""Exceptions raised by the account and link stores."""


class NotFoundError(LookupError):
    """Raised when a store lookup targets a key that is not present."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key


class AccountNotFoundError(NotFoundError):
    """No account is registered for the fingerprint."""

    def __str__(self) -> str:
        return "User doesn't exist"


class LinkNotFoundError(NotFoundError):
    """No pending link nonce is registered under the link id."""

    def __str__(self) -> str:
        return "Nonce to link doesn't exist"
