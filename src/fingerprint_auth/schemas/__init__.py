"""
Pydantic schemas for stored records and API request bodies.
"""

from .session import Account, LinkNonce, Nonce, SignInRequest

__all__ = ["Account", "LinkNonce", "Nonce", "SignInRequest"]
