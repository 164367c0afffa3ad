"""
Signing module.

Adapts raw keys and wallet objects to a single sign-digest capability.
"""

from linkdrop.signing.signer import AccountSigner, LinkSigner, as_signer

__all__ = [
    "AccountSigner",
    "LinkSigner",
    "as_signer",
]
