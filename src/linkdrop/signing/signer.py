"""
Link Signer - signs link message digests.

The signer is modelled as a capability with a single "sign digest"
operation so callers can keep the linkdrop signer's key off the link
creation path (hardware wallets, remote key management).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

import structlog

from eth_account import Account
from eth_keys.exceptions import ValidationError

from linkdrop.config import LinkdropConfig, get_config
from linkdrop.crypto.encoding import to_signable
from linkdrop.errors import InvalidSigner, LinkdropError, SigningFailure

logger = structlog.get_logger(__name__)

KeyMaterial = Union[str, bytes]


class LinkSigner(ABC):
    """Anything that can produce an EIP-191 personal signature over a 32-byte digest."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Checksummed address of the signing identity."""
        pass

    @abstractmethod
    def sign_digest(self, digest: bytes) -> str:
        """
        Sign a raw 32-byte digest.

        Args:
            digest: keccak256 digest to sign

        Returns:
            65-byte r||s||v signature as 0x-prefixed hex

        Raises:
            SigningFailure: If the underlying signer errors
        """
        pass


class AccountSigner(LinkSigner):
    """
    Signs with an eth_account account.

    Wraps a LocalAccount, or any object exposing ``address`` and
    ``sign_message(SignableMessage)``.
    """

    def __init__(self, account: Any):
        """
        Initialize the signer.

        Args:
            account: Account object used to sign
        """
        if not callable(getattr(account, "sign_message", None)) or not hasattr(account, "address"):
            raise InvalidSigner(
                f"Signer must expose address and sign_message, got {type(account).__name__}"
            )
        self._account = account

    @classmethod
    def from_key(cls, private_key: KeyMaterial) -> "AccountSigner":
        """
        Build a signer from raw key material.

        Args:
            private_key: Hex-encoded private key or its 32 raw bytes
        """
        try:
            account = Account.from_key(private_key)
        except (ValueError, TypeError, ValidationError) as e:
            raise InvalidSigner(f"Cannot parse signing key: {e}") from e
        return cls(account)

    @classmethod
    def from_config(cls, config: Optional[LinkdropConfig] = None) -> "AccountSigner":
        """Load the linkdrop signer key from configuration."""
        config = config or get_config()
        if not config.signing_key:
            raise InvalidSigner("No signing key configured")

        signer = cls.from_key(config.signing_key)
        logger.info("signing_key_loaded_from_config", address=signer.address)
        return signer

    @property
    def address(self) -> str:
        return self._account.address

    def sign_digest(self, digest: bytes) -> str:
        signable = to_signable(digest)
        try:
            signed = self._account.sign_message(signable)
        except LinkdropError:
            raise
        except Exception as e:
            # External signers fail in their own ways; surface them uniformly
            logger.error("digest_signing_failed", signer=self.address, error=str(e))
            raise SigningFailure(f"Signer {self.address} failed to sign: {e}") from e

        return "0x" + bytes(signed.signature).hex()


def as_signer(signing_key_or_wallet: Any) -> LinkSigner:
    """
    Normalize a signing key or wallet into a LinkSigner.

    Args:
        signing_key_or_wallet: Hex private key, raw key bytes, an eth_account
            account, or an existing LinkSigner

    Returns:
        LinkSigner for the given input
    """
    if isinstance(signing_key_or_wallet, LinkSigner):
        return signing_key_or_wallet
    if isinstance(signing_key_or_wallet, bytearray):
        signing_key_or_wallet = bytes(signing_key_or_wallet)
    if isinstance(signing_key_or_wallet, (str, bytes)):
        return AccountSigner.from_key(signing_key_or_wallet)
    return AccountSigner(signing_key_or_wallet)


def generate_test_key() -> AccountSigner:
    """
    Generate a new random signer for testing.

    WARNING: Do not use in production. The key is not persisted.

    Returns:
        AccountSigner with a new random key
    """
    signer = AccountSigner(Account.create())

    logger.warning("test_key_generated", address=signer.address)

    return signer
