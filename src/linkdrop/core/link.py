"""
Link data model.

A link is an ephemeral key pair plus the linkdrop signer's authorization
of a transfer bound to that key pair's address.
"""

import time
from dataclasses import dataclass
from typing import Optional, Tuple

from linkdrop.crypto.encoding import AddressLike, UintLike, to_uint

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class LinkKeyPair:
    """
    Ephemeral key pair generated for a single link.

    Attributes:
        link_key: 0x-prefixed hex private key, handed out with the link
        link_id: Checksummed address of link_key
    """
    link_key: str
    link_id: str

    def __repr__(self) -> str:
        return f"LinkKeyPair(link_id={self.link_id!r})"


@dataclass(frozen=True)
class TransferParameters:
    """
    ETH and/or ERC20 transfer authorized by a link.

    A token_address of ZERO_ADDRESS means the link carries ETH only.
    """
    linkdrop_module_address: AddressLike
    wei_amount: UintLike
    token_address: AddressLike
    token_amount: UintLike
    expiration_time: UintLike

    def message_values(self) -> Tuple:
        """Fields in the order they are signed."""
        return (
            self.linkdrop_module_address,
            self.wei_amount,
            self.token_address,
            self.token_amount,
            self.expiration_time,
        )

    def is_expired(self, now: Optional[int] = None) -> bool:
        """Check whether the expiration timestamp has passed."""
        now = int(time.time()) if now is None else now
        return now > to_uint(self.expiration_time)


@dataclass(frozen=True)
class NFTTransferParameters:
    """ETH and/or a single ERC721 token transfer authorized by a link."""
    linkdrop_module_address: AddressLike
    wei_amount: UintLike
    nft_address: AddressLike
    token_id: UintLike
    expiration_time: UintLike

    def message_values(self) -> Tuple:
        """Fields in the order they are signed."""
        return (
            self.linkdrop_module_address,
            self.wei_amount,
            self.nft_address,
            self.token_id,
            self.expiration_time,
        )

    def is_expired(self, now: Optional[int] = None) -> bool:
        """Check whether the expiration timestamp has passed."""
        now = int(time.time()) if now is None else now
        return now > to_uint(self.expiration_time)


@dataclass(frozen=True)
class Link:
    """
    Result of link creation.

    Attributes:
        link_key: Link's ephemeral private key
        link_id: Address corresponding to link_key
        linkdrop_signer_signature: Linkdrop signer's signature over the
            transfer parameters and link_id
    """
    link_key: str
    link_id: str
    linkdrop_signer_signature: str

    def __repr__(self) -> str:
        return f"Link(link_id={self.link_id!r}, linkdrop_signer_signature={self.linkdrop_signer_signature!r})"
