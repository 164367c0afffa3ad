"""
Linkdrop SDK

Claim links for ETH, ERC20 and ERC721 transfers. A link carries an
ephemeral key and the linkdrop signer's authorization; whoever holds the
link binds it to a receiver when claiming.
"""

__version__ = "0.1.0"

from linkdrop.core.issuer import create_link, create_link_erc721
from linkdrop.core.link import Link, LinkKeyPair, NFTTransferParameters, TransferParameters, ZERO_ADDRESS
from linkdrop.core.receiver import sign_receiver_address
from linkdrop.crypto.create2 import derive_address
from linkdrop.sdk import LinkdropSDK

__all__ = [
    "Link",
    "LinkKeyPair",
    "LinkdropSDK",
    "NFTTransferParameters",
    "TransferParameters",
    "ZERO_ADDRESS",
    "create_link",
    "create_link_erc721",
    "derive_address",
    "sign_receiver_address",
]
