"""
Core link logic: issuing links and binding them to receivers.
"""

from linkdrop.core.issuer import create_link, create_link_erc721, generate_link_key, sign_link
from linkdrop.core.link import Link, LinkKeyPair, NFTTransferParameters, TransferParameters
from linkdrop.core.receiver import sign_receiver_address

__all__ = [
    "Link",
    "LinkKeyPair",
    "NFTTransferParameters",
    "TransferParameters",
    "create_link",
    "create_link_erc721",
    "generate_link_key",
    "sign_link",
    "sign_receiver_address",
]
