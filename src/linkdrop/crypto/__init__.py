"""
Crypto module.

Handles packed message encoding, hashing and CREATE2 address derivation.
"""

from linkdrop.crypto.create2 import build_create2_address, derive_address
from linkdrop.crypto.encoding import (
    encode_packed,
    hash_link_message,
    hash_receiver_message,
    recover_signer,
    solidity_keccak,
    to_signable,
)

__all__ = [
    "build_create2_address",
    "derive_address",
    "encode_packed",
    "hash_link_message",
    "hash_receiver_message",
    "recover_signer",
    "solidity_keccak",
    "to_signable",
]
