"""
Deterministic contract address derivation (EIP-1014 / CREATE2).
"""

from typing import Union

from eth_utils import keccak

from linkdrop.crypto.encoding import AddressLike, hex_to_bytes, pack_address, pack_bytes32

CREATE2_PREFIX = b"\xff"


def derive_address(
    creator_address: AddressLike,
    salt: Union[str, bytes],
    init_bytecode: Union[str, bytes],
) -> str:
    """
    Compute the address a CREATE2 deployment will land at.

    address = last 20 bytes of keccak256(0xff ++ creator ++ salt ++ keccak256(init_code))

    Args:
        creator_address: Deploying contract (factory) address
        salt: 32-byte salt as bytes or hex
        init_bytecode: Contract creation code as bytes or hex, may be empty

    Returns:
        Lowercase 0x-prefixed address
    """
    creator = pack_address(creator_address)
    salt_bytes = pack_bytes32(salt)
    code_hash = keccak(hex_to_bytes(init_bytecode, "init_bytecode"))

    digest = keccak(CREATE2_PREFIX + creator + salt_bytes + code_hash)
    return "0x" + digest[-20:].hex()


# Name used by the JavaScript SDK
build_create2_address = derive_address
