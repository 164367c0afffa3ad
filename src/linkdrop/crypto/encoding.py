"""
Tight-packed message encoding and hashing.

Linkdrop contracts verify signatures over ``keccak256(abi.encodePacked(...))``
of the link parameters, so the byte layout here has to match Solidity's
packed mode exactly: no padding between fields, addresses as 20 bytes and
unsigned integers as 32 big-endian bytes.
"""

import re
from typing import Any, Sequence, Union

from eth_account import Account
from eth_account.messages import SignableMessage, encode_defunct
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import (
    is_checksum_address,
    is_checksum_formatted_address,
    is_hex_address,
    keccak,
    to_canonical_address,
    to_checksum_address,
)

from linkdrop.errors import InvalidEncoding

AddressLike = Union[str, bytes]
UintLike = Union[int, str]

# Packed width in bytes per Solidity type.
PACKED_WIDTHS = {
    "address": 20,
    "uint": 32,
    "uint256": 32,
    "bytes32": 32,
}

# Field order of the issuer message: module, wei, token/nft, amount/tokenId,
# expiration, linkId.
LINK_MESSAGE_TYPES = ("address", "uint256", "address", "uint256", "uint256", "address")

RECEIVER_MESSAGE_TYPES = ("address",)

UINT256_MAX = 2 ** 256 - 1

# ASCII digits only: no sign, underscores or other Unicode digits.
_DEC_UINT = re.compile(r"\A[0-9]+\Z")
_HEX_UINT = re.compile(r"\A0[xX][0-9a-fA-F]+\Z")


def hex_to_bytes(value: Union[str, bytes], field: str = "value") -> bytes:
    """
    Decode a hex string (with or without 0x prefix) to bytes.

    Bytes are passed through unchanged.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise InvalidEncoding(f"{field} must be hex string or bytes, got {type(value).__name__}")

    raw = value[2:] if value[:2] in ("0x", "0X") else value
    if len(raw) % 2:
        raise InvalidEncoding(f"{field} has odd-length hex: {value!r}")
    try:
        return bytes.fromhex(raw)
    except ValueError as e:
        raise InvalidEncoding(f"{field} is not valid hex: {value!r}") from e


def pack_address(value: AddressLike) -> bytes:
    """Encode an address as its 20 raw bytes."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) != PACKED_WIDTHS["address"]:
            raise InvalidEncoding(f"Address must be 20 bytes, got {len(value)}")
        return bytes(value)
    if not isinstance(value, str) or not is_hex_address(value):
        raise InvalidEncoding(f"Invalid address: {value!r}")
    # Mixed case means EIP-55; all-lower and all-upper carry no checksum
    if is_checksum_formatted_address(value) and not is_checksum_address(value):
        raise InvalidEncoding(f"Bad address checksum: {value!r}")
    return to_canonical_address(value)


def to_uint(value: UintLike) -> int:
    """
    Coerce an amount to an unsigned 256-bit integer.

    Accepts ints, decimal strings and 0x-prefixed hex strings.
    """
    if isinstance(value, bool):
        raise InvalidEncoding("Booleans are not valid uint values")

    if isinstance(value, str):
        text = value.strip()
        if _HEX_UINT.match(text):
            number = int(text, 16)
        elif _DEC_UINT.match(text):
            number = int(text, 10)
        else:
            raise InvalidEncoding(f"Invalid uint value: {value!r}")
    elif isinstance(value, int):
        number = value
    else:
        raise InvalidEncoding(f"Invalid uint value: {value!r}")

    if number < 0 or number > UINT256_MAX:
        raise InvalidEncoding(f"Value out of uint256 range: {value!r}")
    return number


def format_address(value: AddressLike) -> str:
    """Render an address (hex string or 20 raw bytes) as its EIP-55 checksummed form."""
    return to_checksum_address(pack_address(value))


def format_uint(value: UintLike) -> str:
    """Render an amount as a plain decimal string."""
    return str(to_uint(value))


def pack_uint(value: UintLike) -> bytes:
    """Encode an unsigned integer as 32 big-endian bytes."""
    return to_uint(value).to_bytes(PACKED_WIDTHS["uint256"], "big")


def pack_bytes32(value: Union[str, bytes]) -> bytes:
    """Encode a fixed 32-byte value."""
    data = hex_to_bytes(value, "bytes32")
    if len(data) != PACKED_WIDTHS["bytes32"]:
        raise InvalidEncoding(f"bytes32 value must be 32 bytes, got {len(data)}")
    return data


_PACKERS = {
    "address": pack_address,
    "uint": pack_uint,
    "uint256": pack_uint,
    "bytes32": pack_bytes32,
}


def encode_packed(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """
    Tightly pack values per their Solidity types.

    Args:
        types: Solidity type names, one per value
        values: Values to encode

    Returns:
        Concatenated packed encoding
    """
    if len(types) != len(values):
        raise InvalidEncoding(
            f"Type/value count mismatch: {len(types)} types, {len(values)} values"
        )

    parts = []
    for abi_type, value in zip(types, values):
        packer = _PACKERS.get(abi_type)
        if packer is None:
            raise InvalidEncoding(f"Unsupported packed type: {abi_type}")
        parts.append(packer(value))
    return b"".join(parts)


def solidity_keccak(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """keccak256 over the packed encoding of values."""
    return keccak(encode_packed(types, values))


def hash_link_message(message_values: Sequence[Any], link_id: AddressLike) -> bytes:
    """
    Hash the issuer message for a link.

    Args:
        message_values: The five transfer fields in signing order
            (module, wei amount, token or NFT address, amount or token id, expiration)
        link_id: Address of the link's ephemeral key

    Returns:
        32-byte keccak256 digest
    """
    return solidity_keccak(LINK_MESSAGE_TYPES, [*message_values, link_id])


def hash_receiver_message(receiver_address: AddressLike) -> bytes:
    """Hash the receiver-binding message: the receiver address alone."""
    return solidity_keccak(RECEIVER_MESSAGE_TYPES, [receiver_address])


def to_signable(digest: bytes) -> SignableMessage:
    """
    Wrap a raw digest for EIP-191 personal signing.

    The signer sees the 32 digest bytes, not their hex text, so the prefix
    is "\\x19Ethereum Signed Message:\\n32".
    """
    if len(digest) != 32:
        raise InvalidEncoding(f"Digest must be 32 bytes, got {len(digest)}")
    return encode_defunct(primitive=digest)


def recover_signer(digest: bytes, signature: Union[str, bytes]) -> str:
    """Recover the checksummed address that produced a personal signature over digest."""
    signature_bytes = hex_to_bytes(signature, "signature")
    if len(signature_bytes) != 65:
        raise InvalidEncoding(f"Signature must be 65 bytes, got {len(signature_bytes)}")
    try:
        recovered = Account.recover_message(to_signable(digest), signature=signature_bytes)
    except (BadSignature, ValidationError, ValueError, TypeError) as e:
        raise InvalidEncoding(f"Cannot recover signer: {e}") from e
    return to_checksum_address(recovered)
