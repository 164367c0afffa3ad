"""
Test suite for packed message encoding.

The packed layout must match Solidity's abi.encodePacked byte for byte,
so results are cross-checked against eth_abi's implementation.
"""

import pytest
from eth_abi.packed import encode_packed as reference_encode_packed
from eth_account import Account
from eth_utils import keccak

from linkdrop.crypto.encoding import (
    LINK_MESSAGE_TYPES,
    encode_packed,
    hash_link_message,
    hash_receiver_message,
    pack_address,
    pack_uint,
    recover_signer,
    solidity_keccak,
    to_signable,
    to_uint,
)
from linkdrop.errors import InvalidEncoding

from tests.conftest import MODULE_ADDRESS, OTHER_ADDRESS, RECEIVER_ADDRESS, SIGNER_ADDRESS, SIGNER_KEY, TOKEN_ADDRESS


# ============================================================================
# Field packing
# ============================================================================

class TestFieldPacking:
    """Tests for per-field packed widths."""

    def test_address_is_20_bytes(self):
        packed = pack_address(RECEIVER_ADDRESS)
        assert packed == bytes.fromhex("44" * 20)

    def test_address_accepts_checksummed_and_lowercase(self):
        assert pack_address(SIGNER_ADDRESS) == pack_address(SIGNER_ADDRESS.lower())

    def test_address_rejects_bad_checksum(self):
        # Flip the case of one letter to break the EIP-55 checksum
        broken = SIGNER_ADDRESS[:3] + SIGNER_ADDRESS[3].swapcase() + SIGNER_ADDRESS[4:]
        assert broken != SIGNER_ADDRESS

        with pytest.raises(InvalidEncoding):
            pack_address(broken)

    def test_address_accepts_uppercase_without_checksum(self):
        assert pack_address("0x" + SIGNER_ADDRESS[2:].upper()) == pack_address(SIGNER_ADDRESS)

    @pytest.mark.parametrize("value", [
        "0x2c7536e3605D9C16a7a3D7b1898e529396a65c23",
        "0x2C7536E3605D9C16A7A3D7B1898E529396A65c23",
    ])
    def test_address_rejects_mixed_case_without_valid_checksum(self, value):
        with pytest.raises(InvalidEncoding, match="checksum"):
            pack_address(value)

    @pytest.mark.parametrize("value", ["0x1234", "not an address", b"\x00" * 19, 12])
    def test_address_rejects_malformed(self, value):
        with pytest.raises(InvalidEncoding):
            pack_address(value)

    def test_uint_is_32_bytes_big_endian(self):
        assert pack_uint(1) == b"\x00" * 31 + b"\x01"
        assert pack_uint(2 ** 256 - 1) == b"\xff" * 32

    def test_uint_accepts_decimal_and_hex_strings(self):
        assert to_uint("1000") == 1000
        assert to_uint("0x3e8") == 1000
        assert to_uint(" 42 ") == 42

    @pytest.mark.parametrize("value", ["1_000", "+5", "-0", "\u0663", "\uff11\uff12", "0x", "0x1_0", "1e3", ""])
    def test_uint_rejects_loose_string_forms(self, value):
        with pytest.raises(InvalidEncoding):
            to_uint(value)

    @pytest.mark.parametrize("value", [-1, 2 ** 256, "abc", True, 1.5, None])
    def test_uint_rejects_invalid(self, value):
        with pytest.raises(InvalidEncoding):
            pack_uint(value)


# ============================================================================
# encode_packed
# ============================================================================

class TestEncodePacked:
    """Tests for multi-field packing."""

    def test_no_padding_between_fields(self):
        packed = encode_packed(["address", "uint256", "address"], [MODULE_ADDRESS, 7, TOKEN_ADDRESS])
        assert len(packed) == 20 + 32 + 20

    def test_matches_eth_abi_for_link_message(self):
        values = [MODULE_ADDRESS, 1000, TOKEN_ADDRESS, 5 * 10 ** 18, 9999999999, OTHER_ADDRESS]
        expected = reference_encode_packed(
            list(LINK_MESSAGE_TYPES),
            [MODULE_ADDRESS, 1000, TOKEN_ADDRESS, 5 * 10 ** 18, 9999999999, OTHER_ADDRESS.lower()],
        )
        assert encode_packed(LINK_MESSAGE_TYPES, values) == expected

    def test_uint_alias(self):
        assert encode_packed(["uint"], [5]) == encode_packed(["uint256"], [5])

    def test_count_mismatch(self):
        with pytest.raises(InvalidEncoding, match="mismatch"):
            encode_packed(["address", "uint256"], [MODULE_ADDRESS])

    def test_unsupported_type(self):
        with pytest.raises(InvalidEncoding, match="Unsupported"):
            encode_packed(["string"], ["hello"])


# ============================================================================
# Message hashes
# ============================================================================

class TestMessageHashes:
    """Tests for issuer and receiver message hashes."""

    def test_solidity_keccak(self):
        assert solidity_keccak(["uint256"], [1]) == keccak(b"\x00" * 31 + b"\x01")

    def test_receiver_hash_is_keccak_of_address_bytes(self):
        assert hash_receiver_message(RECEIVER_ADDRESS) == keccak(bytes.fromhex("44" * 20))

    def test_link_hash_field_order(self):
        link_id = OTHER_ADDRESS
        expected = keccak(
            bytes.fromhex("11" * 20)
            + (1000).to_bytes(32, "big")
            + bytes.fromhex("22" * 20)
            + (25).to_bytes(32, "big")
            + (9999999999).to_bytes(32, "big")
            + bytes.fromhex(link_id[2:])
        )
        values = (MODULE_ADDRESS, 1000, TOKEN_ADDRESS, 25, 9999999999)
        assert hash_link_message(values, link_id) == expected

    def test_link_hash_is_32_bytes(self):
        digest = hash_link_message((MODULE_ADDRESS, 0, TOKEN_ADDRESS, 0, 0), OTHER_ADDRESS)
        assert len(digest) == 32


# ============================================================================
# Signing helpers
# ============================================================================

class TestSigningHelpers:
    """Tests for personal-message wrapping and recovery."""

    def test_to_signable_rejects_wrong_length(self):
        with pytest.raises(InvalidEncoding):
            to_signable(b"\x00" * 31)

    def test_recover_signer(self):
        digest = keccak(b"linkdrop")
        signed = Account.sign_message(to_signable(digest), private_key=SIGNER_KEY)

        assert recover_signer(digest, signed.signature) == SIGNER_ADDRESS
        assert recover_signer(digest, "0x" + bytes(signed.signature).hex()) == SIGNER_ADDRESS

    def test_personal_prefix_over_raw_digest(self):
        """The prefix commits to 32 raw bytes, not the 66-char hex string."""
        digest = keccak(b"linkdrop")
        signable = to_signable(digest)

        assert signable.version == b"E"
        assert signable.header == b"thereum Signed Message:\n32"
        assert signable.body == digest

    def test_recover_rejects_garbage_signature(self):
        with pytest.raises(InvalidEncoding):
            recover_signer(keccak(b"x"), "0x1234")
