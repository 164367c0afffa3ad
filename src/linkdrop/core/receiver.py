"""
Receiver Binder - binds a link to the address that redeems it.

The link key signs the receiver address, proving the redeemer holds the
link and fixing where the funds go.
"""

import structlog

from eth_account import Account
from eth_keys.exceptions import ValidationError

from linkdrop.crypto.encoding import AddressLike, hash_receiver_message
from linkdrop.errors import InvalidKey
from linkdrop.signing.signer import AccountSigner

logger = structlog.get_logger(__name__)


def sign_receiver_address(link_key: str, receiver_address: AddressLike) -> str:
    """
    Sign the receiver address with the link's ephemeral key.

    Args:
        link_key: Ephemeral key attached to the link
        receiver_address: Address that receives the transfer

    Returns:
        Receiver signature as 0x-prefixed hex, recoverable to the link id

    Raises:
        InvalidKey: If link_key is not a valid private key
        InvalidEncoding: If receiver_address is malformed
    """
    try:
        account = Account.from_key(link_key)
    except (ValueError, TypeError, ValidationError) as e:
        raise InvalidKey(f"Cannot parse link key: {e}") from e

    message_hash = hash_receiver_message(receiver_address)
    signature = AccountSigner(account).sign_digest(message_hash)

    logger.debug("receiver_address_signed", link_id=account.address)
    return signature
