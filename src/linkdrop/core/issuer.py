"""
Link Issuer - creates signed claim links.

Each link gets a fresh ephemeral key pair. The linkdrop signer then
authorizes the transfer parameters bound to that key pair's address, so a
signature can never be replayed for a different link.
"""

from typing import Any, Union

import structlog

from eth_account import Account

from linkdrop.core.link import Link, LinkKeyPair, NFTTransferParameters, TransferParameters
from linkdrop.crypto.encoding import AddressLike, UintLike, hash_link_message
from linkdrop.errors import LinkdropError, SigningFailure
from linkdrop.signing.signer import as_signer

logger = structlog.get_logger(__name__)


def generate_link_key() -> LinkKeyPair:
    """
    Generate a new ephemeral link key pair.

    Keys come from the OS CSPRNG via eth_account.
    """
    account = Account.create()
    return LinkKeyPair(
        link_key="0x" + bytes(account.key).hex(),
        link_id=account.address,
    )


def sign_link(
    signing_key_or_wallet: Any,
    params: Union[TransferParameters, NFTTransferParameters],
    link_id: AddressLike,
) -> str:
    """
    Sign the transfer parameters bound to a link id.

    Args:
        signing_key_or_wallet: Linkdrop signer key, account or LinkSigner
        params: Transfer being authorized
        link_id: Address of the link's ephemeral key

    Returns:
        Linkdrop signer signature as 0x-prefixed hex

    Raises:
        SigningFailure: If the signer raises anything other than a LinkdropError
    """
    signer = as_signer(signing_key_or_wallet)
    message_hash = hash_link_message(params.message_values(), link_id)

    try:
        return signer.sign_digest(message_hash)
    except LinkdropError:
        raise
    except Exception as e:
        logger.error("link_signing_failed", signer=type(signer).__name__, error=str(e))
        raise SigningFailure(f"Linkdrop signer failed: {e}") from e


def sign_link_erc721(
    signing_key_or_wallet: Any,
    params: NFTTransferParameters,
    link_id: AddressLike,
) -> str:
    """Sign ERC721 transfer parameters bound to a link id."""
    return sign_link(signing_key_or_wallet, params, link_id)


def _issue(signing_key_or_wallet: Any, params: Union[TransferParameters, NFTTransferParameters]) -> Link:
    # Resolve the signer before spending entropy on a key pair
    signer = as_signer(signing_key_or_wallet)
    key_pair = generate_link_key()

    signature = sign_link(signer, params, key_pair.link_id)

    logger.info(
        "link_created",
        link_id=key_pair.link_id,
        signer=signer.address,
        kind="erc721" if isinstance(params, NFTTransferParameters) else "erc20",
    )

    return Link(
        link_key=key_pair.link_key,
        link_id=key_pair.link_id,
        linkdrop_signer_signature=signature,
    )


def create_link(
    signing_key_or_wallet: Any,
    linkdrop_module_address: AddressLike,
    wei_amount: UintLike,
    token_address: AddressLike,
    token_amount: UintLike,
    expiration_time: UintLike,
) -> Link:
    """
    Create a link for ETH and/or ERC20 tokens.

    Args:
        signing_key_or_wallet: Linkdrop signer key, account or LinkSigner
        linkdrop_module_address: Address of the linkdrop module
        wei_amount: Amount of wei
        token_address: ERC20 token address, zero address for ETH only
        token_amount: Amount of tokens
        expiration_time: Link expiration Unix timestamp

    Returns:
        Link with the ephemeral key, its id and the signer's signature

    Raises:
        InvalidSigner: If the signing key cannot be parsed
        SigningFailure: If the signer errors
        InvalidEncoding: If an address or amount is malformed
    """
    params = TransferParameters(
        linkdrop_module_address=linkdrop_module_address,
        wei_amount=wei_amount,
        token_address=token_address,
        token_amount=token_amount,
        expiration_time=expiration_time,
    )
    return _issue(signing_key_or_wallet, params)


def create_link_erc721(
    signing_key_or_wallet: Any,
    linkdrop_module_address: AddressLike,
    wei_amount: UintLike,
    nft_address: AddressLike,
    token_id: UintLike,
    expiration_time: UintLike,
) -> Link:
    """
    Create a link for ETH and/or a single ERC721 token.

    Args:
        signing_key_or_wallet: Linkdrop signer key, account or LinkSigner
        linkdrop_module_address: Address of the linkdrop module
        wei_amount: Amount of wei
        nft_address: ERC721 contract address
        token_id: Token id
        expiration_time: Link expiration Unix timestamp

    Returns:
        Link with the ephemeral key, its id and the signer's signature
    """
    params = NFTTransferParameters(
        linkdrop_module_address=linkdrop_module_address,
        wei_amount=wei_amount,
        nft_address=nft_address,
        token_id=token_id,
        expiration_time=expiration_time,
    )
    return _issue(signing_key_or_wallet, params)
