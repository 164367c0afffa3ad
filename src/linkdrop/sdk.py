"""
Linkdrop SDK facade.

Binds link creation, claim URLs and claim submission to one configuration.
"""

from typing import Any, Optional, Tuple, Union

import structlog
from eth_account import Account
from pydantic import ValidationError

from linkdrop.claim.http import HttpClaimService
from linkdrop.claim.interface import ClaimRequest, ClaimResult, ClaimService
from linkdrop.claim.url import build_claim_url
from linkdrop.config import ChainType, LinkdropConfig, get_config
from linkdrop.core.issuer import create_link, create_link_erc721
from linkdrop.core.link import Link, NFTTransferParameters, TransferParameters
from linkdrop.core.receiver import sign_receiver_address
from linkdrop.crypto.create2 import derive_address
from linkdrop.crypto.encoding import AddressLike, UintLike
from linkdrop.errors import UnsupportedConfiguration

logger = structlog.get_logger(__name__)


class LinkdropSDK:
    """
    Entry point for issuing and claiming links.

    Example:
        sdk = LinkdropSDK(chain="mainnet")
        link, url = sdk.generate_link(
            signing_key_or_wallet=signer_key,
            linkdrop_module_address=module,
            wei_amount=10 ** 16,
            token_address=ZERO_ADDRESS,
            token_amount=0,
            expiration_time=1900000000,
        )
    """

    def __init__(
        self,
        config: Optional[LinkdropConfig] = None,
        claim_service: Optional[ClaimService] = None,
        **overrides: Any,
    ):
        """
        Initialize the SDK.

        Args:
            config: SDK configuration. Uses global config if not provided.
            claim_service: Claim service adapter, HttpClaimService by default
            **overrides: Config fields to override, e.g. chain="mainnet"

        Raises:
            UnsupportedConfiguration: If the chain is not supported or a
                setting, including one read from the environment, is invalid
        """
        if "chain" in overrides:
            try:
                ChainType(overrides["chain"])
            except ValueError as e:
                raise UnsupportedConfiguration(f"Unsupported chain: {overrides['chain']}") from e

        try:
            base = config or get_config()
            if overrides:
                base = LinkdropConfig(**{**base.model_dump(), **overrides})
        except ValidationError as e:
            raise UnsupportedConfiguration(f"Invalid SDK configuration: {e}") from e

        self.config = base
        self.claim_service = claim_service or HttpClaimService(self.config)

        logger.debug("sdk_initialized", chain=self.config.chain.value, claim_host=self.config.claim_host)

    @property
    def chain(self) -> ChainType:
        return self.config.chain

    def create_link(
        self,
        signing_key_or_wallet: Any,
        linkdrop_module_address: AddressLike,
        wei_amount: UintLike,
        token_address: AddressLike,
        token_amount: UintLike,
        expiration_time: UintLike,
    ) -> Link:
        """Create a link for ETH and/or ERC20 tokens."""
        return create_link(
            signing_key_or_wallet,
            linkdrop_module_address,
            wei_amount,
            token_address,
            token_amount,
            expiration_time,
        )

    def create_link_erc721(
        self,
        signing_key_or_wallet: Any,
        linkdrop_module_address: AddressLike,
        wei_amount: UintLike,
        nft_address: AddressLike,
        token_id: UintLike,
        expiration_time: UintLike,
    ) -> Link:
        """Create a link for ETH and/or an ERC721 token."""
        return create_link_erc721(
            signing_key_or_wallet,
            linkdrop_module_address,
            wei_amount,
            nft_address,
            token_id,
            expiration_time,
        )

    def generate_link(
        self,
        signing_key_or_wallet: Any,
        linkdrop_module_address: AddressLike,
        wei_amount: UintLike,
        token_address: AddressLike,
        token_amount: UintLike,
        expiration_time: UintLike,
    ) -> Tuple[Link, str]:
        """
        Create an ETH/ERC20 link and its claim URL.

        Returns:
            Tuple of (link, claim URL on the configured claim host)
        """
        link = self.create_link(
            signing_key_or_wallet,
            linkdrop_module_address,
            wei_amount,
            token_address,
            token_amount,
            expiration_time,
        )
        params = TransferParameters(
            linkdrop_module_address=linkdrop_module_address,
            wei_amount=wei_amount,
            token_address=token_address,
            token_amount=token_amount,
            expiration_time=expiration_time,
        )
        return link, build_claim_url(self.config.claim_host, params, link)

    def generate_link_erc721(
        self,
        signing_key_or_wallet: Any,
        linkdrop_module_address: AddressLike,
        wei_amount: UintLike,
        nft_address: AddressLike,
        token_id: UintLike,
        expiration_time: UintLike,
    ) -> Tuple[Link, str]:
        """Create an ERC721 link and its claim URL."""
        link = self.create_link_erc721(
            signing_key_or_wallet,
            linkdrop_module_address,
            wei_amount,
            nft_address,
            token_id,
            expiration_time,
        )
        params = NFTTransferParameters(
            linkdrop_module_address=linkdrop_module_address,
            wei_amount=wei_amount,
            nft_address=nft_address,
            token_id=token_id,
            expiration_time=expiration_time,
        )
        return link, build_claim_url(self.config.claim_host, params, link)

    async def _claim(
        self,
        params: Union[TransferParameters, NFTTransferParameters],
        link_key: str,
        linkdrop_signer_signature: str,
        receiver_address: str,
    ) -> ClaimResult:
        receiver_signature = sign_receiver_address(link_key, receiver_address)

        # link_id is recomputed from the key rather than trusted from the URL
        link_id = Account.from_key(link_key).address

        request = ClaimRequest(
            params=params,
            link_id=link_id,
            linkdrop_signer_signature=linkdrop_signer_signature,
            receiver_address=receiver_address,
            receiver_signature=receiver_signature,
        )
        return await self.claim_service.submit_claim(request)

    async def claim(
        self,
        wei_amount: UintLike,
        token_address: AddressLike,
        token_amount: UintLike,
        expiration_time: UintLike,
        link_key: str,
        linkdrop_module_address: AddressLike,
        linkdrop_signer_signature: str,
        receiver_address: str,
    ) -> ClaimResult:
        """
        Claim an ETH/ERC20 link for a receiver.

        Signs the receiver address with the link key and submits both
        signatures to the claim service.
        """
        params = TransferParameters(
            linkdrop_module_address=linkdrop_module_address,
            wei_amount=wei_amount,
            token_address=token_address,
            token_amount=token_amount,
            expiration_time=expiration_time,
        )
        return await self._claim(params, link_key, linkdrop_signer_signature, receiver_address)

    async def claim_erc721(
        self,
        wei_amount: UintLike,
        nft_address: AddressLike,
        token_id: UintLike,
        expiration_time: UintLike,
        link_key: str,
        linkdrop_module_address: AddressLike,
        linkdrop_signer_signature: str,
        receiver_address: str,
    ) -> ClaimResult:
        """Claim an ERC721 link for a receiver."""
        params = NFTTransferParameters(
            linkdrop_module_address=linkdrop_module_address,
            wei_amount=wei_amount,
            nft_address=nft_address,
            token_id=token_id,
            expiration_time=expiration_time,
        )
        return await self._claim(params, link_key, linkdrop_signer_signature, receiver_address)

    def derive_address(
        self,
        creator_address: AddressLike,
        salt: Union[str, bytes],
        init_bytecode: Union[str, bytes],
    ) -> str:
        """Compute a CREATE2 deployment address."""
        return derive_address(creator_address, salt, init_bytecode)
