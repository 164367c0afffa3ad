"""
Abstract interface for the claim service.

The claim service verifies both signatures on-chain and settles the
transfer. This module defines the payload the SDK hands it and the
contract every claim service adapter must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from linkdrop.core.link import NFTTransferParameters, TransferParameters
from linkdrop.crypto.encoding import format_address, format_uint


@dataclass
class ClaimRequest:
    """Everything the claim service needs to redeem a link."""
    params: Union[TransferParameters, NFTTransferParameters]
    link_id: str
    linkdrop_signer_signature: str
    receiver_address: str
    receiver_signature: str

    @property
    def is_erc721(self) -> bool:
        return isinstance(self.params, NFTTransferParameters)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON body the claim API expects."""
        payload: Dict[str, Any] = {
            "weiAmount": format_uint(self.params.wei_amount),
            "expirationTime": format_uint(self.params.expiration_time),
            "linkId": format_address(self.link_id),
            "linkdropModuleAddress": format_address(self.params.linkdrop_module_address),
            "linkdropSignerSignature": self.linkdrop_signer_signature,
            "receiverAddress": format_address(self.receiver_address),
            "receiverSignature": self.receiver_signature,
        }
        if self.is_erc721:
            payload["nftAddress"] = format_address(self.params.nft_address)
            payload["tokenId"] = format_uint(self.params.token_id)
        else:
            payload["tokenAddress"] = format_address(self.params.token_address)
            payload["tokenAmount"] = format_uint(self.params.token_amount)
        return payload


@dataclass
class ClaimResult:
    """Claim service response."""
    success: bool
    tx_hash: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "ClaimResult":
        errors = data.get("errors") or []
        if isinstance(errors, str):
            errors = [errors]
        return cls(
            success=bool(data.get("success", False)),
            tx_hash=data.get("txHash"),
            errors=list(errors),
        )


class ClaimService(ABC):
    """
    Abstract interface for claim service access.

    Adapters only transport a ClaimRequest; signature verification and
    settlement happen on the service side.
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Prepare the connection to the service.

        Raises:
            ClaimServiceError: If the service cannot be reached
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the connection."""
        pass

    @abstractmethod
    async def submit_claim(self, request: ClaimRequest) -> ClaimResult:
        """
        Submit a claim.

        Args:
            request: Claim to submit

        Returns:
            Service result with the settlement transaction hash

        Raises:
            ClaimServiceError: On transport failure or rejection
        """
        pass
