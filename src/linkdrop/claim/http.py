"""
HTTP adapter for the claim service.

Submits claims to the Linkdrop claim API over HTTPS.
"""

from typing import Any, Optional

import httpx
import structlog

from linkdrop.claim.interface import ClaimRequest, ClaimResult, ClaimService
from linkdrop.config import LinkdropConfig, get_config
from linkdrop.errors import ClaimServiceError

logger = structlog.get_logger(__name__)


class HttpClaimService(ClaimService):
    """
    Claim API adapter.

    Implements the ClaimService using the claim host's JSON API.
    """

    def __init__(
        self,
        config: Optional[LinkdropConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the claim adapter.

        Args:
            config: SDK configuration. Uses global config if not provided.
            client: Preconfigured HTTP client (tests inject a mock transport here)
        """
        self.config = config or get_config()
        self.base_url = self.config.api_host
        self._client: Optional[httpx.AsyncClient] = client
        self._owns_client = client is None

    async def connect(self) -> None:
        """Create the HTTP client."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=self.config.request_timeout_seconds,
        )
        self._owns_client = True
        logger.info("claim_service_connected", base_url=self.base_url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client and self._owns_client:
            await self._client.aclose()
            logger.info("claim_service_disconnected")
        self._client = None

    async def _post(self, path: str, payload: dict) -> Any:
        """POST a JSON payload and return the decoded response."""
        if not self._client:
            await self.connect()

        try:
            response = await self._client.post(path, json=payload)
        except httpx.RequestError as e:
            logger.error("claim_request_error", path=path, error=str(e))
            raise ClaimServiceError(f"Claim request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code != 200:
            logger.error(
                "claim_request_failed",
                path=path,
                status=response.status_code,
                error=response.text,
            )
            raise ClaimServiceError(
                f"Claim API error: {response.text}",
                status_code=response.status_code,
            )

        return data

    async def submit_claim(self, request: ClaimRequest) -> ClaimResult:
        """Submit a claim to the ETH/ERC20 or ERC721 endpoint."""
        path = self.config.claim_erc721_path if request.is_erc721 else self.config.claim_path
        data = await self._post(path, request.to_payload())

        result = ClaimResult.from_response(data)
        if not result.success:
            logger.warning("claim_rejected", link_id=request.link_id, errors=result.errors)
            raise ClaimServiceError(
                f"Claim rejected: {'; '.join(result.errors) or 'unknown error'}",
                status_code=200,
            )

        logger.info("claim_submitted", link_id=request.link_id, tx_hash=result.tx_hash)
        return result
