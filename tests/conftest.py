"""
Pytest configuration and shared fixtures for the test suite.
"""

import json
from typing import Callable, List

import httpx
import pytest

from linkdrop.claim.http import HttpClaimService
from linkdrop.config import ChainType, LinkdropConfig, set_config
from linkdrop.core.link import ZERO_ADDRESS, NFTTransferParameters, TransferParameters


# ============================================================================
# Well-known keys
# ============================================================================

# Key/address pairs published in the eth-account and Hardhat docs
SIGNER_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
SIGNER_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

OTHER_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
OTHER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

MODULE_ADDRESS = "0x" + "11" * 20
TOKEN_ADDRESS = "0x" + "22" * 20
NFT_ADDRESS = "0x" + "33" * 20
RECEIVER_ADDRESS = "0x" + "44" * 20

EXPIRATION_TIME = 9999999999


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def reset_global_config():
    """Drop the cached global config so each test reads the environment afresh."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def test_config() -> LinkdropConfig:
    """Create a test configuration."""
    return LinkdropConfig(
        chain=ChainType.RINKEBY,
        api_host="https://api.test",
        claim_host="https://claim.test",
        signing_key=SIGNER_KEY,
        log_level="DEBUG",
    )


# ============================================================================
# Test Data
# ============================================================================

@pytest.fixture
def eth_params() -> TransferParameters:
    """ETH-only transfer used as a regression vector."""
    return TransferParameters(
        linkdrop_module_address=MODULE_ADDRESS,
        wei_amount=1000,
        token_address=ZERO_ADDRESS,
        token_amount=0,
        expiration_time=EXPIRATION_TIME,
    )


@pytest.fixture
def erc20_params() -> TransferParameters:
    return TransferParameters(
        linkdrop_module_address=MODULE_ADDRESS,
        wei_amount=10 ** 15,
        token_address=TOKEN_ADDRESS,
        token_amount=5 * 10 ** 18,
        expiration_time=EXPIRATION_TIME,
    )


@pytest.fixture
def nft_params() -> NFTTransferParameters:
    return NFTTransferParameters(
        linkdrop_module_address=MODULE_ADDRESS,
        wei_amount=0,
        nft_address=NFT_ADDRESS,
        token_id=42,
        expiration_time=EXPIRATION_TIME,
    )


# ============================================================================
# Test Signer
# ============================================================================

@pytest.fixture
def test_signer():
    """Create a test signer with a random key."""
    from linkdrop.signing.signer import generate_test_key
    return generate_test_key()


# ============================================================================
# Mock Claim Service
# ============================================================================

class RecordingTransport:
    """Mock claim API that records requests and replies with a canned response."""

    def __init__(self, status_code: int = 200, body: dict = None):
        self.status_code = status_code
        self.body = body if body is not None else {"success": True, "txHash": "0x" + "ab" * 32}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payloads(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def claim_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_claim_service(test_config) -> Callable[[Callable], HttpClaimService]:
    """Build an HttpClaimService backed by a mock transport handler."""
    def _make(handler) -> HttpClaimService:
        client = httpx.AsyncClient(
            base_url=test_config.api_host,
            transport=httpx.MockTransport(handler),
        )
        return HttpClaimService(test_config, client=client)
    return _make
