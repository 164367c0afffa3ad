"""
Configuration management for the Linkdrop SDK.

Supports configuration via environment variables and .env files.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChainType(str, Enum):
    """Ethereum networks the Linkdrop contracts are deployed on."""
    MAINNET = "mainnet"
    RINKEBY = "rinkeby"


class LinkdropConfig(BaseSettings):
    """
    Configuration settings for the Linkdrop SDK.

    All settings can be configured via environment variables with the LINKDROP_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="LINKDROP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Network settings
    chain: ChainType = Field(
        default=ChainType.RINKEBY,
        description="Ethereum network the links are issued for"
    )

    # Service endpoints
    api_host: str = Field(
        default="https://safe.linkdrop.io",
        description="Claim service API host"
    )
    claim_host: str = Field(
        default="https://claim.linkdrop.io",
        description="Host of the claim page links point to"
    )
    claim_path: str = Field(
        default="/api/v1/linkdrops/claim",
        description="Claim endpoint for ETH/ERC20 links"
    )
    claim_erc721_path: str = Field(
        default="/api/v1/linkdrops/claim-erc721",
        description="Claim endpoint for ERC721 links"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for claim service requests"
    )

    # Linkdrop signer settings
    signing_key: Optional[str] = Field(
        default=None,
        description="Hex-encoded private key of the linkdrop signer"
    )

    # Logging settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


# Global config instance
_config: Optional[LinkdropConfig] = None


def get_config() -> LinkdropConfig:
    """
    Get or create the global configuration instance.

    Raises:
        pydantic.ValidationError: If the environment holds invalid settings
    """
    global _config
    if _config is None:
        _config = LinkdropConfig()
    return _config


def set_config(config: Optional[LinkdropConfig]) -> None:
    """Set the global configuration instance, or clear it with None."""
    global _config
    _config = config
