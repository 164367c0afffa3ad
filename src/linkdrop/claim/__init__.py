"""
Claim module.

Builds claim URLs and submits claims to the claim service.
"""

from linkdrop.claim.http import HttpClaimService
from linkdrop.claim.interface import ClaimRequest, ClaimResult, ClaimService
from linkdrop.claim.url import build_claim_url, parse_claim_url

__all__ = [
    "ClaimRequest",
    "ClaimResult",
    "ClaimService",
    "HttpClaimService",
    "build_claim_url",
    "parse_claim_url",
]
