"""
Claim link URLs.

A claim URL carries everything a receiver needs to redeem a link: the
transfer parameters, the link key and the linkdrop signer's signature.
"""

from typing import Tuple, Union
from urllib.parse import parse_qs, urlencode, urlsplit

from linkdrop.core.link import Link, NFTTransferParameters, TransferParameters
from linkdrop.crypto.encoding import format_address, format_uint
from linkdrop.errors import InvalidEncoding

RECEIVE_ROUTE = "/#/receive"

_COMMON_FIELDS = ("weiAmount", "expirationTime", "linkKey", "linkdropModuleAddress",
                  "linkdropSignerSignature")


def build_claim_url(
    claim_host: str,
    params: Union[TransferParameters, NFTTransferParameters],
    link: Link,
) -> str:
    """
    Build the URL a link is distributed as.

    Args:
        claim_host: Host serving the claim page
        params: Transfer the link authorizes
        link: Link produced for params

    Returns:
        Claim URL

    Raises:
        InvalidEncoding: If an address or amount is malformed
    """
    query = {"weiAmount": format_uint(params.wei_amount)}
    if isinstance(params, NFTTransferParameters):
        query["nftAddress"] = format_address(params.nft_address)
        query["tokenId"] = format_uint(params.token_id)
    else:
        query["tokenAddress"] = format_address(params.token_address)
        query["tokenAmount"] = format_uint(params.token_amount)
    query.update({
        "expirationTime": format_uint(params.expiration_time),
        "linkKey": link.link_key,
        "linkdropModuleAddress": format_address(params.linkdrop_module_address),
        "linkdropSignerSignature": link.linkdrop_signer_signature,
    })

    return f"{claim_host.rstrip('/')}{RECEIVE_ROUTE}?{urlencode(query)}"


def parse_claim_url(
    url: str,
) -> Tuple[Union[TransferParameters, NFTTransferParameters], str, str]:
    """
    Parse a claim URL back into its parts.

    Returns:
        Tuple of (transfer parameters, link key, linkdrop signer signature)
    """
    # The query lives after the hash route, so it is part of the fragment
    parts = urlsplit(url)
    fragment = parts.fragment
    query_string = fragment.split("?", 1)[1] if "?" in fragment else parts.query
    values = {key: items[0] for key, items in parse_qs(query_string).items()}

    is_nft = "nftAddress" in values
    required = _COMMON_FIELDS + (("nftAddress", "tokenId") if is_nft else ("tokenAddress", "tokenAmount"))
    missing = [name for name in required if name not in values]
    if missing:
        raise InvalidEncoding(f"Claim URL is missing fields: {', '.join(missing)}")

    if is_nft:
        params = NFTTransferParameters(
            linkdrop_module_address=values["linkdropModuleAddress"],
            wei_amount=values["weiAmount"],
            nft_address=values["nftAddress"],
            token_id=values["tokenId"],
            expiration_time=values["expirationTime"],
        )
    else:
        params = TransferParameters(
            linkdrop_module_address=values["linkdropModuleAddress"],
            wei_amount=values["weiAmount"],
            token_address=values["tokenAddress"],
            token_amount=values["tokenAmount"],
            expiration_time=values["expirationTime"],
        )

    return params, values["linkKey"], values["linkdropSignerSignature"]
