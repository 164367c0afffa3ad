"""
Command-line interface for the Linkdrop SDK.

Provides commands for creating links, signing receivers and deriving
CREATE2 addresses.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

import structlog
from pydantic import ValidationError

from linkdrop import __version__
from linkdrop.config import ChainType, get_config, set_config
from linkdrop.core.receiver import sign_receiver_address
from linkdrop.crypto.create2 import derive_address
from linkdrop.errors import LinkdropError
from linkdrop.sdk import LinkdropSDK
from linkdrop.signing.signer import AccountSigner


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Logs go to stderr; stdout carries the JSON result
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
    )


def _add_logging_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LINKDROP_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=None,
        help="Output logs in JSON format (default: LINKDROP_LOG_JSON)",
    )


def _add_link_args(parser: argparse.ArgumentParser, erc721: bool) -> None:
    parser.add_argument(
        "--chain",
        choices=[c.value for c in ChainType],
        default=None,
        help="Ethereum network (default: LINKDROP_CHAIN or rinkeby)",
    )
    parser.add_argument(
        "--signing-key",
        help="Linkdrop signer private key (default: LINKDROP_SIGNING_KEY)",
    )
    parser.add_argument("--module", required=True, help="Linkdrop module address")
    parser.add_argument("--wei-amount", default="0", help="Amount of wei (default: 0)")
    if erc721:
        parser.add_argument("--nft-address", required=True, help="ERC721 contract address")
        parser.add_argument("--token-id", required=True, help="Token id")
    else:
        parser.add_argument(
            "--token-address",
            default="0x0000000000000000000000000000000000000000",
            help="ERC20 token address (default: zero address, ETH only)",
        )
        parser.add_argument("--token-amount", default="0", help="Amount of tokens (default: 0)")
    parser.add_argument("--expiration-time", required=True, help="Link expiration Unix timestamp")
    _add_logging_args(parser)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="linkdrop",
        description="Create and claim Linkdrop links",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    link_parser = subparsers.add_parser("create-link", help="Create an ETH/ERC20 link")
    _add_link_args(link_parser, erc721=False)

    nft_parser = subparsers.add_parser("create-link-erc721", help="Create an ERC721 link")
    _add_link_args(nft_parser, erc721=True)

    receiver_parser = subparsers.add_parser("sign-receiver", help="Bind a link to a receiver")
    receiver_parser.add_argument("--link-key", required=True, help="Link's ephemeral private key")
    receiver_parser.add_argument("--receiver", required=True, help="Receiver address")
    _add_logging_args(receiver_parser)

    derive_parser = subparsers.add_parser("derive-address", help="Compute a CREATE2 address")
    derive_parser.add_argument("--creator", required=True, help="Deploying contract address")
    derive_parser.add_argument("--salt", required=True, help="32-byte salt as hex")
    derive_parser.add_argument("--init-code", required=True, help="Init bytecode as hex")
    _add_logging_args(derive_parser)

    return parser


def _create_link(args: argparse.Namespace, erc721: bool) -> dict:
    overrides = {}
    if args.chain:
        overrides["chain"] = args.chain
    if args.signing_key:
        overrides["signing_key"] = args.signing_key

    sdk = LinkdropSDK(**overrides)
    set_config(sdk.config)
    signer = AccountSigner.from_config(sdk.config)

    if erc721:
        link, url = sdk.generate_link_erc721(
            signer,
            args.module,
            args.wei_amount,
            args.nft_address,
            args.token_id,
            args.expiration_time,
        )
    else:
        link, url = sdk.generate_link(
            signer,
            args.module,
            args.wei_amount,
            args.token_address,
            args.token_amount,
            args.expiration_time,
        )

    return {
        "linkKey": link.link_key,
        "linkId": link.link_id,
        "linkdropSignerSignature": link.linkdrop_signer_signature,
        "url": url,
    }


def run_command(args: argparse.Namespace) -> dict:
    """Run a parsed command and return its JSON-serializable result."""
    if args.command == "create-link":
        return _create_link(args, erc721=False)
    if args.command == "create-link-erc721":
        return _create_link(args, erc721=True)
    if args.command == "sign-receiver":
        return {
            "receiverAddress": args.receiver,
            "receiverSignature": sign_receiver_address(args.link_key, args.receiver),
        }
    if args.command == "derive-address":
        return {"address": derive_address(args.creator, args.salt, args.init_code)}
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = get_config()
    except ValidationError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    # Flags win over LINKDROP_LOG_LEVEL / LINKDROP_LOG_JSON
    setup_logging(
        args.log_level or config.log_level,
        config.log_json if args.log_json is None else args.log_json,
    )

    try:
        result = run_command(args)
    except LinkdropError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
