"""Utility functions for addresses, URLs and units"""

import re
from typing import Optional, Tuple
from eth_utils import is_address, to_checksum_address
from loguru import logger


ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")

IPFS_GATEWAY = "https://ipfs.io/ipfs/"


def validate_ethereum_address(address: str) -> Tuple[bool, Optional[str]]:
    """
    Validate Ethereum address format

    Returns:
        (is_valid, checksum_address or None)
    """
    if not address or not isinstance(address, str):
        return False, None

    address = address.strip()

    if not _ADDRESS_RE.match(address):
        return False, None

    try:
        if is_address(address):
            return True, to_checksum_address(address)
    except ValueError as e:
        logger.debug(f"Address validation error: {e}")

    return False, None


def normalize_address(address: Optional[str]) -> str:
    """Lower-case an address for identity comparisons"""
    if not address:
        return ""
    return address.strip().lower()


def is_zero_address(address: Optional[str]) -> bool:
    """True for the null address that mints originate from"""
    return normalize_address(address) == ZERO_ADDRESS


def convert_ipfs_to_http(url: Optional[str]) -> str:
    """Convert an IPFS URI to an HTTP gateway URL, empty string when missing"""
    if not url or not isinstance(url, str):
        return ""

    if url.startswith(("http://", "https://")):
        return url

    if url.startswith("ipfs://"):
        ipfs_path = url.replace("ipfs://", "").replace("ipfs/", "", 1).lstrip("/")
        return f"{IPFS_GATEWAY}{ipfs_path}"

    # Bare CIDv0 hash, optionally with a path
    if url.startswith("Qm") and len(url.split("/")[0]) == 46:
        return f"{IPFS_GATEWAY}{url}"

    return url


def opensea_asset_url(chain: str, contract: str, token_id: str) -> str:
    """Build an OpenSea item page link"""
    return f"https://opensea.io/assets/{chain}/{contract}/{token_id}"
