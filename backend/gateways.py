# backend/gateways.py
"""
Gateway URL helpers for the mobile/web client.
Pure string building, no network access.
"""

from enum import Enum
from typing import Union


class Gateway(str, Enum):
    PINATA = "pinata"
    CLOUDFLARE = "cloudflare"
    IPFS = "ipfs"
    DWEB = "dweb"


GATEWAY_PREFIXES = {
    Gateway.PINATA: "https://gateway.pinata.cloud/ipfs/",
    Gateway.CLOUDFLARE: "https://cloudflare-ipfs.com/ipfs/",
    Gateway.IPFS: "https://ipfs.io/ipfs/",
    Gateway.DWEB: "https://dweb.link/ipfs/",
}

DEFAULT_GATEWAY = Gateway.PINATA


def _bare_cid(cid: str) -> str:
    if cid.startswith("ipfs://"):
        return cid[len("ipfs://"):]
    return cid


def resolve_gateway(gateway: Union[Gateway, str, None]) -> Gateway:
    """Map a selector to a Gateway; anything unrecognised means the Pinata gateway."""
    try:
        return Gateway(gateway)
    except ValueError:
        return DEFAULT_GATEWAY


def get_ipfs_gateway_url(cid: str, gateway: Union[Gateway, str, None] = DEFAULT_GATEWAY) -> str:
    return f"{GATEWAY_PREFIXES[resolve_gateway(gateway)]}{_bare_cid(cid)}"


def format_ipfs_url(cid: str) -> str:
    return get_ipfs_gateway_url(cid, DEFAULT_GATEWAY)
