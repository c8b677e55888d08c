# backend/config.py
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# parents[1] = parent of "backend" = the repo root (where Hardhat writes artifacts/)
REPO_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SEPOLIA_RPC_URL = "https://eth-sepolia.g.alchemy.com/v2/demo"

# Same networks hardhat.config.ts declares
NETWORKS: Dict[str, Dict[str, Any]] = {
    "localhost": {
        "url": "http://127.0.0.1:8545",
        "chain_id": 31337,
        "timeout": None,
    },
    "sepolia": {
        "url": DEFAULT_SEPOLIA_RPC_URL,
        "chain_id": 11155111,
        "timeout": 60,
    },
}


class PinataCredentials(BaseModel):
    """API key pair (+ optional JWT) for the Pinata pinning API."""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    secret_api_key: str = ""
    jwt: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.secret_api_key)


class Settings(BaseModel):
    """
    Everything the backend reads from the environment.
    Build one with Settings.from_env() and pass it down; nothing here is global.
    """

    model_config = ConfigDict(frozen=True)

    pinata: PinataCredentials = PinataCredentials()
    request_timeout: Optional[float] = None

    network: str = "localhost"
    rpc_url: str = NETWORKS["localhost"]["url"]
    chain_id: int = NETWORKS["localhost"]["chain_id"]
    rpc_timeout: Optional[float] = None
    private_key: Optional[str] = None
    etherscan_api_key: str = ""

    artifacts_dir: Path = REPO_ROOT / "artifacts"
    deployments_dir: Path = REPO_ROOT / "deployments"

    @classmethod
    def from_env(cls, use_dotenv: bool = True) -> "Settings":
        """
        Read settings from os.environ (after loading .env unless use_dotenv=False).
        Raises ValueError for an unknown NETWORK or a malformed IPFS_TIMEOUT.
        """
        if use_dotenv:
            load_dotenv()

        network = os.getenv("NETWORK", "localhost").strip().lower()
        if network not in NETWORKS:
            raise ValueError(
                f"Unknown NETWORK {network!r}; expected one of {sorted(NETWORKS)}"
            )
        net = NETWORKS[network]

        rpc_url = os.getenv("RPC_URL")
        if not rpc_url and network == "sepolia":
            rpc_url = os.getenv("SEPOLIA_RPC_URL")
        rpc_url = (rpc_url or net["url"]).strip()

        timeout = os.getenv("IPFS_TIMEOUT")

        return cls(
            pinata=PinataCredentials(
                api_key=os.getenv("PINATA_API_KEY", ""),
                secret_api_key=os.getenv("PINATA_SECRET_API_KEY", ""),
                jwt=os.getenv("PINATA_JWT", ""),
            ),
            request_timeout=float(timeout) if timeout else None,
            network=network,
            rpc_url=rpc_url,
            chain_id=net["chain_id"],
            rpc_timeout=net["timeout"],
            private_key=os.getenv("PRIVATE_KEY") or None,
            etherscan_api_key=os.getenv("ETHERSCAN_API_KEY", ""),
            artifacts_dir=Path(os.getenv("ARTIFACTS_DIR", REPO_ROOT / "artifacts")),
            deployments_dir=Path(os.getenv("DEPLOYMENTS_DIR", REPO_ROOT / "deployments")),
        )
