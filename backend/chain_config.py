# backend/chain_config.py
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from backend.config import Settings
from backend.errors import ContractConfigError

CONTRACT_NAME = "ExplorMate"


def artifact_path(artifacts_dir: Path, name: str = CONTRACT_NAME) -> Path:
    # Hardhat layout: artifacts/contracts/<Name>.sol/<Name>.json
    return Path(artifacts_dir) / "contracts" / f"{name}.sol" / f"{name}.json"


def deployment_path(deployments_dir: Path, network: str, name: str = CONTRACT_NAME) -> Path:
    return Path(deployments_dir) / network / f"{name}.json"


def load_artifact(artifacts_dir: Path, name: str = CONTRACT_NAME) -> Tuple[List[Dict[str, Any]], str]:
    path = artifact_path(artifacts_dir, name)
    if not path.exists():
        raise ContractConfigError(
            f"Artifact not found at {path}. Did you run `npx hardhat compile`?"
        )
    artifact = json.loads(path.read_text(encoding="utf-8"))

    abi = artifact.get("abi")
    if not abi:
        raise ContractConfigError(f"ABI missing in {path}")
    bytecode = artifact.get("bytecode")
    if not bytecode or bytecode == "0x":
        raise ContractConfigError(f"Bytecode missing in {path} (abstract contract or interface?)")

    return abi, bytecode


def write_deployment(
    deployments_dir: Path,
    network: str,
    address: str,
    chain_id: int,
    tx_hash: Optional[str] = None,
    name: str = CONTRACT_NAME,
) -> Path:
    """Record where `name` lives on `network`; returns the file written."""
    path = deployment_path(deployments_dir, network, name)
    path.parent.mkdir(parents=True, exist_ok=True)
    record = {
        "contract": name,
        "address": address,
        "network": network,
        "chainId": chain_id,
        "txHash": tx_hash,
    }
    path.write_text(json.dumps(record, indent=2), encoding="utf-8")
    return path


def load_deployment(deployments_dir: Path, network: str, name: str = CONTRACT_NAME) -> str:
    path = deployment_path(deployments_dir, network, name)
    if not path.exists():
        raise ContractConfigError(
            f"Deployment file not found at {path}. "
            "Run `python -m scripts.deploy` for this network first."
        )
    deployment = json.loads(path.read_text(encoding="utf-8"))
    address = deployment.get("address")
    if not address:
        raise ContractConfigError(f"`address` key missing in {path}.")
    return address


def load_contract_info(settings: Settings, name: str = CONTRACT_NAME) -> Tuple[str, List[Dict[str, Any]]]:
    """(address, abi) of the deployed contract on the configured network."""
    abi, _ = load_artifact(settings.artifacts_dir, name)
    address = load_deployment(settings.deployments_dir, settings.network, name)
    return address, abi
