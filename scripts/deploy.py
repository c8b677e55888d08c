#!/usr/bin/env python3
"""
Deploy the ExplorMate contract compiled by Hardhat.

    npx hardhat compile
    NETWORK=localhost python -m scripts.deploy

The address is written to deployments/<network>/ExplorMate.json,
which is where the API (/debug/contract-info) looks for it.
"""

import logging
import sys

from backend.chain_config import CONTRACT_NAME, load_artifact, write_deployment
from backend.config import Settings
from backend.eth import deploy_contract, get_w3


def main():
    settings = Settings.from_env()

    if settings.network != "localhost" and not settings.private_key:
        raise RuntimeError(f"PRIVATE_KEY is required to deploy to {settings.network}")

    print(f"Deploying {CONTRACT_NAME} contract...")
    abi, bytecode = load_artifact(settings.artifacts_dir)
    w3 = get_w3(settings)

    address, tx_hash = deploy_contract(w3, abi, bytecode, settings.private_key)
    record = write_deployment(
        settings.deployments_dir, settings.network, address, settings.chain_id, tx_hash
    )

    print(f"{CONTRACT_NAME} deployed to: {address}")
    print(f"   tx: {tx_hash}")
    print(f"   saved: {record}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        main()
    except Exception as e:
        print(f"✗ Deployment failed: {e}", file=sys.stderr)
        sys.exit(1)
