# backend/eth.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from eth_account import Account
from web3 import Web3
from web3.contract import Contract

from backend.chain_config import CONTRACT_NAME, load_contract_info
from backend.config import Settings

logger = logging.getLogger(__name__)


def get_w3(settings: Settings) -> Web3:
    request_kwargs = {"timeout": settings.rpc_timeout} if settings.rpc_timeout else None
    w3 = Web3(Web3.HTTPProvider(settings.rpc_url, request_kwargs=request_kwargs))
    if not w3.is_connected():
        raise RuntimeError(
            f"Web3 not connected. Is the {settings.network} node reachable at {settings.rpc_url}?"
        )
    return w3


def deploy_contract(
    w3: Web3,
    abi: List[Dict[str, Any]],
    bytecode: str,
    private_key: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Deploy a compiled contract and wait for it to be mined.

    Args:
        w3: connected Web3 instance
        abi, bytecode: from the Hardhat artifact
        private_key: sign locally with this key; without it the node's first
            unlocked account sends the transaction (Hardhat node)

    Returns:
        (contract address, transaction hash)
    """
    factory = w3.eth.contract(abi=abi, bytecode=bytecode)

    if private_key:
        account = Account.from_key(private_key)
        tx = factory.constructor().build_transaction({
            "from": account.address,
            "nonce": w3.eth.get_transaction_count(account.address),
            "chainId": w3.eth.chain_id,
        })
        signed = account.sign_transaction(tx)
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        deployer = account.address
    else:
        accounts = w3.eth.accounts
        if not accounts:
            raise RuntimeError("Node has no unlocked accounts; set PRIVATE_KEY to deploy")
        deployer = accounts[0]
        tx_hash = factory.constructor().transact({"from": deployer})

    logger.info("Deployment tx %s sent from %s", w3.to_hex(tx_hash), deployer)
    receipt = w3.eth.wait_for_transaction_receipt(tx_hash)
    if receipt.status != 1:
        raise RuntimeError(f"Deployment transaction {w3.to_hex(tx_hash)} reverted")

    return receipt.contractAddress, w3.to_hex(tx_hash)


def get_contract(w3: Web3, settings: Settings, name: str = CONTRACT_NAME) -> Contract:
    address, abi = load_contract_info(settings, name)
    return w3.eth.contract(address=address, abi=abi, decode_tuples=True)
