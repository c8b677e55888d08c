import json

import pytest

from backend.chain_config import (
    artifact_path,
    deployment_path,
    load_artifact,
    load_contract_info,
    load_deployment,
    write_deployment,
)
from backend.config import Settings
from backend.errors import ContractConfigError

ABI = [
    {"type": "function", "name": "registerUser", "inputs": [], "outputs": []},
    {"type": "event", "name": "UserRegistered", "inputs": []},
]


def write_artifact(artifacts_dir, **fields):
    path = artifact_path(artifacts_dir)
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"contractName": "ExplorMate", **fields}))
    return path


def test_artifact_path_follows_hardhat_layout(tmp_path):
    assert artifact_path(tmp_path) == tmp_path / "contracts" / "ExplorMate.sol" / "ExplorMate.json"


def test_load_artifact(tmp_path):
    write_artifact(tmp_path, abi=ABI, bytecode="0x6080")
    abi, bytecode = load_artifact(tmp_path)
    assert abi == ABI
    assert bytecode == "0x6080"


def test_missing_artifact(tmp_path):
    with pytest.raises(ContractConfigError, match="hardhat compile"):
        load_artifact(tmp_path)


@pytest.mark.parametrize("fields", [
    {"bytecode": "0x6080"},
    {"abi": [], "bytecode": "0x6080"},
    {"abi": ABI},
    {"abi": ABI, "bytecode": "0x"},
])
def test_incomplete_artifact(tmp_path, fields):
    write_artifact(tmp_path, **fields)
    with pytest.raises(ContractConfigError):
        load_artifact(tmp_path)


def test_deployment_record(tmp_path):
    path = write_deployment(tmp_path, "localhost", "0x5FbDB2315678afecb367f032d93F642f64180aa3", 31337, "0xbeef")

    assert path == deployment_path(tmp_path, "localhost")
    assert json.loads(path.read_text()) == {
        "contract": "ExplorMate",
        "address": "0x5FbDB2315678afecb367f032d93F642f64180aa3",
        "network": "localhost",
        "chainId": 31337,
        "txHash": "0xbeef",
    }
    assert load_deployment(tmp_path, "localhost") == "0x5FbDB2315678afecb367f032d93F642f64180aa3"


def test_deployments_are_per_network(tmp_path):
    write_deployment(tmp_path, "localhost", "0x1", 31337)
    with pytest.raises(ContractConfigError):
        load_deployment(tmp_path, "sepolia")


def test_deployment_without_address(tmp_path):
    path = deployment_path(tmp_path, "localhost")
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"contract": "ExplorMate"}))
    with pytest.raises(ContractConfigError, match="address"):
        load_deployment(tmp_path, "localhost")


def test_load_contract_info(tmp_path):
    write_artifact(tmp_path / "artifacts", abi=ABI, bytecode="0x6080")
    write_deployment(tmp_path / "deployments", "localhost", "0xabc", 31337)
    settings = Settings(artifacts_dir=tmp_path / "artifacts", deployments_dir=tmp_path / "deployments")

    assert load_contract_info(settings) == ("0xabc", ABI)
