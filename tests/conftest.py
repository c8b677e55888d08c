"""Shared fixtures: fake Pinata responses so no test touches the network."""

import hashlib
import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from backend import ipfs
from backend.config import PinataCredentials


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, url: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.url = url

    def json(self):
        if isinstance(self._payload, bytes):
            raise requests.exceptions.JSONDecodeError("Expecting value", "", 0)
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}", response=self)


class FakePinata:
    """
    Stands in for api.pinata.cloud and its gateway.
    Pins are kept in memory and served back by CID.
    """

    def __init__(self):
        self.pins: Dict[str, Any] = {}
        self.calls: List[Dict[str, Any]] = []
        self.auth_status = 200
        self.fail_with: Optional[Exception] = None

    def _record(self, method: str, url: str, kwargs: Dict[str, Any]):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _cid_for(content: bytes) -> str:
        return "Qm" + hashlib.sha256(content).hexdigest()[:44]

    def post(self, url, **kwargs):
        self._record("POST", url, kwargs)
        if url == ipfs.PIN_JSON_URL:
            content = kwargs["json"]["pinataContent"]
            raw = json.dumps(content, sort_keys=True).encode()
        elif url == ipfs.PIN_FILE_URL:
            raw = content = kwargs["files"]["file"][1].read()
        else:
            return FakeResponse(404, {"error": "unknown endpoint"}, url)

        cid = self._cid_for(raw)
        self.pins[cid] = content
        return FakeResponse(200, {"IpfsHash": cid, "PinSize": len(raw), "Timestamp": "2024-01-01T00:00:00Z"}, url)

    def get(self, url, **kwargs):
        self._record("GET", url, kwargs)
        if url == ipfs.TEST_AUTH_URL:
            return FakeResponse(self.auth_status, {"message": "Congratulations!"}, url)

        cid = url.rsplit("/", 1)[-1]
        if cid in self.pins:
            return FakeResponse(200, self.pins[cid], url)
        return FakeResponse(404, {"error": "not found"}, url)

    def last(self, method: str) -> Dict[str, Any]:
        return [c for c in self.calls if c["method"] == method][-1]


@pytest.fixture
def fake_pinata(monkeypatch):
    pinata = FakePinata()
    monkeypatch.setattr(ipfs.requests, "post", pinata.post)
    monkeypatch.setattr(ipfs.requests, "get", pinata.get)
    return pinata


@pytest.fixture
def credentials():
    return PinataCredentials(api_key="key-123", secret_api_key="secret-456")


@pytest.fixture
def service(credentials):
    return ipfs.IPFSService(credentials)


@pytest.fixture
def fixed_clock(monkeypatch):
    monkeypatch.setattr(ipfs, "_now_ms", lambda: 1700000000000)
    return 1700000000000
