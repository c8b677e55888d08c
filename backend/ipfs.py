"""
Pinata IPFS client for ExplorMate.
Uploads files and JSON documents, reads them back through the gateway,
and returns the IpfsHash (CID) that the app stores on-chain.
"""

import json
import logging
from pathlib import Path
from time import time
from typing import Any, Dict, Mapping, Optional, Union

import requests

from backend.config import PinataCredentials, Settings
from backend.errors import TransportError
from backend.gateways import format_ipfs_url

logger = logging.getLogger(__name__)

PINATA_API_URL = "https://api.pinata.cloud"
PIN_FILE_URL = f"{PINATA_API_URL}/pinning/pinFileToIPFS"
PIN_JSON_URL = f"{PINATA_API_URL}/pinning/pinJSONToIPFS"
TEST_AUTH_URL = f"{PINATA_API_URL}/data/testAuthentication"

APP_TAG = "ExplorMate"
METADATA_APP = "explormate"
CHAT_MESSAGE_VERSION = "1.0"

ContentIdentifier = str


def _now_ms() -> int:
    return int(time() * 1000)


class IPFSService:
    """Thin wrapper over the Pinata pinning API. One HTTP call per operation."""

    def __init__(self, credentials: PinataCredentials, timeout: Optional[float] = None):
        """
        Args:
            credentials: Pinata key pair; empty keys are allowed but most calls will be rejected
            timeout: seconds passed to requests (None = wait indefinitely)
        """
        self.credentials = credentials
        self.timeout = timeout

        if not credentials.is_configured:
            logger.warning("Pinata API keys not found. IPFS functionality will be limited.")

    @classmethod
    def from_settings(cls, settings: Settings) -> "IPFSService":
        return cls(settings.pinata, timeout=settings.request_timeout)

    def _headers(self) -> Dict[str, str]:
        return {
            "pinata_api_key": self.credentials.api_key,
            "pinata_secret_api_key": self.credentials.secret_api_key,
        }

    def _send(self, method, url: str, **kwargs) -> requests.Response:
        # method is requests.post / requests.get
        try:
            response = method(url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.error("Pinata request to %s failed: %s", url, exc)
            raise TransportError(f"Request to {url} failed: {exc}", url=url, status_code=status) from exc
        return response

    @staticmethod
    def _ipfs_hash(response: requests.Response) -> ContentIdentifier:
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError("Pinata returned a non-JSON response", url=response.url) from exc
        cid = payload.get("IpfsHash") if isinstance(payload, dict) else None
        if not cid:
            raise TransportError("Pinata response has no IpfsHash", url=response.url)
        return cid

    def upload_file(self, file_path: Union[str, Path]) -> ContentIdentifier:
        """
        Pin a local file (multipart upload).

        Raises:
            FileNotFoundError: the path does not point to a file
            TransportError: network failure or non-2xx from Pinata
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        ts = _now_ms()
        metadata = {
            "name": f"ExplorMate-{ts}",
            "keyvalues": {"app": METADATA_APP, "timestamp": str(ts)},
        }
        options = {"cidVersion": 0}

        with path.open("rb") as fh:
            response = self._send(
                requests.post,
                PIN_FILE_URL,
                files={"file": (path.name, fh)},
                data={
                    "pinataMetadata": json.dumps(metadata),
                    "pinataOptions": json.dumps(options),
                },
                headers=self._headers(),
            )

        cid = self._ipfs_hash(response)
        logger.info("File uploaded to IPFS: %s", cid)
        return cid

    def upload_json(self, data: Any) -> ContentIdentifier:
        """
        Pin any JSON-serialisable value. The value is sent as pinataContent,
        so reading the CID back returns exactly `data`.
        """
        body = {
            "pinataMetadata": {
                "name": f"ExplorMate-Data-{_now_ms()}",
                "keyvalues": {"app": METADATA_APP, "type": "metadata"},
            },
            "pinataContent": data,
        }
        response = self._send(requests.post, PIN_JSON_URL, json=body, headers=self._headers())

        cid = self._ipfs_hash(response)
        logger.info("JSON uploaded to IPFS: %s", cid)
        return cid

    def upload_user_profile(self, profile: Mapping[str, Any]) -> ContentIdentifier:
        # name, email, bio, experience, certifications... fields are not validated
        return self.upload_json({**profile, "timestamp": _now_ms(), "app": APP_TAG})

    def upload_chat_message(self, message: Mapping[str, Any]) -> ContentIdentifier:
        payload = dict(message)
        ts = payload.get("timestamp")
        if isinstance(ts, bool) or not isinstance(ts, (int, float)):
            payload["timestamp"] = _now_ms()
        payload["app"] = APP_TAG
        payload["version"] = CHAT_MESSAGE_VERSION
        return self.upload_json(payload)

    def get_data(self, cid: ContentIdentifier) -> Any:
        """Fetch a pinned JSON document through the Pinata gateway. Never cached."""
        url = format_ipfs_url(cid)
        response = self._send(requests.get, url)
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"Content at {url} is not JSON", url=url) from exc

    def test_authentication(self) -> bool:
        """
        Probe Pinata with the configured keys.
        Returns True only on HTTP 200; failures are logged, never raised.
        """
        if not self.credentials.is_configured:
            logger.error("Pinata authentication failed: no API keys configured")
            return False

        try:
            response = requests.get(TEST_AUTH_URL, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Pinata authentication failed: %s", exc)
            return False

        if response.status_code != 200:
            logger.error("Pinata authentication failed: HTTP %s", response.status_code)
            return False

        logger.info("Pinata authentication successful")
        return True
