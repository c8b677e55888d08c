from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, ConfigDict

from backend.chain_config import load_contract_info
from backend.config import Settings
from backend.errors import ContractConfigError, TransportError
from backend.gateways import Gateway, format_ipfs_url, get_ipfs_gateway_url, resolve_gateway
from backend.ipfs import IPFSService

app = FastAPI(title="ExplorMate API")


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache
def get_ipfs_service() -> IPFSService:
    return IPFSService.from_settings(get_settings())


class PinBody(BaseModel):
    data: Any


class UserProfile(BaseModel):
    # extra fields (languages, favoriteDestinations, ...) are pinned as-is
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "name": "John Doe Tourist",
                "email": "john@explormate.com",
                "bio": "Adventure seeker and nature lover",
            }
        },
    )

    name: str
    email: str
    bio: Optional[str] = None
    experience: Optional[str] = None
    certifications: Optional[List[str]] = None


class Location(BaseModel):
    lat: float
    lng: float


class ChatMessage(BaseModel):
    text: str
    mediaType: Optional[str] = None
    location: Optional[Location] = None
    timestamp: Optional[int] = None


def _pinned(cid: str) -> Dict[str, Any]:
    return {"ok": True, "cid": cid, "url": format_ipfs_url(cid)}


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/ipfs/auth")
def ipfs_auth(ipfs: IPFSService = Depends(get_ipfs_service)):
    return {"ok": True, "authenticated": ipfs.test_authentication()}


@app.post("/ipfs/json")
def ipfs_put_json(body: PinBody, ipfs: IPFSService = Depends(get_ipfs_service)):
    """
    POST {"data": <anything JSON>} and get back {"cid": "...", "url": "..."}
    """
    try:
        return _pinned(ipfs.upload_json(body.data))
    except TransportError as e:
        raise HTTPException(status_code=502, detail=f"ipfs upload failed: {e}")


@app.post("/ipfs/profile")
def ipfs_put_profile(profile: UserProfile, ipfs: IPFSService = Depends(get_ipfs_service)):
    try:
        return _pinned(ipfs.upload_user_profile(profile.model_dump(exclude_none=True)))
    except TransportError as e:
        raise HTTPException(status_code=502, detail=f"profile upload failed: {e}")


@app.post("/ipfs/chat")
def ipfs_put_chat(message: ChatMessage, ipfs: IPFSService = Depends(get_ipfs_service)):
    try:
        return _pinned(ipfs.upload_chat_message(message.model_dump(exclude_none=True)))
    except TransportError as e:
        raise HTTPException(status_code=502, detail=f"chat upload failed: {e}")


@app.get("/ipfs/{cid}/url")
def ipfs_url(
    cid: str,
    gateway: str = Query(Gateway.PINATA.value, description="pinata | cloudflare | ipfs | dweb"),
):
    return {
        "cid": cid,
        "gateway": resolve_gateway(gateway).value,
        "url": get_ipfs_gateway_url(cid, gateway),
    }


@app.get("/ipfs/{cid}")
def ipfs_get(cid: str, ipfs: IPFSService = Depends(get_ipfs_service)):
    """
    GET the pinned JSON back by CID (through the Pinata gateway).
    """
    try:
        return ipfs.get_data(cid)
    except TransportError as e:
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail=f"cid not found: {cid}")
        raise HTTPException(status_code=502, detail=f"ipfs-get failed: {e}")


@app.get("/debug/contract-info")
def debug_contract_info(settings: Settings = Depends(get_settings)):
    try:
        address, abi = load_contract_info(settings)
    except ContractConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))

    # Keep response small: show a few function names only
    fn_names = [it.get("name") for it in abi if it.get("type") == "function"]
    return {
        "ok": True,
        "network": settings.network,
        "address": address,
        "abi_functions_count": len(fn_names),
        "sample_functions": fn_names[:5],
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("backend.main:app", host="127.0.0.1", port=8000, reload=True)
