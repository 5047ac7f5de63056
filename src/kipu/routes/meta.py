"""Meta endpoints — health and version."""

from __future__ import annotations

from fastapi import APIRouter

from kipu.uid import UidCodec

router = APIRouter(prefix="/api/v1", tags=["meta"])


@router.get("/health")
def health():
    return {"status": "ok", "service": "kipu"}


@router.get("/version")
def version():
    return {
        "gateway": "0.1.0",
        "uid_length": UidCodec.UID_LENGTH,
        "max_id": str(UidCodec.MAX_SAFE_ID),
    }
