"""FastAPI dependencies for Kipu routes."""

from __future__ import annotations

from fastapi import Request

from kipu.uid import UidCodec


def get_codec(request: Request) -> UidCodec:
    """Get the process-wide uid codec from app state."""
    return request.app.state.codec
