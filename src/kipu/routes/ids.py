"""Uid endpoints — encode row ids, resolve uids.

Row ids travel as decimal strings: 64-bit values overflow JSON-safe
integers. A batch is all-or-nothing; one bad element rejects the request.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from kipu.deps import get_codec
from kipu.resolve import decode_uid, encode_uid, parse_row_id
from kipu.uid import UidCodec

router = APIRouter(prefix="/api/v1/ids", tags=["ids"])


class EncodeRequest(BaseModel):
    row_ids: list[str | int]


class DecodeRequest(BaseModel):
    ids: list[str]


@router.get("/encode/{row_id}")
def encode_one(row_id: str, codec: UidCodec = Depends(get_codec)):
    number = parse_row_id(row_id)
    return {"row_id": str(number), "id": codec.encode(number)}


@router.get("/decode/{uid}")
def decode_one(uid: str, codec: UidCodec = Depends(get_codec)):
    return {"id": uid, "row_id": decode_uid(codec, uid)}


@router.post("/encode")
def encode_many(body: EncodeRequest, codec: UidCodec = Depends(get_codec)):
    return {"ids": [encode_uid(codec, row_id) for row_id in body.row_ids]}


@router.post("/decode")
def decode_many(body: DecodeRequest, codec: UidCodec = Depends(get_codec)):
    return {"row_ids": [decode_uid(codec, uid) for uid in body.ids]}
