"""Identifier issuing, inspection and validation routes."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from sleekid.clock import format_instant
from ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1", tags=["ids"])

MAX_BATCH = 1000

# Set by app.py
_generator = None


def init(generator):
    """Initialize with the generator serving this app."""
    global _generator
    _generator = generator


class GenerateRequest(BaseModel):
    prefix: str = Field(min_length=1, max_length=64)
    random_digits_length: Optional[int] = Field(default=None, le=256)
    count: int = Field(default=1, ge=1, le=MAX_BATCH)


class ValidateRequest(BaseModel):
    id: str
    prefix: Optional[str] = None


def _check(sleek_id, prefix=None):
    if prefix is None:
        return _generator.validate(sleek_id)
    return _generator.validate_with_prefix(prefix, sleek_id)


@router.post("/ids", status_code=201)
async def generate(body: GenerateRequest, username=Depends(verify_basic_auth)):
    """Issue `count` new ids (requires basic auth)."""
    ids = [str(_generator.new(body.prefix, body.random_digits_length)) for _ in range(body.count)]
    return {"ids": ids}


@router.post("/ids/validate")
async def validate(body: ValidateRequest):
    """Checksum check, optionally pinned to a prefix."""
    return {"valid": _check(body.id, body.prefix)}


@router.get("/ids/{sleek_id}")
async def inspect(sleek_id: str, prefix: Optional[str] = None):
    """Parsed fields of an id. Malformed ids come back with valid=false, never an error."""
    return {
        "id": sleek_id,
        "prefix": _generator.prefix(sleek_id),
        "timestamp": format_instant(_generator.timestamp(sleek_id)),
        "valid": _check(sleek_id, prefix),
    }


@router.get("/config")
async def config(username=Depends(verify_basic_auth)):
    """Generator settings clients need to parse ids (requires basic auth)."""
    return _generator.config.to_dict()
