# routes/common.py
from datetime import datetime, timezone
from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def parse_object_id(value: str, entity: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(400, f"Invalid {entity} ID.")

def serialize(data):
    """JSON-ready copy of a store result, with ObjectIds as hex strings."""
    return jsonable_encoder(data, custom_encoder={ObjectId: str})

def require_payload(update: dict) -> None:
    if not update:
        raise HTTPException(400, "Update payload is required.")
