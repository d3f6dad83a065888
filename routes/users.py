# routes/users.py
from fastapi import APIRouter, HTTPException, Depends
from typing import Optional
import logging
from database import Database, get_db
from models.user import UserUpsert, UserUpdate
from .common import require_payload, serialize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

@router.post("")
async def upsert_user(user: UserUpsert, db: Database = Depends(get_db)):
    """Create or refresh the profile for an identity-provider account."""
    if not user.clerkId or not user.email:
        raise HTTPException(400, "clerkId and email are required fields.")

    result = await db.users.update_one(
        {"clerkId": user.clerkId},
        {"$set": {"clerkId": user.clerkId, "name": user.name, "email": user.email, "image": user.image}},
        upsert=True
    )
    logger.info(f"Upserted user {user.clerkId}, inserted: {result.upserted_id is not None}")
    return serialize({"success": True, "upsertedId": result.upserted_id})

@router.get("")
async def get_users(db: Database = Depends(get_db)):
    users = await db.users.find({}).to_list(None)
    return serialize(users)

@router.get("/{clerk_id}")
async def get_user(clerk_id: str, db: Database = Depends(get_db)):
    user = await db.users.find_one({"clerkId": clerk_id})
    if not user:
        raise HTTPException(404, "User not found.")
    return serialize(user)

@router.put("/{clerk_id}")
async def update_user(clerk_id: str, user: Optional[UserUpdate] = None, db: Database = Depends(get_db)):
    update = user.model_dump(exclude_unset=True) if user else {}
    require_payload(update)

    result = await db.users.update_one({"clerkId": clerk_id}, {"$set": update})
    if result.matched_count == 0:
        raise HTTPException(404, "User not found.")
    logger.info(f"Updated user {clerk_id}: {sorted(update)}")
    return {"success": True}

@router.delete("/{clerk_id}")
async def delete_user(clerk_id: str, db: Database = Depends(get_db)):
    result = await db.users.delete_one({"clerkId": clerk_id})
    if result.deleted_count == 0:
        raise HTTPException(404, "User not found.")
    logger.info(f"Deleted user {clerk_id}")
    return {"success": True}
