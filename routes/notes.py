# routes/notes.py
from fastapi import APIRouter, HTTPException, Depends
from pymongo import DESCENDING
from typing import Optional
import logging
from database import Database, get_db
from models.note import NoteCreate, NoteUpdate, mirrored_fields, normalize_attachments
from .common import parse_object_id, require_payload, serialize, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])

@router.post("", status_code=201)
async def create_note(note: NoteCreate, db: Database = Depends(get_db)):
    if not note.title:
        raise HTTPException(400, "title is required.")
    if not (note.subject or note.courseId or note.courseTitle):
        raise HTTPException(400, "subject, courseId or courseTitle is required.")

    attachments = normalize_attachments(note.attachments)
    if not attachments and not note.fileUrl:
        raise HTTPException(400, "At least one attachment or fileUrl is required.")

    now = utcnow()
    note_dict = {
        "title": note.title,
        # falsy optionals ("" or 0) are stored as null, as existing clients expect
        "subject": note.subject or None,
        "courseId": note.courseId or None,
        "courseTitle": note.courseTitle or None,
        "description": note.description or None,
        "attachments": attachments,
        **mirrored_fields(attachments, note),
        "createdAt": now,
        "updatedAt": now,
    }
    result = await db.notes.insert_one(note_dict)
    note_dict["_id"] = result.inserted_id
    logger.info(f"Created note {result.inserted_id} with {len(attachments)} attachment(s)")
    return serialize({"success": True, "note": note_dict})

@router.get("")
async def get_notes(db: Database = Depends(get_db)):
    notes = await db.notes.find({}).sort("createdAt", DESCENDING).to_list(None)
    return serialize(notes)

@router.get("/{id}")
async def get_note(id: str, db: Database = Depends(get_db)):
    note = await db.notes.find_one({"_id": parse_object_id(id, "note")})
    if not note:
        raise HTTPException(404, "Note not found.")
    return serialize(note)

@router.put("/{id}")
async def update_note(id: str, note: Optional[NoteUpdate] = None, db: Database = Depends(get_db)):
    update = note.model_dump(exclude_unset=True) if note else {}
    require_payload(update)
    note_id = parse_object_id(id, "note")

    if "attachments" in update:
        update["attachments"] = normalize_attachments(update["attachments"])
    update["updatedAt"] = utcnow()
    result = await db.notes.update_one({"_id": note_id}, {"$set": update})
    if result.matched_count == 0:
        raise HTTPException(404, "Note not found.")
    logger.info(f"Updated note {id}: {sorted(update)}")
    return {"success": True}

@router.delete("/{id}")
async def delete_note(id: str, db: Database = Depends(get_db)):
    result = await db.notes.delete_one({"_id": parse_object_id(id, "note")})
    if result.deleted_count == 0:
        raise HTTPException(404, "Note not found.")
    logger.info(f"Deleted note {id}")
    return {"success": True}
