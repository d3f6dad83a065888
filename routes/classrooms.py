# routes/classrooms.py
from fastapi import APIRouter, HTTPException, Depends
from pymongo.errors import DuplicateKeyError
from typing import Optional
import logging
from database import Database, get_db
from models.classroom import ClassroomCreate, ClassroomUpdate, JoinRequest, is_valid_class_code
from .common import parse_object_id, require_payload, serialize, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/classrooms", tags=["classrooms"])

INVALID_CODE = "classCode must be exactly 6 letters or digits."
DUPLICATE_CODE = "classCode already exists."

@router.post("/join")
async def join_classroom(request: JoinRequest, db: Database = Depends(get_db)):
    # Membership is not recorded; the caller only gets the classroom back.
    if not request.classCode:
        raise HTTPException(400, "classCode is required.")

    classroom = await db.classrooms.find_one({"classCode": request.classCode})
    if not classroom:
        raise HTTPException(404, "Classroom not found.")
    logger.info(f"{request.displayName or 'Anonymous'} joined classroom {request.classCode}")
    return serialize({"success": True, "classroom": classroom, "displayName": request.displayName})

@router.post("", status_code=201)
async def create_classroom(classroom: ClassroomCreate, db: Database = Depends(get_db)):
    if not (classroom.institutionType and classroom.institutionName
            and classroom.classroomName and classroom.classCode):
        raise HTTPException(
            400, "institutionType, institutionName, classroomName and classCode are required fields."
        )
    if not is_valid_class_code(classroom.classCode):
        raise HTTPException(400, INVALID_CODE)
    if await db.classrooms.find_one({"classCode": classroom.classCode}):
        raise HTTPException(409, DUPLICATE_CODE)

    now = utcnow()
    classroom_dict = {
        "institutionType": classroom.institutionType,
        "institutionName": classroom.institutionName,
        "classroomName": classroom.classroomName,
        "classCode": classroom.classCode,
        # falsy optionals ("" or 0) are stored as null, as existing clients expect
        "department": classroom.department or None,
        "classOrGrade": classroom.classOrGrade or None,
        "section": classroom.section or None,
        "capacity": classroom.capacity or None,
        "memberCount": 0,
        "createdAt": now,
        "updatedAt": now,
    }
    try:
        result = await db.classrooms.insert_one(classroom_dict)
    except DuplicateKeyError:
        # lost the race against a concurrent create with the same code
        raise HTTPException(409, DUPLICATE_CODE)
    classroom_dict["_id"] = result.inserted_id
    logger.info(f"Created classroom {result.inserted_id} with code {classroom.classCode}")
    return serialize({"success": True, "classroom": classroom_dict})

@router.get("")
async def get_classrooms(db: Database = Depends(get_db)):
    classrooms = await db.classrooms.find({}).to_list(None)
    return serialize(classrooms)

@router.get("/{id}")
async def get_classroom(id: str, db: Database = Depends(get_db)):
    classroom = await db.classrooms.find_one({"_id": parse_object_id(id, "classroom")})
    if not classroom:
        raise HTTPException(404, "Classroom not found.")
    return serialize(classroom)

@router.put("/{id}")
async def update_classroom(id: str, classroom: Optional[ClassroomUpdate] = None, db: Database = Depends(get_db)):
    update = classroom.model_dump(exclude_unset=True) if classroom else {}
    require_payload(update)
    classroom_id = parse_object_id(id, "classroom")

    if "classCode" in update:
        if not update["classCode"] or not is_valid_class_code(update["classCode"]):
            raise HTTPException(400, INVALID_CODE)
        if await db.classrooms.find_one({"classCode": update["classCode"], "_id": {"$ne": classroom_id}}):
            raise HTTPException(409, DUPLICATE_CODE)

    update["updatedAt"] = utcnow()
    try:
        result = await db.classrooms.update_one({"_id": classroom_id}, {"$set": update})
    except DuplicateKeyError:
        raise HTTPException(409, DUPLICATE_CODE)
    if result.matched_count == 0:
        raise HTTPException(404, "Classroom not found.")
    logger.info(f"Updated classroom {id}: {sorted(update)}")
    return {"success": True}

@router.delete("/{id}")
async def delete_classroom(id: str, db: Database = Depends(get_db)):
    result = await db.classrooms.delete_one({"_id": parse_object_id(id, "classroom")})
    if result.deleted_count == 0:
        raise HTTPException(404, "Classroom not found.")
    logger.info(f"Deleted classroom {id}")
    return {"success": True}
