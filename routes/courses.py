# routes/courses.py
from fastapi import APIRouter, HTTPException, Depends
from typing import Optional
import logging
from database import Database, get_db
from models.course import CourseCreate, CourseUpdate
from .common import parse_object_id, require_payload, serialize, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])

@router.post("", status_code=201)
async def create_course(course: CourseCreate, db: Database = Depends(get_db)):
    if not course.title or not course.faculty:
        raise HTTPException(400, "title and faculty are required fields.")

    now = utcnow()
    course_dict = {
        "title": course.title,
        "faculty": course.faculty,
        # falsy optionals ("" or 0) are stored as null, as existing clients expect
        "code": course.code or None,
        "description": course.description or None,
        "semester": course.semester or None,
        "credits": course.credits or None,
        "noteCount": 0,
        "createdAt": now,
        "updatedAt": now,
    }
    result = await db.courses.insert_one(course_dict)
    course_dict["_id"] = result.inserted_id
    logger.info(f"Created course {result.inserted_id}: {course.title}")
    return serialize({"success": True, "course": course_dict})

@router.get("")
async def get_courses(db: Database = Depends(get_db)):
    courses = await db.courses.find({}).to_list(None)
    return serialize(courses)

@router.get("/{id}")
async def get_course(id: str, db: Database = Depends(get_db)):
    course = await db.courses.find_one({"_id": parse_object_id(id, "course")})
    if not course:
        raise HTTPException(404, "Course not found.")
    return serialize(course)

@router.put("/{id}")
async def update_course(id: str, course: Optional[CourseUpdate] = None, db: Database = Depends(get_db)):
    update = course.model_dump(exclude_unset=True) if course else {}
    require_payload(update)
    course_id = parse_object_id(id, "course")

    update["updatedAt"] = utcnow()
    result = await db.courses.update_one({"_id": course_id}, {"$set": update})
    if result.matched_count == 0:
        raise HTTPException(404, "Course not found.")
    logger.info(f"Updated course {id}: {sorted(update)}")
    return {"success": True}

@router.delete("/{id}")
async def delete_course(id: str, db: Database = Depends(get_db)):
    result = await db.courses.delete_one({"_id": parse_object_id(id, "course")})
    if result.deleted_count == 0:
        raise HTTPException(404, "Course not found.")
    logger.info(f"Deleted course {id}")
    return {"success": True}
