# models/classroom.py
import re
from pydantic import BaseModel, ConfigDict
from typing import Optional

CLASS_CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6}")

def is_valid_class_code(code: str) -> bool:
    return bool(CLASS_CODE_PATTERN.fullmatch(code))

class ClassroomCreate(BaseModel):
    institutionType: Optional[str] = None  # e.g. "school", "university"
    institutionName: Optional[str] = None
    classroomName: Optional[str] = None
    classCode: Optional[str] = None
    department: Optional[str] = None
    classOrGrade: Optional[str] = None
    section: Optional[str] = None
    capacity: Optional[int] = None

class ClassroomUpdate(ClassroomCreate):
    model_config = ConfigDict(extra="forbid")

class JoinRequest(BaseModel):
    classCode: Optional[str] = None
    displayName: Optional[str] = None
