# models/course.py
from pydantic import BaseModel, ConfigDict
from typing import Optional, Union

class CourseCreate(BaseModel):
    title: Optional[str] = None
    faculty: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    semester: Optional[str] = None
    credits: Optional[Union[int, float]] = None

class CourseUpdate(CourseCreate):
    # noteCount and timestamps are server-owned
    model_config = ConfigDict(extra="forbid")
