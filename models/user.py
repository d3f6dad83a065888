# models/user.py
from pydantic import BaseModel, ConfigDict
from typing import Optional

class UserUpsert(BaseModel):
    clerkId: Optional[str] = None  # id issued by the identity provider
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None

class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
