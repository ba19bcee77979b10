from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class SchoolResponse(BaseModel):
    id: int
    name: str
    address: str
    city: str
    state: str
    contact: str
    image: Optional[str] = None
    email_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class SchoolListResponse(BaseModel):
    success: bool = True
    schools: List[SchoolResponse]


class SchoolCreatedResponse(BaseModel):
    success: bool = True
    message: str = "School added successfully"
    school_id: int = Field(alias="schoolId")

    class Config:
        populate_by_name = True
