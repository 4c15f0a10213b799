from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class TreeDescriptor(BaseModel):
    """Tree as sent by clients: creation, update and association payloads"""
    id: Optional[int] = None
    name: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    height: Optional[float] = None
    size: Optional[float] = None


class TreeSummary(BaseModel):
    height_ft: float
    tree: str
    id: int

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class TreeResponse(BaseModel):
    id: int
    tree: str
    location: str
    height_ft: float
    ground_circumference_ft: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class TreeRef(BaseModel):
    id: int
    tree: str

    class Config:
        from_attributes = True


class TreeEnvelope(BaseModel):
    status: str = "success"
    message: str
    data: TreeResponse
