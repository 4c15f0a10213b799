from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class InsectDescriptor(BaseModel):
    """Insect as sent by clients: creation, update and association payloads"""
    id: Optional[int] = None
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    fact: Optional[str] = None
    territory: Optional[str] = Field(None, max_length=255)
    millimeters: Optional[float] = None


class InsectSummary(BaseModel):
    id: int
    name: str
    millimeters: float

    class Config:
        from_attributes = True


class InsectResponse(BaseModel):
    id: int
    name: str
    description: str
    fact: str
    territory: str
    millimeters: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class InsectRef(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
