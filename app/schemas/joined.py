from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List

from app.schemas.tree import TreeRef, TreeResponse, TreeDescriptor
from app.schemas.insect import InsectRef, InsectResponse, InsectDescriptor


class TreeWithInsects(BaseModel):
    id: int
    tree: str
    location: str
    height_ft: float
    insects: List[InsectRef] = Field(default_factory=list, alias="Insects")

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class InsectWithTrees(BaseModel):
    id: int
    name: str
    description: str
    trees: List[TreeRef] = Field(default_factory=list, alias="Trees")

    class Config:
        from_attributes = True
        populate_by_name = True


class AssociationRequest(BaseModel):
    tree: TreeDescriptor
    insect: InsectDescriptor


class AssociationData(BaseModel):
    tree: TreeResponse
    insect: InsectResponse


class AssociationResponse(BaseModel):
    status: str = "success"
    message: str
    data: AssociationData
