from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.database import get_db
from app.schemas import (
    TreeRef,
    TreeResponse,
    InsectResponse,
    TreeWithInsects,
    InsectWithTrees,
    AssociationRequest,
    AssociationData,
    AssociationResponse
)
from app.services import AssociationService

router = APIRouter(tags=["associations"])

association_service = AssociationService()


@router.get("/trees-insects", response_model=List[TreeWithInsects])
async def trees_with_insects(db: AsyncSession = Depends(get_db)):
    """Trees that have insects nearby, tallest first, insects alphabetical"""
    trees = await association_service.trees_with_insects(db)
    return [TreeWithInsects.model_validate(tree) for tree in trees]


@router.get("/insects-trees", response_model=List[InsectWithTrees])
async def insects_with_trees(db: AsyncSession = Depends(get_db)):
    """Insects that have trees nearby, both alphabetical"""
    listing = await association_service.insects_with_trees(db)
    return [
        InsectWithTrees(
            id=insect.id,
            name=insect.name,
            description=insect.description,
            trees=[TreeRef.model_validate(tree) for tree in trees]
        )
        for insect, trees in listing
    ]


@router.post("/associate-tree-insect", response_model=AssociationResponse)
async def associate_tree_insect(
    payload: AssociationRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Record an insect found near a tree.

    Each side is looked up by id when given, otherwise by name, and created
    when no match exists. Linking an already linked pair returns 409.
    """
    tree, insect = await association_service.record(db, payload.tree, payload.insect)

    return AssociationResponse(
        message="Successfully recorded information",
        data=AssociationData(
            tree=TreeResponse.model_validate(tree),
            insect=InsectResponse.model_validate(insect)
        )
    )
