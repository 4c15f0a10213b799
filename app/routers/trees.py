from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.database import get_db
from app.schemas.tree import TreeDescriptor, TreeSummary, TreeResponse, TreeEnvelope
from app.services import tree_resolver

router = APIRouter(prefix="/trees", tags=["trees"])


@router.get("", response_model=List[TreeSummary])
async def list_trees(db: AsyncSession = Depends(get_db)):
    """All trees, tallest first"""
    trees = await tree_resolver.list_all(db)
    return [TreeSummary.model_validate(tree) for tree in trees]


@router.get("/search/{value}", response_model=List[TreeSummary])
async def search_trees(value: str, db: AsyncSession = Depends(get_db)):
    """Trees whose name contains the value, tallest first"""
    trees = await tree_resolver.search(db, value)
    return [TreeSummary.model_validate(tree) for tree in trees]


@router.get("/{tree_id}", response_model=TreeResponse)
async def get_tree(tree_id: str, db: AsyncSession = Depends(get_db)):
    tree = await tree_resolver.get(db, tree_id)
    return TreeResponse.model_validate(tree)


@router.post("", response_model=TreeEnvelope)
async def create_tree(payload: TreeDescriptor, db: AsyncSession = Depends(get_db)):
    """Create a tree from name, location, height and size"""
    tree = await tree_resolver.create(db, payload)
    await db.commit()
    await db.refresh(tree)

    return TreeEnvelope(
        message="Successfully created new tree",
        data=TreeResponse.model_validate(tree)
    )


@router.put("/{tree_id}", response_model=TreeEnvelope)
async def update_tree(
    tree_id: str,
    payload: TreeDescriptor,
    db: AsyncSession = Depends(get_db)
):
    """Update tree; empty or missing fields keep their stored value"""
    tree = await tree_resolver.update(db, tree_id, payload)
    await db.commit()
    await db.refresh(tree)

    return TreeEnvelope(
        message="Successfully updated tree",
        data=TreeResponse.model_validate(tree)
    )


@router.delete("/{tree_id}")
async def delete_tree(tree_id: str, db: AsyncSession = Depends(get_db)):
    """Delete tree, its insect links go with it"""
    removed_id = await tree_resolver.delete(db, tree_id)
    await db.commit()

    return {
        "status": "success",
        "message": f"Successfully removed tree {removed_id}"
    }
