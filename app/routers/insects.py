from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.database import get_db
from app.exceptions import NotFoundError
from app.schemas.insect import InsectDescriptor, InsectSummary, InsectResponse
from app.services import insect_resolver

router = APIRouter(prefix="/insects", tags=["insects"])


@router.get("", response_model=List[InsectSummary])
async def list_insects(db: AsyncSession = Depends(get_db)):
    """All insects, smallest first"""
    insects = await insect_resolver.list_all(db)
    return [InsectSummary.model_validate(insect) for insect in insects]


@router.get("/search/{name}", response_model=List[InsectResponse])
async def search_insects(name: str, db: AsyncSession = Depends(get_db)):
    insects = await insect_resolver.search(db, name)
    if not insects:
        raise NotFoundError(
            "Invalid search",
            details=f"No insects found with the keywords {name}"
        )
    return [InsectResponse.model_validate(insect) for insect in insects]


@router.get("/{insect_id}", response_model=InsectResponse)
async def get_insect(insect_id: str, db: AsyncSession = Depends(get_db)):
    insect = await insect_resolver.get(db, insect_id)
    return InsectResponse.model_validate(insect)


@router.post("", response_model=InsectResponse, status_code=201)
async def create_insect(payload: InsectDescriptor, db: AsyncSession = Depends(get_db)):
    """Create insect; name, description, fact, territory and millimeters are all required"""
    insect = await insect_resolver.create(db, payload)
    await db.commit()
    await db.refresh(insect)
    return InsectResponse.model_validate(insect)


@router.api_route("/{insect_id}", methods=["PUT", "PATCH"], response_model=InsectResponse)
async def update_insect(
    insect_id: str,
    payload: InsectDescriptor,
    db: AsyncSession = Depends(get_db)
):
    insect = await insect_resolver.update(db, insect_id, payload)
    await db.commit()
    await db.refresh(insect)
    return InsectResponse.model_validate(insect)


@router.delete("/{insect_id}")
async def delete_insect(insect_id: str, db: AsyncSession = Depends(get_db)):
    removed_id = await insect_resolver.delete(db, insect_id)
    await db.commit()

    return {
        "status": "success",
        "message": f"Successfully deleted insect with id {removed_id}"
    }
