"""
Lookup/Create resolver shared by trees and insects.

Each resolver knows its ORM model, the natural-key column, and how request
descriptor fields map onto model attributes. Writes are flushed, never
committed: the caller owns the unit of work.
"""
from typing import Dict, List, Sequence
import logging

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only

from app.exceptions import CreationError, NotFoundError, ValidationError
from app.models import Insect, Tree

logger = logging.getLogger(__name__)

# Primary keys are Integer columns: int4 on PostgreSQL
MAX_ID = 2**31 - 1


class EntityResolver:

    def __init__(
        self,
        model,
        label: str,
        natural_key: str,
        fields: Dict[str, str],
        order_by,
        summary: Sequence[str],
    ):
        """
        Args:
            model: ORM class
            label: lowercase entity name used in messages ("tree")
            natural_key: model attribute holding the unique name
            fields: descriptor field -> model attribute, all required on create
            order_by: ordering for list and search results
            summary: attributes loaded for list results
        """
        self.model = model
        self.label = label
        self.title = label.capitalize()
        self.natural_key = natural_key
        self.fields = fields
        self.order_by = order_by
        self.summary = summary

    @property
    def key_column(self):
        return getattr(self.model, self.natural_key)

    def _required_message(self) -> str:
        names = list(self.fields)
        return f"{', '.join(names[:-1])}, and {names[-1]}"

    def _not_found(self, raw_id, action: str) -> NotFoundError:
        return NotFoundError(
            f"Could not {action} {self.label} {raw_id}",
            details=f"{self.title} not found with id {raw_id}",
        )

    async def _get(self, db: AsyncSession, raw_id, action: str):
        try:
            entity_id = int(raw_id)
        except (TypeError, ValueError):
            raise self._not_found(raw_id, action)

        # Out-of-range ids cannot match a row and would overflow the driver
        if not 0 < entity_id <= MAX_ID:
            raise self._not_found(raw_id, action)

        result = await db.execute(
            select(self.model).where(self.model.id == entity_id)
        )
        entity = result.scalar_one_or_none()
        if entity is None:
            raise self._not_found(raw_id, action)
        return entity

    async def get(self, db: AsyncSession, raw_id):
        """Fetch by id; a non-numeric or out-of-range id is treated as not found"""
        return await self._get(db, raw_id, "find")

    async def find_by_name(self, db: AsyncSession, name: str):
        result = await db.execute(
            select(self.model).where(self.key_column == name)
        )
        return result.scalar_one_or_none()

    async def list_all(self, db: AsyncSession) -> List:
        result = await db.execute(
            select(self.model)
            .options(load_only(*[getattr(self.model, attr) for attr in self.summary]))
            .order_by(self.order_by)
        )
        return list(result.scalars().all())

    async def search(self, db: AsyncSession, keyword: str) -> List:
        """Natural-key substring match; case sensitivity follows the backend collation"""
        result = await db.execute(
            select(self.model)
            .where(self.key_column.contains(keyword, autoescape=True))
            .order_by(self.order_by)
        )
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, descriptor: BaseModel):
        values = descriptor.model_dump(exclude={"id"})

        missing = [field for field in self.fields if values.get(field) is None]
        if missing:
            logger.warning(f"Rejected {self.label}: missing {missing}")
            raise CreationError(
                f"Could not create new {self.label}",
                details=f"Missing {', '.join(missing)}! Must have values for {self._required_message()}!",
                errors=[f"{field} is required" for field in missing],
            )

        entity = self.model(**{attr: values[field] for field, attr in self.fields.items()})
        db.add(entity)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            logger.warning(f"Rejected {self.label}: duplicate name {values['name']!r}")
            raise CreationError(
                f"Could not create new {self.label}",
                details=f"{values['name']} is already in the database. Name must be unique.",
            )

        logger.info(f"Created {self.label} {entity.id} ({values['name']})")
        return entity

    async def resolve(self, db: AsyncSession, descriptor: BaseModel):
        """
        Turn a descriptor into a persisted entity.

        An explicit id must exist. Otherwise an entity with the same name is
        returned untouched, and only when there is none is a new one created.
        """
        if descriptor.id is not None:
            return await self.get(db, descriptor.id)

        if descriptor.name is not None:
            existing = await self.find_by_name(db, descriptor.name)
            if existing is not None:
                return existing

        return await self.create(db, descriptor)

    async def update(self, db: AsyncSession, raw_id, descriptor: BaseModel):
        """Overwrite only the truthy descriptor fields"""
        entity = await self._get(db, raw_id, "update")

        if descriptor.id is not None and descriptor.id != entity.id:
            raise ValidationError(
                f"Could not update {self.label} {entity.id}",
                details=f"{entity.id} does not match {descriptor.id}",
            )

        values = descriptor.model_dump(exclude={"id"})
        changed = []
        for field, attr in self.fields.items():
            value = values.get(field)
            if value:
                setattr(entity, attr, value)
                changed.append(attr)

        entity_id = entity.id
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise ValidationError(
                f"Could not update {self.label} {entity_id}",
                details="Validation failed",
                errors=[f"{self.natural_key} must be unique"],
            )

        logger.info(f"Updated {self.label} {entity_id}: {changed}")
        return entity

    async def delete(self, db: AsyncSession, raw_id) -> int:
        entity = await self._get(db, raw_id, "remove")
        entity_id = entity.id
        await db.delete(entity)
        await db.flush()
        logger.info(f"Deleted {self.label} {entity_id}")
        return entity_id


tree_resolver = EntityResolver(
    Tree,
    "tree",
    natural_key="tree",
    fields={
        "name": "tree",
        "location": "location",
        "height": "height_ft",
        "size": "ground_circumference_ft",
    },
    order_by=Tree.height_ft.desc(),
    summary=("height_ft", "tree", "id"),
)

insect_resolver = EntityResolver(
    Insect,
    "insect",
    natural_key="name",
    fields={
        "name": "name",
        "description": "description",
        "fact": "fact",
        "territory": "territory",
        "millimeters": "millimeters",
    },
    order_by=Insect.millimeters.asc(),
    summary=("id", "name", "millimeters"),
)
