"""
Many-to-many links between trees and insects.

Duplicate pairs are rejected twice over: a read of the tree's current
insects gives the friendly error, and the unique constraint on
insect_trees catches concurrent requests that both pass the read.
"""
from typing import List, Tuple
import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.exceptions import AssociationError, CreationError
from app.models import Insect, InsectTree, Tree
from app.schemas import InsectDescriptor, TreeDescriptor
from app.services.resolver_service import EntityResolver, insect_resolver, tree_resolver

logger = logging.getLogger(__name__)


class AssociationService:

    def __init__(
        self,
        trees: EntityResolver = tree_resolver,
        insects: EntityResolver = insect_resolver,
    ):
        self.trees = trees
        self.insects = insects

    async def linked_insects(self, db: AsyncSession, tree: Tree) -> List[Insect]:
        result = await db.execute(
            select(Insect)
            .join(InsectTree, InsectTree.insect_id == Insect.id)
            .where(InsectTree.tree_id == tree.id)
            .order_by(Insect.name)
        )
        return list(result.scalars().all())

    async def linked_trees(self, db: AsyncSession, insect: Insect) -> List[Tree]:
        result = await db.execute(
            select(Tree)
            .join(InsectTree, InsectTree.tree_id == Tree.id)
            .where(InsectTree.insect_id == insect.id)
            .order_by(Tree.tree)
        )
        return list(result.scalars().all())

    async def trees_with_insects(self, db: AsyncSession) -> List[Tree]:
        """Eager: one joined query, trees without insects drop out of the inner join"""
        result = await db.execute(
            select(Tree)
            .join(Tree.insects)
            .options(contains_eager(Tree.insects))
            .order_by(Tree.height_ft.desc(), Tree.id, Insect.name)
            .execution_options(populate_existing=True)
        )
        return list(result.unique().scalars().all())

    async def insects_with_trees(self, db: AsyncSession) -> List[Tuple[Insect, List[Tree]]]:
        """Lazy: one follow-up query per insect, insects without trees are skipped"""
        result = await db.execute(select(Insect).order_by(Insect.name))
        listing = []
        for insect in result.scalars().all():
            trees = await self.linked_trees(db, insect)
            if trees:
                listing.append((insect, trees))
        return listing

    def _duplicate(self, tree: Tree, insect: Insect) -> AssociationError:
        return AssociationError(
            f"Association already exists between {tree.tree} and {insect.name}",
            details=f"Tree {tree.id} is already linked to insect {insect.id}",
        )

    async def associate(self, db: AsyncSession, tree: Tree, insect: Insect) -> InsectTree:
        """Insert one link, or raise AssociationError if the pair is already linked"""
        # Read everything needed for messages before a rollback expires the instances
        tree_id, insect_id = tree.id, insect.id
        duplicate = self._duplicate(tree, insect)

        linked = await self.linked_insects(db, tree)
        if any(existing.id == insect_id for existing in linked):
            logger.warning(f"Duplicate association tree={tree_id} insect={insect_id}")
            raise duplicate

        link = InsectTree(insect_id=insect_id, tree_id=tree_id)
        db.add(link)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            logger.warning(f"Duplicate association tree={tree_id} insect={insect_id} (constraint)")
            raise duplicate

        logger.info(f"Linked tree {tree_id} to insect {insect_id}")
        return link

    async def dissociate(self, db: AsyncSession, tree: Tree, insect: Insect) -> int:
        result = await db.execute(
            delete(InsectTree)
            .where(InsectTree.tree_id == tree.id)
            .where(InsectTree.insect_id == insect.id)
        )
        await db.flush()
        return result.rowcount

    async def record(
        self,
        db: AsyncSession,
        tree_descriptor: TreeDescriptor,
        insect_descriptor: InsectDescriptor,
    ) -> Tuple[Tree, Insect]:
        """
        Find or create both sides, then link them.

        The tree is resolved before the insect. Everything is committed
        together, so a failure on either side leaves nothing behind.
        """
        try:
            tree = await self.trees.resolve(db, tree_descriptor)
            insect = await self.insects.resolve(db, insect_descriptor)
        except CreationError as e:
            await db.rollback()
            raise CreationError("Could not create association", details=e.details, errors=e.errors)

        await self.associate(db, tree, insect)
        await db.commit()
        await db.refresh(tree)
        await db.refresh(insect)
        return tree, insect
