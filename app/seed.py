"""
Starter data: a handful of famous trees, some insects and where they were seen.

Usage: python -m app.seed [up|down]

`up` find-or-creates the trees and insects and links them, skipping links
that already exist. `down` removes the starter links only.
"""
import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import AsyncSessionLocal, init_db
from app.exceptions import AssociationError
from app.schemas import InsectDescriptor, TreeDescriptor
from app.services import AssociationService, insect_resolver, tree_resolver

logger = logging.getLogger(__name__)

TREES = [
    TreeDescriptor(name="General Sherman", location="Sequoia National Park", height=274.9, size=102.6),
    TreeDescriptor(name="General Grant", location="Kings Canyon National Park", height=268.1, size=107.5),
    TreeDescriptor(name="President", location="Sequoia National Park", height=240.9, size=93),
    TreeDescriptor(name="Lincoln", location="Sequoia National Park", height=255.8, size=98.3),
    TreeDescriptor(name="Stagg", location="Private Land", height=243, size=109),
]

INSECTS = [
    InsectDescriptor(
        name="Western Pygmy Blue Butterfly",
        description="Copper-brown wings with a dull blue base, among the smallest butterflies in North America",
        fact="Wingspan can be as small as half an inch",
        territory="North America and Hawaii",
        millimeters=12,
    ),
    InsectDescriptor(
        name="Patu Digua Spider",
        description="Tiny orb-weaving spider found in leaf litter",
        fact="One of the smallest spiders ever described",
        territory="Colombia",
        millimeters=0.37,
    ),
    InsectDescriptor(
        name="Spotted Lanternfly",
        description="Planthopper with grey forewings and bright red hindwings",
        fact="Invasive pest that feeds on the sap of more than 70 plant species",
        territory="East Asia, spreading through eastern United States",
        millimeters=25,
    ),
]

# insect name -> names of trees it was seen near
LINKS = {
    "Western Pygmy Blue Butterfly": ["General Sherman", "General Grant", "Lincoln", "Stagg"],
    "Patu Digua Spider": ["Stagg"],
}


async def _linked_pairs(db: AsyncSession):
    for insect_name, tree_names in LINKS.items():
        for tree_name in tree_names:
            # Looked up per pair: a rollback between pairs expires earlier instances
            insect = await insect_resolver.find_by_name(db, insect_name)
            tree = await tree_resolver.find_by_name(db, tree_name)
            if insect is None or tree is None:
                logger.warning(f"Skipping {insect_name} / {tree_name}: not found")
                continue
            yield tree_name, insect_name, tree, insect


async def seed(db: AsyncSession, associations: AssociationService = None) -> int:
    """Insert starter rows; returns the number of new links"""
    associations = associations or AssociationService()

    for descriptor in TREES:
        await tree_resolver.resolve(db, descriptor)
    for descriptor in INSECTS:
        await insect_resolver.resolve(db, descriptor)
    await db.commit()

    # One commit per link so a rejected insert only rolls back itself
    created = 0
    async for tree_name, insect_name, tree, insect in _linked_pairs(db):
        try:
            await associations.associate(db, tree, insect)
            await db.commit()
            created += 1
        except AssociationError:
            logger.info(f"Already linked: {tree_name} / {insect_name}")

    logger.info(f"Seeded {created} links")
    return created


async def unseed(db: AsyncSession, associations: AssociationService = None) -> int:
    """Remove the starter links; returns the number of links removed"""
    associations = associations or AssociationService()

    removed = 0
    async for _, _, tree, insect in _linked_pairs(db):
        removed += await associations.dissociate(db, tree, insect)

    await db.commit()
    logger.info(f"Removed {removed} links")
    return removed


async def _run(direction: str) -> None:
    await init_db()
    async with AsyncSessionLocal() as session:
        if direction == "up":
            await seed(session)
        else:
            await unseed(session)


def main():
    parser = argparse.ArgumentParser(description="Seed or unseed starter trees and insects")
    parser.add_argument("direction", choices=["up", "down"], nargs="?", default="up")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    asyncio.run(_run(args.direction))


if __name__ == "__main__":
    main()
