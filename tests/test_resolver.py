"""
Tests for EntityResolver: lookup by id, lookup by name, and creation.
"""

import pytest
from sqlalchemy import func, select

from app.exceptions import CreationError, NotFoundError, ValidationError
from app.models import Insect, Tree
from app.schemas import InsectDescriptor, TreeDescriptor
from app.services import insect_resolver, tree_resolver


async def _count(db, model):
    result = await db.execute(select(func.count(model.id)))
    return result.scalar()


def _stagg(**overrides):
    values = dict(name="Stagg", location="Private Land", height=243, size=109)
    values.update(overrides)
    return TreeDescriptor(**values)


class TestResolve:

    def test_creates_when_unknown(self, run):
        async def scenario(db):
            tree = await tree_resolver.resolve(db, _stagg())
            await db.commit()
            return tree.id, tree.tree, await _count(db, Tree)

        tree_id, name, count = run(scenario)
        assert tree_id > 0
        assert name == "Stagg"
        assert count == 1

    def test_existing_name_returned_unchanged(self, run):
        async def scenario(db):
            original = await tree_resolver.resolve(db, _stagg())
            await db.commit()
            again = await tree_resolver.resolve(db, _stagg(location="Somewhere else", height=1))
            return original.id, again.id, again.location, again.height_ft, await _count(db, Tree)

        original_id, again_id, location, height, count = run(scenario)
        assert again_id == original_id
        assert location == "Private Land"
        assert height == 243
        assert count == 1

    def test_name_only_for_existing_entity(self, run):
        async def scenario(db):
            await tree_resolver.resolve(db, _stagg())
            await db.commit()
            found = await tree_resolver.resolve(db, TreeDescriptor(name="Stagg"))
            return found.tree

        assert run(scenario) == "Stagg"

    def test_unknown_id_never_creates(self, run):
        async def scenario(db):
            with pytest.raises(NotFoundError) as exc_info:
                await tree_resolver.resolve(db, _stagg(id=123))
            return exc_info.value, await _count(db, Tree)

        error, count = run(scenario)
        assert error.message == "Could not find tree 123"
        assert count == 0

    def test_missing_required_fields(self, run):
        async def scenario(db):
            with pytest.raises(CreationError) as exc_info:
                await insect_resolver.resolve(db, InsectDescriptor(name="Firefly", millimeters=15))
            return exc_info.value

        error = run(scenario)
        assert error.errors == ["description is required", "fact is required", "territory is required"]
        assert "name, description, fact, territory, and millimeters" in error.details

    def test_no_name_and_no_id(self, run):
        async def scenario(db):
            with pytest.raises(CreationError) as exc_info:
                await tree_resolver.resolve(db, TreeDescriptor(location="Nowhere"))
            return exc_info.value

        assert "name is required" in run(scenario).errors


class TestCreate:

    def test_duplicate_name_raises_creation_error(self, run):
        async def scenario(db):
            await tree_resolver.create(db, _stagg())
            await db.commit()
            with pytest.raises(CreationError) as exc_info:
                await tree_resolver.create(db, _stagg())
            return exc_info.value, await _count(db, Tree)

        error, count = run(scenario)
        assert error.details == "Stagg is already in the database. Name must be unique."
        assert count == 1


class TestUpdateAndDelete:

    def test_truthy_fields_overwrite(self, run):
        async def scenario(db):
            tree = await tree_resolver.create(db, _stagg())
            await db.commit()
            updated = await tree_resolver.update(
                db, tree.id, TreeDescriptor(location="Camp Nelson", height=0, name="")
            )
            await db.commit()
            return updated.tree, updated.location, updated.height_ft

        assert run(scenario) == ("Stagg", "Camp Nelson", 243)

    def test_body_id_mismatch(self, run):
        async def scenario(db):
            tree = await tree_resolver.create(db, _stagg())
            await db.commit()
            with pytest.raises(ValidationError) as exc_info:
                await tree_resolver.update(db, str(tree.id), TreeDescriptor(id=tree.id + 1))
            return tree.id, exc_info.value

        tree_id, error = run(scenario)
        assert error.details == f"{tree_id} does not match {tree_id + 1}"

    def test_delete_missing(self, run):
        async def scenario(db):
            with pytest.raises(NotFoundError) as exc_info:
                await insect_resolver.delete(db, "9")
            return exc_info.value

        assert run(scenario).message == "Could not remove insect 9"

    def test_delete(self, run):
        async def scenario(db):
            insect = await insect_resolver.create(db, InsectDescriptor(
                name="Firefly", description="Glows", fact="Bioluminescent",
                territory="Everywhere warm", millimeters=15,
            ))
            await db.commit()
            await insect_resolver.delete(db, insect.id)
            await db.commit()
            return await _count(db, Insect)

        assert run(scenario) == 0


class TestListAndSearch:

    def test_search_orders_like_list(self, run, seeded):
        async def scenario(db):
            found = await tree_resolver.search(db, "e")
            listed = await tree_resolver.list_all(db)
            return [t.tree for t in found], [t.tree for t in listed]

        found, listed = run(scenario)
        assert found == [name for name in listed if "e" in name.lower()]


class TestIdRange:

    def test_out_of_range_id_is_not_found(self, run):
        async def scenario(db):
            with pytest.raises(NotFoundError) as exc_info:
                await tree_resolver.resolve(db, TreeDescriptor(id=2**63))
            return exc_info.value

        assert run(scenario).message == f"Could not find tree {2**63}"
