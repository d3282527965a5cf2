"""
Tests for the category tree rules: path resolution, ancestry walks and the
create/update/delete invariants.
"""

import pytest

from app.controllers.category_controller import category_controller
from app.core.exceptions import ConflictError, InternalError, NotFoundError
from app.models.category_models import Category
from app.schemas.category_schemas import CategoryCreateSchema, CategoryUpdateSchema
from app.services.category_service import category_service


class TestResolvePath:

    def test_resolves_nested_path(self, db, electronics_tree):
        path = category_service.resolve_path(db, ["electronics", "laptops"])

        assert path.category.id == electronics_tree["laptops"].id
        assert [c.slug for c in path.breadcrumb] == ["electronics", "laptops"]
        assert [c.slug for c in path.children] == ["gaming"]
        assert path.is_leaf is False
        assert path.has_products is False

    def test_leaf_has_products(self, db, electronics_tree):
        path = category_service.resolve_path(db, ["electronics", "laptops", "gaming"])

        assert path.is_leaf is True
        assert path.has_products is True

    def test_empty_path_is_invalid(self, db):
        with pytest.raises(NotFoundError) as exc:
            category_service.resolve_path(db, [])
        assert exc.value.key == "category.invalidPath"

    def test_segment_must_be_child_of_previous(self, db, electronics_tree):
        # Gaming exists, but not directly under Electronics
        with pytest.raises(NotFoundError) as exc:
            category_service.resolve_path(db, ["electronics", "gaming"])
        assert exc.value.key == "category.categoryNotFound"

    def test_first_segment_must_be_root(self, db, electronics_tree):
        with pytest.raises(NotFoundError):
            category_service.resolve_path(db, ["laptops"])

    def test_inactive_segment_breaks_the_path(self, db, electronics_tree):
        electronics_tree["laptops"].is_active = False
        db.commit()

        with pytest.raises(NotFoundError):
            category_service.resolve_path(db, ["electronics", "laptops"])


class TestAncestry:

    def test_breadcrumb_is_root_first(self, db, electronics_tree):
        crumbs = category_service.breadcrumb(db, electronics_tree["gaming"].id)

        assert [c.name for c in crumbs] == ["Electronics", "Laptops", "Gaming"]

    def test_subtree_excludes_the_category_itself(self, db, electronics_tree):
        ids = category_service.subtree_ids(db, electronics_tree["electronics"].id)

        assert set(ids) == {electronics_tree["laptops"].id, electronics_tree["gaming"].id}

    def test_subtree_of_leaf_is_empty(self, db, electronics_tree):
        assert category_service.subtree_ids(db, electronics_tree["gaming"].id) == []

    def test_tree_nests_children(self, db, electronics_tree):
        roots = category_service.category_tree(db)

        assert [r.name for r in roots] == ["Electronics", "Home"]
        laptops = roots[0].children[0]
        assert laptops.name == "Laptops"
        assert [c.name for c in laptops.children] == ["Gaming"]

    def test_tree_shows_node_with_filtered_parent_as_root(self, db, electronics_tree):
        electronics_tree["electronics"].is_active = False
        db.commit()

        roots = category_service.category_tree(db)

        assert "Laptops" in [r.name for r in roots]


class TestCreate:

    def test_slug_collision_gets_suffix(self, db):
        first = category_service.create(db, CategoryCreateSchema(name="Shoes"))
        second = category_service.create(db, CategoryCreateSchema(name="Shoes!"))

        assert first.slug == "shoes"
        assert second.slug == "shoes-1"

    def test_name_is_unique_case_insensitive(self, db):
        category_service.create(db, CategoryCreateSchema(name="Books"))

        with pytest.raises(ConflictError) as exc:
            category_service.create(db, CategoryCreateSchema(name="books"))
        assert exc.value.key == "category.nameExists"

    def test_unknown_parent(self, db):
        with pytest.raises(NotFoundError) as exc:
            category_service.create(
                db, CategoryCreateSchema(name="Orphan", parent_id="missing")
            )
        assert exc.value.key == "category.parentNotFound"

    def test_child_of_inactive_parent_starts_inactive(self, db, electronics_tree):
        category_service.deactivate(db, electronics_tree["electronics"].id)

        tablets = category_service.create(
            db,
            CategoryCreateSchema(name="Tablets", parent_id=electronics_tree["electronics"].id),
        )

        assert tablets.is_active is False

    def test_slug_exhaustion_is_internal_error(self, db, monkeypatch):
        monkeypatch.setattr(
            category_controller, "slug_exists", lambda db, slug, exclude_id=None: True
        )

        with pytest.raises(InternalError) as exc:
            category_service.create(db, CategoryCreateSchema(name="Shoes"))
        assert exc.value.key == "category.slugExhausted"
        assert exc.value.status_code == 500


class TestUpdate:

    def test_cannot_be_its_own_parent(self, db, electronics_tree):
        laptops = electronics_tree["laptops"]

        with pytest.raises(ConflictError) as exc:
            category_service.update(
                db, laptops.id, CategoryUpdateSchema(parent_id=laptops.id)
            )
        assert exc.value.key == "category.circularReference"

    def test_cannot_move_under_descendant(self, db, electronics_tree):
        with pytest.raises(ConflictError) as exc:
            category_service.update(
                db,
                electronics_tree["electronics"].id,
                CategoryUpdateSchema(parent_id=electronics_tree["gaming"].id),
            )
        assert exc.value.key == "category.circularReference"

    def test_move_to_unrelated_parent(self, db, electronics_tree):
        gaming = category_service.update(
            db,
            electronics_tree["gaming"].id,
            CategoryUpdateSchema(parent_id=electronics_tree["home"].id),
        )

        assert gaming.parent_id == electronics_tree["home"].id

    def test_explicit_null_parent_moves_to_root(self, db, electronics_tree):
        laptops = category_service.update(
            db, electronics_tree["laptops"].id, CategoryUpdateSchema(parent_id=None)
        )

        assert laptops.parent_id is None

    def test_omitted_parent_keeps_parent(self, db, electronics_tree):
        laptops = category_service.update(
            db, electronics_tree["laptops"].id, CategoryUpdateSchema(name_ar="حواسيب")
        )

        assert laptops.parent_id == electronics_tree["electronics"].id

    def test_rename_regenerates_slug(self, db, electronics_tree):
        laptops = category_service.update(
            db, electronics_tree["laptops"].id, CategoryUpdateSchema(name="Notebooks")
        )

        assert laptops.slug == "notebooks"


class TestActivation:

    def test_deactivate_cascades_to_descendants(self, db, electronics_tree):
        updated = category_service.deactivate(db, electronics_tree["electronics"].id)

        assert updated == 3
        states = {c.name: c.is_active for c in db.query(Category).all()}
        assert states == {
            "Electronics": False,
            "Laptops": False,
            "Gaming": False,
            "Home": True,
        }

    def test_update_with_inactive_flag_cascades(self, db, electronics_tree):
        category_service.update(
            db, electronics_tree["electronics"].id, CategoryUpdateSchema(is_active=False)
        )

        db.expire_all()
        states = {c.name: c.is_active for c in db.query(Category).all()}
        assert states == {
            "Electronics": False,
            "Laptops": False,
            "Gaming": False,
            "Home": True,
        }

    def test_move_under_inactive_parent_deactivates_subtree(self, db, electronics_tree):
        category_service.deactivate(db, electronics_tree["home"].id)

        category_service.update(
            db,
            electronics_tree["laptops"].id,
            CategoryUpdateSchema(parent_id=electronics_tree["home"].id),
        )

        db.expire_all()
        assert electronics_tree["laptops"].is_active is False
        assert electronics_tree["gaming"].is_active is False
        assert electronics_tree["electronics"].is_active is True

    def test_activate_touches_only_the_category(self, db, electronics_tree):
        category_service.deactivate(db, electronics_tree["electronics"].id)

        category_service.activate(db, electronics_tree["electronics"].id)

        db.expire_all()
        assert electronics_tree["electronics"].is_active is True
        assert electronics_tree["laptops"].is_active is False


class TestDelete:

    def test_category_with_children(self, db, electronics_tree):
        with pytest.raises(ConflictError) as exc:
            category_service.delete(db, electronics_tree["laptops"].id)
        assert exc.value.key == "category.hasChildren"

    def test_category_with_products(self, db, electronics_tree, make_product):
        make_product("Console", electronics_tree["gaming"])

        with pytest.raises(ConflictError) as exc:
            category_service.delete(db, electronics_tree["gaming"].id)
        assert exc.value.key == "category.hasProducts"

    def test_deletes_empty_leaf(self, db, make_category):
        leaf = make_category("Leaf", attributes=[])

        category_service.delete(db, leaf.id)

        assert db.get(Category, leaf.id) is None

    def test_missing_category(self, db):
        with pytest.raises(NotFoundError):
            category_service.delete(db, "missing")
