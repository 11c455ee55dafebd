"""
Tests for the category hierarchy.
"""
import pytest
from ledger.core.exceptions import CategoryCycle, CategoryNotFound, DuplicateCategory
from ledger.models.category import Category
from ledger.services.category_service import CategoryForest


def _cat(category_id, parent_id=None):
    return Category(id=category_id, name=category_id.title(), parent_id=parent_id)


def _forest():
    return CategoryForest([
        _cat("food"),
        _cat("groceries", "food"),
        _cat("restaurants", "food"),
        _cat("fast-food", "restaurants"),
        _cat("home"),
    ])


def test_forest_structure():
    forest = _forest()
    assert len(forest) == 5
    assert [c.id for c in forest.roots()] == ["food", "home"]
    assert forest.ancestors("fast-food") == ["restaurants", "food"]
    assert sorted(forest.descendants("food")) == ["fast-food", "groceries", "restaurants"]


def test_children_may_precede_parents():
    forest = CategoryForest([_cat("fast-food", "restaurants"), _cat("restaurants", "food"), _cat("food")])
    assert forest.ancestors("fast-food") == ["restaurants", "food"]


def test_self_parent_rejected():
    forest = _forest()
    with pytest.raises(CategoryCycle):
        forest.add(_cat("loop", "loop"))
    with pytest.raises(CategoryCycle):
        forest.reparent("home", "home")


def test_reparent_under_descendant_rejected():
    forest = _forest()
    with pytest.raises(CategoryCycle):
        forest.reparent("food", "fast-food")
    assert forest.get("food").parent_id is None


def test_reparent():
    forest = _forest()
    forest.reparent("restaurants", "home")
    assert forest.ancestors("fast-food") == ["restaurants", "home"]
    forest.reparent("restaurants", None)
    assert forest.ancestors("restaurants") == []


def test_missing_parent():
    forest = _forest()
    with pytest.raises(CategoryNotFound):
        forest.add(_cat("orphan", "missing"))
    with pytest.raises(CategoryNotFound):
        CategoryForest([_cat("orphan", "missing")])


def test_cycle_in_input():
    with pytest.raises(CategoryCycle):
        CategoryForest([_cat("a", "b"), _cat("b", "a")])


def test_duplicate_id():
    forest = _forest()
    with pytest.raises(DuplicateCategory):
        forest.add(_cat("food"))
    with pytest.raises(DuplicateCategory):
        CategoryForest([_cat("c1"), _cat("c1")])
