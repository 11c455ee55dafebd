"""
Category hierarchy.

Categories reference their parent by id. The forest rejects any insert or
re-parent that would make a category its own ancestor.
"""
from typing import Dict, Iterable, List, Optional

from ledger.core.exceptions import CategoryCycle, CategoryNotFound, DuplicateCategory
from ledger.models.category import Category


class CategoryForest:
    """Acyclic parent/child structure over categories."""

    def __init__(self, categories: Iterable[Category] = ()):
        self._nodes: Dict[str, Category] = {}
        pending = list(categories)
        # Parents may come after their children in the input
        while pending:
            remaining = []
            for category in pending:
                if category.parent_id is None or category.parent_id in self._nodes:
                    self.add(category)
                else:
                    remaining.append(category)
            if len(remaining) == len(pending):
                ids = {c.id for c in pending}
                orphan = next((c for c in pending if c.parent_id not in ids), None)
                if orphan is not None:
                    raise CategoryNotFound(f"Parent category {orphan.parent_id} not found")
                raise CategoryCycle(
                    "Categories form a cycle: " + ", ".join(sorted(ids))
                )
            pending = remaining

    def __contains__(self, category_id: str) -> bool:
        return category_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, category_id: str) -> Category:
        try:
            return self._nodes[category_id]
        except KeyError:
            raise CategoryNotFound(f"Category {category_id} not found") from None

    def add(self, category: Category) -> Category:
        if category.id in self._nodes:
            raise DuplicateCategory(f"Category {category.id} already exists")
        self._check_parent(category.id, category.parent_id)
        self._nodes[category.id] = category
        return category

    def reparent(self, category_id: str, parent_id: Optional[str]) -> Category:
        """Move a category under ``parent_id`` (or to the top level with None)."""
        category = self.get(category_id)
        self._check_parent(category_id, parent_id)
        category.parent_id = parent_id
        return category

    def _check_parent(self, category_id: str, parent_id: Optional[str]) -> None:
        if parent_id is None:
            return
        if parent_id == category_id:
            raise CategoryCycle(f"Category {category_id} cannot be its own parent")
        if parent_id not in self._nodes:
            raise CategoryNotFound(f"Parent category {parent_id} not found")
        if category_id in self.ancestors(parent_id):
            raise CategoryCycle(
                f"Moving {category_id} under {parent_id} would make it its own ancestor"
            )

    def ancestors(self, category_id: str) -> List[str]:
        """Parent chain from the direct parent up to the root."""
        chain = []
        parent_id = self.get(category_id).parent_id
        while parent_id is not None:
            chain.append(parent_id)
            parent_id = self._nodes[parent_id].parent_id
        return chain

    def children(self, category_id: Optional[str]) -> List[Category]:
        return [c for c in self._nodes.values() if c.parent_id == category_id]

    def roots(self) -> List[Category]:
        return self.children(None)

    def descendants(self, category_id: str) -> List[str]:
        found = []
        stack = [category_id]
        while stack:
            for child in self.children(stack.pop()):
                found.append(child.id)
                stack.append(child.id)
        return found
