"""Ordering of skill categories, skills and dated entries."""

from datetime import date
from enum import Enum
from operator import attrgetter
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar
from portfolio_app.models.content_models import Skill, SkillCategory, SkillCategoryData
from portfolio_app.services.errors import BackendError, OrderConflictError, RecordNotFoundError
from portfolio_app.services.repositories import SkillCategoryRepository


DatedT = TypeVar("DatedT")


class MoveDirection(str, Enum):
    """Direction a category moves in the display order."""

    UP = "up"
    DOWN = "down"


def sort_categories(categories: Iterable[SkillCategory]) -> List[SkillCategory]:
    """Sort categories by ``order`` ascending. Ties keep their input order."""
    return sorted(categories, key=lambda c: c.order)


def sort_skills(skills: Iterable[Skill]) -> List[Skill]:
    """Sort skills by ``order`` ascending. Ties keep their input order."""
    return sorted(skills, key=lambda s: s.order)


def _end_date_key(end_date: Optional[str], today: date) -> date:
    if not end_date:
        return today
    try:
        return date.fromisoformat(end_date[:10])
    except ValueError:
        # unparseable dates sort last
        return date.min


def sort_by_end_date(
    entries: Iterable[DatedT],
    today: Optional[date] = None,
    end_date: Callable[[DatedT], Optional[str]] = attrgetter("end_date")
) -> List[DatedT]:
    """
    Sort experience or education entries, most recent first.

    An entry without an end date is ongoing and sorts as ending today. An
    end date that is not an ISO date sorts after every other entry.

    Args:
        entries: Experience or education records (end dates are ISO strings or None)
        today: Reference date for ongoing entries (defaults to today)
        end_date: Reads an entry's end date (the ``end_date`` attribute by default)

    Returns:
        List: Entries sorted by end date descending
    """
    today = today or date.today()
    return sorted(entries, key=lambda e: _end_date_key(end_date(e), today), reverse=True)


def group_skills_by_category(
    skills: Iterable[Skill],
    categories: Iterable[SkillCategory]
) -> Dict[str, List[Skill]]:
    """
    Group skills under their category name.

    Categories appear in category order; categories without skills are
    left out. Skills naming an unknown category are grouped after the known
    ones, in the order those names first appear.

    Returns:
        Dict[str, List[Skill]]: Category name to skills sorted by skill order
    """
    grouped: Dict[str, List[Skill]] = {c.name: [] for c in sort_categories(categories)}

    for skill in skills:
        grouped.setdefault(skill.category, []).append(skill)

    return {name: sort_skills(items) for name, items in grouped.items() if items}


def get_next_order(categories: Sequence[SkillCategory]) -> int:
    """Suggested order for a new category: one past the highest, or 1."""
    if not categories:
        return 1
    return max(c.order for c in categories) + 1


def plan_category_move(
    categories: Sequence[SkillCategory],
    category_id: str,
    direction: MoveDirection
) -> Optional[Tuple[SkillCategory, SkillCategory]]:
    """
    Work out the swap that moves a category one place.

    Returns:
        The moved category and its neighbour with their orders swapped,
        or None when the category is already at that edge

    Raises:
        RecordNotFoundError: If no category has ``category_id``
    """
    ordered = sort_categories(categories)
    index = next((i for i, c in enumerate(ordered) if c.id == category_id), None)
    if index is None:
        raise RecordNotFoundError(f"Category not found: {category_id}")

    adjacent_index = index - 1 if direction == MoveDirection.UP else index + 1
    if adjacent_index < 0 or adjacent_index >= len(ordered):
        return None

    category = ordered[index]
    adjacent = ordered[adjacent_index]
    return (
        category.model_copy(update={"order": adjacent.order}),
        adjacent.model_copy(update={"order": category.order}),
    )


def _category_data(category: SkillCategory) -> SkillCategoryData:
    return SkillCategoryData(name=category.name, order=category.order)


class CategoryOrdering:
    """Moves skill categories up and down the display order."""

    def __init__(self, categories: SkillCategoryRepository):
        self.categories = categories

    async def _verify_unchanged(self, expected: SkillCategory) -> None:
        current = await self.categories.fetch_one(expected.id)
        if current.order != expected.order:
            raise OrderConflictError(
                f"Category '{expected.name}' changed order from {expected.order} "
                f"to {current.order} while it was being moved"
            )

    async def move(self, category_id: str, direction: MoveDirection) -> List[SkillCategory]:
        """
        Swap a category's order with its neighbour in ``direction``.

        Both categories are re-read before anything is written; if either
        order changed in the meantime an ``OrderConflictError`` is raised and
        nothing is written. If the second write fails, the first is reverted
        before the error is re-raised.

        Returns:
            List[SkillCategory]: All categories, re-sorted, with both updates
            merged in (unchanged when the category is already at the edge)
        """
        current = sort_categories(await self.categories.fetch_all())
        plan = plan_category_move(current, category_id, direction)
        if plan is None:
            return current

        moved, adjacent = plan
        originals = {c.id: c for c in current}
        original_moved = originals[moved.id]
        original_adjacent = originals[adjacent.id]

        await self._verify_unchanged(original_moved)
        await self._verify_unchanged(original_adjacent)

        await self.categories.update(moved.id, _category_data(moved))
        try:
            await self.categories.update(adjacent.id, _category_data(adjacent))
        except BackendError:
            try:
                await self.categories.update(original_moved.id, _category_data(original_moved))
            except BackendError as e:
                print(f"Error reverting order of category {original_moved.id}: {e}")
            raise

        updated = {moved.id: moved, adjacent.id: adjacent}
        return sort_categories(updated.get(c.id, c) for c in current)
