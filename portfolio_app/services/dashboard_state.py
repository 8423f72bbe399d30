"""Local list state for the admin dashboard.

The dashboard changes its local copy of a list first and sends the write
afterwards. Every kind of change follows the same rule when the write
fails: the list is re-fetched from the backend (falling back to the copy
taken before the change if that fetch fails too) and the write's error is
re-raised so the caller can show it.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar
from portfolio_app.models.content_models import SkillCategory
from portfolio_app.services.ordering import MoveDirection, plan_category_move


Record = Dict[str, Any]
ResultT = TypeVar("ResultT")


class OptimisticList:
    """A locally held, optimistically updated copy of one collection."""

    def __init__(
        self,
        load: Callable[[], List[Record]],
        sort_key: Optional[Callable[[Record], Any]] = None
    ):
        """
        Initialize the list.

        Args:
            load: Fetches the collection from the backend
            sort_key: Display order of the records (insertion order if None)
        """
        self._load = load
        self.sort_key = sort_key
        self.items: List[Record] = []

    def _sorted(self, items: List[Record]) -> List[Record]:
        if self.sort_key is None:
            return list(items)
        return sorted(items, key=self.sort_key)

    def refresh(self) -> List[Record]:
        """Replace the local copy with the backend's."""
        self.items = self._sorted(self._load())
        return self.items

    def _rollback(self, snapshot: List[Record]) -> None:
        try:
            self.refresh()
        except Exception as e:
            print(f"Warning: Could not re-fetch after a failed write: {e}")
            self.items = snapshot

    def _apply(
        self,
        change: Callable[[List[Record]], List[Record]],
        write: Callable[[], ResultT]
    ) -> ResultT:
        snapshot = list(self.items)
        self.items = self._sorted(change(list(self.items)))
        try:
            return write()
        except Exception:
            self._rollback(snapshot)
            raise

    def find(self, record_id: str) -> Optional[Record]:
        return next((item for item in self.items if item.get("id") == record_id), None)

    def add(self, data: Record, write: Callable[[Record], Record]) -> Record:
        """
        Show a new record straight away, then save it.

        Args:
            data: Record fields without an id
            write: Saves the record and returns it with its assigned id

        Returns:
            Record: The saved record
        """
        pending = {**data, "id": None}
        saved = self._apply(lambda items: items + [pending], lambda: write(data))
        self.items = self._sorted([saved if item is pending else item for item in self.items])
        return saved

    def update(
        self,
        record_id: str,
        data: Record,
        write: Callable[[Record], ResultT]
    ) -> ResultT:
        """Apply ``data`` to a record locally, then save it."""
        def change(items: List[Record]) -> List[Record]:
            return [{**item, **data} if item.get("id") == record_id else item for item in items]

        return self._apply(change, lambda: write(data))

    def remove(self, record_id: str, write: Callable[[], Any]) -> None:
        """Drop a record locally, then delete it."""
        self._apply(
            lambda items: [item for item in items if item.get("id") != record_id],
            write,
        )


class CategoryList(OptimisticList):
    """Skill categories, kept in display order."""

    def __init__(self, load: Callable[[], List[Record]]):
        super().__init__(load, sort_key=lambda c: c.get("order", 0))

    def next_order(self) -> int:
        orders = [item.get("order", 0) for item in self.items if item.get("id") is not None]
        return max(orders) + 1 if orders else 1

    def move(
        self,
        category_id: str,
        direction: MoveDirection,
        write: Callable[[], List[Record]]
    ) -> List[Record]:
        """
        Swap a category with its neighbour locally, then send the move.

        Args:
            category_id: Category to move
            direction: Up or down
            write: Sends the move and returns every category as stored

        Returns:
            List[Record]: Categories in display order
        """
        categories = [SkillCategory.model_validate(item) for item in self.items]
        plan = plan_category_move(categories, category_id, direction)
        if plan is None:
            return self.items

        swapped = {c.id: c.model_dump(by_alias=True) for c in plan}
        saved = self._apply(
            lambda items: [swapped.get(item["id"], item) for item in items],
            write,
        )
        self.items = self._sorted(saved)
        return self.items


class UploadCache:
    """Remembers uploaded files so a file is sent to storage only once.

    Streamlit keeps returning a submitted file on every rerun; the cache
    maps (field, file id) to the URL the first upload returned.
    """

    def __init__(self):
        self._urls: Dict[Tuple[str, str], str] = {}

    def upload_once(self, field: str, file_id: str, upload: Callable[[], str]) -> str:
        """
        Upload a file unless this field already uploaded it.

        Args:
            field: Form field the file was chosen in
            file_id: Identifier of the chosen file
            upload: Sends the file and returns its public URL

        Returns:
            str: The file's public URL
        """
        key = (field, file_id)
        if key not in self._urls:
            self._urls[key] = upload()
        return self._urls[key]
