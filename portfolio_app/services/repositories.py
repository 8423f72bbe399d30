"""Repositories for portfolio content records.

Reads never raise backend errors: when the backend is unavailable, fails,
or holds no documents for a collection, the default records are returned
instead (never merged with partial real data). Writes require the backend
and let failures propagate to the caller.
"""

from datetime import datetime, timezone
from typing import Callable, Generic, List, Type, TypeVar
from pydantic import BaseModel
from portfolio_app.models.content_models import (
    ContactForm,
    ContactMessage,
    Profile,
    Project,
    ProjectData,
    SkillCategory,
    SkillCategoryData,
)
from portfolio_app.services.document_store import (
    COLLECTION_MESSAGES,
    COLLECTION_PROFILE,
    Document,
    DocumentStore,
)
from portfolio_app.services.errors import (
    BackendError,
    BackendUnavailableError,
    RecordNotFoundError,
)


RecordT = TypeVar("RecordT", bound=BaseModel)
DataT = TypeVar("DataT", bound=BaseModel)

PROFILE_DOC_ID = "main"


def to_document(data: BaseModel) -> Document:
    """Serialise a model to the stored (camelCase) document shape, without its id."""
    return data.model_dump(by_alias=True, mode="json", exclude={"id"})


class RecordRepository(Generic[RecordT, DataT]):
    """Fetch, add, update and delete one kind of record."""

    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        record_model: Type[RecordT],
        fallback: Callable[[], List[RecordT]],
        label: str,
        plural: str
    ):
        """
        Initialize the repository.

        Args:
            store: Document store to read from and write to
            collection: Collection name in the store
            record_model: Model of a stored record (including its id)
            fallback: Returns the default records for this collection
            label: Singular name used in messages ("project")
            plural: Plural name used in messages ("projects")
        """
        self.store = store
        self.collection = collection
        self.record_model = record_model
        self.fallback = fallback
        self.label = label
        self.plural = plural

    def _require_backend(self, action: str) -> None:
        if not self.store.available:
            raise BackendUnavailableError(
                f"Backend is not available. Cannot {action} {self.label}."
            )

    def _to_record(self, doc: Document) -> RecordT:
        return self.record_model.model_validate(doc)

    async def _on_empty(self) -> List[RecordT]:
        return self.fallback()

    async def fetch_all(self) -> List[RecordT]:
        """
        Fetch every record in the collection.

        Returns:
            List[RecordT]: Stored records, or the default records when the
            backend is unavailable, fails, or the collection is empty
        """
        if not self.store.available:
            print(f"Warning: Backend is not available. Using default {self.plural} data.")
            return self.fallback()

        try:
            docs = await self.store.list_documents(self.collection)
            if not docs:
                return await self._on_empty()
            return [self._to_record(doc) for doc in docs]
        except Exception as e:
            print(f"Warning: Error fetching {self.plural}: {e}. Using default data.")
            return self.fallback()

    async def fetch_one(self, record_id: str) -> RecordT:
        """
        Fetch a single record.

        Raises:
            BackendUnavailableError: If the backend is not available
            RecordNotFoundError: If no record has this id
            BackendError: If the backend read fails
        """
        self._require_backend("fetch")

        try:
            doc = await self.store.get_document(self.collection, record_id)
        except BackendError as e:
            print(f"Error fetching {self.label}: {e}")
            raise

        if doc is None:
            raise RecordNotFoundError(f"{self.label.capitalize()} not found: {record_id}")
        return self._to_record(doc)

    async def add(self, data: DataT) -> RecordT:
        """
        Add a record. The backend assigns its id.

        Returns:
            RecordT: The given data joined with the new id
        """
        self._require_backend("add")

        try:
            record_id = await self.store.add_document(self.collection, to_document(data))
        except BackendError as e:
            print(f"Error adding {self.label}: {e}")
            raise

        return self.record_model(id=record_id, **data.model_dump(exclude={"id"}))

    async def update(self, record_id: str, data: DataT) -> RecordT:
        """
        Replace a record's fields with ``data``.

        This is a full replace, not a patch: callers pass the complete
        record. The backend is not re-read, so the result is exactly
        ``{id, ...data}``.
        """
        self._require_backend("update")

        try:
            await self.store.replace_document(self.collection, record_id, to_document(data))
        except BackendError as e:
            print(f"Error updating {self.label}: {e}")
            raise

        return self.record_model(id=record_id, **data.model_dump(exclude={"id"}))

    async def delete(self, record_id: str) -> None:
        """Delete a record. Deleting an unknown id is a silent no-op."""
        self._require_backend("delete")

        try:
            await self.store.delete_document(self.collection, record_id)
        except BackendError as e:
            print(f"Error deleting {self.label}: {e}")
            raise


class ProjectRepository(RecordRepository[Project, ProjectData]):
    """Projects; fetch-by-id also resolves default projects while offline."""

    async def fetch_one(self, record_id: str) -> Project:
        if not self.store.available:
            for project in self.fallback():
                if project.id == record_id:
                    return project
            raise RecordNotFoundError(f"Project not found: {record_id}")
        return await super().fetch_one(record_id)


class SkillCategoryRepository(RecordRepository[SkillCategory, SkillCategoryData]):
    """Skill categories; an empty collection is seeded with the defaults."""

    async def _on_empty(self) -> List[SkillCategory]:
        defaults = self.fallback()
        try:
            for category in defaults:
                await self.store.set_document(
                    self.collection, category.id, to_document(category)
                )
        except Exception as e:
            print(f"Warning: Error creating default categories: {e}")
        return defaults


class ProfileRepository:
    """The single profile document."""

    def __init__(self, store: DocumentStore, fallback: Callable[[], Profile]):
        self.store = store
        self.fallback = fallback

    async def fetch(self) -> Profile:
        """
        Fetch the profile.

        Returns:
            Profile: Stored profile, or the default profile when the backend
            is unavailable, fails, or holds no profile document
        """
        if not self.store.available:
            print("Warning: Backend is not available. Using default profile data.")
            return self.fallback()

        try:
            doc = await self.store.get_document(COLLECTION_PROFILE, PROFILE_DOC_ID)
            if doc is None:
                print("Warning: No profile document exists. Using default profile data.")
                return self.fallback()
            return Profile.model_validate(doc)
        except Exception as e:
            print(f"Warning: Error fetching profile: {e}. Using default data.")
            return self.fallback()

    async def update(self, profile: Profile) -> Profile:
        """Overwrite the profile document with ``profile``."""
        if not self.store.available:
            raise BackendUnavailableError("Backend is not available. Cannot update profile.")

        try:
            await self.store.set_document(COLLECTION_PROFILE, PROFILE_DOC_ID, to_document(profile))
        except BackendError as e:
            print(f"Error updating profile: {e}")
            raise
        return profile


class ContactMessageRepository:
    """Write-only store for contact form submissions."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def submit(self, form: ContactForm) -> ContactMessage:
        """
        Store a contact message, stamped with its creation time and unread.

        Raises:
            BackendUnavailableError: If the backend is not available
            BackendError: If the write fails
        """
        if not self.store.available:
            raise BackendUnavailableError("Backend is not available. Cannot send message.")

        message = {
            **form.model_dump(),
            "created_at": datetime.now(timezone.utc).isoformat(),
            "read": False,
        }
        try:
            message_id = await self.store.add_document(
                COLLECTION_MESSAGES, to_document(ContactMessage(id="", **message))
            )
        except BackendError as e:
            print(f"Error submitting contact form: {e}")
            raise
        return ContactMessage(id=message_id, **message)
