"""Document store access for portfolio content.

The store exposes flat documents keyed by string ids. ``MongoDocumentStore``
is the real backend; ``UnavailableDocumentStore`` stands in when the backend
is not configured and refuses every call.
"""

from typing import Any, Dict, List, Optional
from bson import ObjectId
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError
from portfolio_app.services.errors import BackendError, BackendUnavailableError


COLLECTION_PROFILE = "profile"
COLLECTION_PROJECTS = "projects"
COLLECTION_SKILLS = "skills"
COLLECTION_SKILL_CATEGORIES = "skillCategories"
COLLECTION_EXPERIENCES = "experiences"
COLLECTION_EDUCATION = "education"
COLLECTION_INTERESTS = "interests"
COLLECTION_SECTIONS = "sections"
COLLECTION_MESSAGES = "messages"

Document = Dict[str, Any]


class DocumentStore:
    """Interface shared by every document store."""

    available: bool = True

    async def list_documents(self, collection: str) -> List[Document]:
        """Return all documents in a collection, each with its ``id`` merged in."""
        raise NotImplementedError

    async def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return one document with its ``id`` merged in, or None if missing."""
        raise NotImplementedError

    async def add_document(self, collection: str, data: Document) -> str:
        """Insert a document and return the id assigned to it."""
        raise NotImplementedError

    async def set_document(
        self,
        collection: str,
        doc_id: str,
        data: Document,
        merge: bool = False
    ) -> None:
        """Create or overwrite a document under a known id.

        With ``merge`` the given fields are written into the existing
        document instead of replacing it.
        """
        raise NotImplementedError

    async def replace_document(self, collection: str, doc_id: str, data: Document) -> None:
        """Overwrite an existing document. Missing documents are left alone."""
        raise NotImplementedError

    async def delete_document(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing id is a no-op."""
        raise NotImplementedError


class UnavailableDocumentStore(DocumentStore):
    """Store used when the backend is not configured."""

    available = False

    def __init__(self, reason: str = "Backend is not configured"):
        self.reason = reason

    def _refuse(self) -> BackendUnavailableError:
        return BackendUnavailableError(f"Backend is not available: {self.reason}")

    async def list_documents(self, collection: str) -> List[Document]:
        raise self._refuse()

    async def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        raise self._refuse()

    async def add_document(self, collection: str, data: Document) -> str:
        raise self._refuse()

    async def set_document(
        self,
        collection: str,
        doc_id: str,
        data: Document,
        merge: bool = False
    ) -> None:
        raise self._refuse()

    async def replace_document(self, collection: str, doc_id: str, data: Document) -> None:
        raise self._refuse()

    async def delete_document(self, collection: str, doc_id: str) -> None:
        raise self._refuse()


def _to_record(doc: Document) -> Document:
    """Move Mongo's ``_id`` into an ``id`` key."""
    record = {k: v for k, v in doc.items() if k != "_id"}
    record["id"] = str(doc["_id"])
    return record


class MongoDocumentStore(DocumentStore):
    """Document store backed by MongoDB.

    Ids are stored as strings so that fixed ids (the profile document,
    section keys, seeded categories) and generated ids share one format.
    """

    def __init__(self, client: AsyncMongoClient, database_name: str):
        self.client = client
        self.db = client[database_name]

    async def list_documents(self, collection: str) -> List[Document]:
        try:
            return [_to_record(doc) async for doc in self.db[collection].find({})]
        except PyMongoError as e:
            raise BackendError(f"Failed to list {collection}: {str(e)}") from e

    async def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        try:
            doc = await self.db[collection].find_one({"_id": doc_id})
        except PyMongoError as e:
            raise BackendError(f"Failed to read {collection}/{doc_id}: {str(e)}") from e
        return _to_record(doc) if doc is not None else None

    async def add_document(self, collection: str, data: Document) -> str:
        doc_id = str(ObjectId())
        try:
            await self.db[collection].insert_one({**data, "_id": doc_id})
        except PyMongoError as e:
            raise BackendError(f"Failed to add to {collection}: {str(e)}") from e
        return doc_id

    async def set_document(
        self,
        collection: str,
        doc_id: str,
        data: Document,
        merge: bool = False
    ) -> None:
        try:
            if merge:
                await self.db[collection].update_one(
                    {"_id": doc_id}, {"$set": data}, upsert=True
                )
            else:
                await self.db[collection].replace_one(
                    {"_id": doc_id}, data, upsert=True
                )
        except PyMongoError as e:
            raise BackendError(f"Failed to write {collection}/{doc_id}: {str(e)}") from e

    async def replace_document(self, collection: str, doc_id: str, data: Document) -> None:
        try:
            await self.db[collection].replace_one({"_id": doc_id}, data)
        except PyMongoError as e:
            raise BackendError(f"Failed to update {collection}/{doc_id}: {str(e)}") from e

    async def delete_document(self, collection: str, doc_id: str) -> None:
        try:
            await self.db[collection].delete_one({"_id": doc_id})
        except PyMongoError as e:
            raise BackendError(f"Failed to delete {collection}/{doc_id}: {str(e)}") from e
