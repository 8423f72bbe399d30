"""Shared fixtures: an in-memory document store and wired-up services."""

import copy
import itertools
from typing import Dict, List, Optional, Set
import pytest
from portfolio_app.services.auth_service import AuthService
from portfolio_app.services.backend import BackendSettings
from portfolio_app.services.content import PortfolioContent
from portfolio_app.services.document_store import Document, DocumentStore
from portfolio_app.services.errors import BackendError
from portfolio_app.services.fallback_catalog import FallbackCatalog, load_fallback_catalog


ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct horse"


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store. Operations named in ``fail`` raise BackendError."""

    def __init__(self, available: bool = True):
        self.available = available
        self.collections: Dict[str, Dict[str, Document]] = {}
        self.fail: Set[str] = set()
        self.fail_on_ids: Set[str] = set()
        self.writes: List[tuple] = []
        self._ids = itertools.count(1)

    def _check(self, operation: str, doc_id: Optional[str] = None) -> None:
        if operation in self.fail or (doc_id is not None and doc_id in self.fail_on_ids):
            raise BackendError(f"{operation} failed")

    def seed(self, collection: str, doc_id: str, data: Document) -> None:
        self.collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)

    async def list_documents(self, collection: str) -> List[Document]:
        self._check("list")
        return [
            {**copy.deepcopy(doc), "id": doc_id}
            for doc_id, doc in self.collections.get(collection, {}).items()
        ]

    async def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        self._check("get")
        doc = self.collections.get(collection, {}).get(doc_id)
        return {**copy.deepcopy(doc), "id": doc_id} if doc is not None else None

    async def add_document(self, collection: str, data: Document) -> str:
        self._check("add")
        doc_id = f"doc{next(self._ids)}"
        self.seed(collection, doc_id, data)
        self.writes.append(("add", collection, doc_id))
        return doc_id

    async def set_document(self, collection, doc_id, data, merge=False) -> None:
        self._check("set", doc_id)
        docs = self.collections.setdefault(collection, {})
        if merge and doc_id in docs:
            docs[doc_id].update(copy.deepcopy(data))
        else:
            docs[doc_id] = copy.deepcopy(data)
        self.writes.append(("set", collection, doc_id))

    async def replace_document(self, collection: str, doc_id: str, data: Document) -> None:
        self._check("replace", doc_id)
        docs = self.collections.setdefault(collection, {})
        if doc_id in docs:
            docs[doc_id] = copy.deepcopy(data)
        self.writes.append(("replace", collection, doc_id))

    async def delete_document(self, collection: str, doc_id: str) -> None:
        self._check("delete", doc_id)
        self.collections.get(collection, {}).pop(doc_id, None)
        self.writes.append(("delete", collection, doc_id))


@pytest.fixture
def catalog() -> FallbackCatalog:
    return load_fallback_catalog()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def offline_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(available=False)


@pytest.fixture
def content(store, catalog) -> PortfolioContent:
    return PortfolioContent(store, catalog)


@pytest.fixture
def offline_content(offline_store, catalog) -> PortfolioContent:
    return PortfolioContent(offline_store, catalog)


@pytest.fixture
def settings() -> BackendSettings:
    return BackendSettings(
        _env_file=None,
        database_url="mongodb://localhost:27017",
        database_name="portfolio_test",
        storage_bucket="/tmp/portfolio-uploads",
        public_base_url="http://test",
        auth_secret="test-secret",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def auth(settings) -> AuthService:
    return AuthService(settings, available=True)


@pytest.fixture
def offline_auth(settings) -> AuthService:
    return AuthService(settings, available=False)
